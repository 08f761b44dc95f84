"""
Spreadsheet reading and label count expansion.
"""

# Standard Library
import math
import pathlib
import re
import zipfile

# PIP3 modules
import openpyxl.utils.exceptions
import pandas


COUNT_KEYS = ("LabelCount", "labelcount", "Quantity", "quantity")
SPREADSHEET_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv"}
LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


#============================================
def is_blank(value: object) -> bool:
	"""
	Check whether a cell value counts as empty.

	Args:
		value: Cell value.

	Returns:
		True for None, NaN, and whitespace-only strings.
	"""
	if value is None:
		return True
	if isinstance(value, float) and math.isnan(value):
		return True
	if isinstance(value, str) and not value.strip():
		return True
	return False


#============================================
def clean_cell(value: object) -> object:
	"""
	Convert a pandas cell to a plain Python scalar.

	Args:
		value: Cell value from a DataFrame.

	Returns:
		Python scalar, or None for missing cells.
	"""
	if value is None:
		return None
	try:
		if pandas.isna(value):
			return None
	except (TypeError, ValueError):
		return value
	if hasattr(value, "item"):
		# numpy scalar
		return value.item()
	return value


#============================================
def frame_to_records(frame: pandas.DataFrame) -> list[dict[str, object]]:
	"""
	Turn a DataFrame into source records, leaving out empty cells.

	Args:
		frame: DataFrame read from the first sheet.

	Returns:
		List of records, one per row.
	"""
	records: list[dict[str, object]] = []
	columns = [str(column) for column in frame.columns]
	for row in frame.itertuples(index=False, name=None):
		record: dict[str, object] = {}
		for key, raw_value in zip(columns, row):
			value = clean_cell(raw_value)
			if value is None:
				continue
			record[key] = value
		records.append(record)
	return records


#============================================
def read_records(path: pathlib.Path) -> list[dict[str, object]]:
	"""
	Read source records from the first sheet of a workbook or a CSV file.

	Args:
		path: Input file path.

	Returns:
		List of records.

	Raises:
		FileNotFoundError: When the input file does not exist.
		ValueError: When the file type is unsupported or cannot be parsed.
	"""
	path = pathlib.Path(path)
	if not path.is_file():
		raise FileNotFoundError(f"Input file not found: {path}")
	suffix = path.suffix.lower()
	if suffix not in SPREADSHEET_SUFFIXES and suffix not in CSV_SUFFIXES:
		raise ValueError(f"Unsupported input type: {path.suffix or '(none)'}")
	try:
		if suffix in CSV_SUFFIXES:
			frame = pandas.read_csv(path)
		else:
			frame = pandas.read_excel(path, sheet_name=0, engine="openpyxl")
	except pandas.errors.EmptyDataError:
		return []
	except (
		ValueError,
		ImportError,
		OSError,
		KeyError,
		zipfile.BadZipFile,
		openpyxl.utils.exceptions.InvalidFileException,
	) as error:
		raise ValueError(f"Could not read {path.name}: {error}") from error
	return frame_to_records(frame)


#============================================
def parse_leading_int(value: object) -> int | None:
	"""
	Parse the leading integer of a cell value.

	Args:
		value: Number or string.

	Returns:
		Integer truncated toward zero, or None when not numeric.
	"""
	if isinstance(value, bool):
		return int(value)
	if isinstance(value, int):
		return value
	if isinstance(value, float):
		if not math.isfinite(value):
			return None
		return int(value)
	match = LEADING_INT_PATTERN.match(str(value))
	if match is None:
		return None
	return int(match.group(1))


#============================================
def resolve_label_count(record: dict[str, object]) -> int:
	"""
	Resolve how many labels a record produces.

	Args:
		record: Source record.

	Returns:
		Copy count, at least 1.
	"""
	for key in COUNT_KEYS:
		value = record.get(key)
		if is_blank(value):
			continue
		count = parse_leading_int(value)
		if count is None:
			return 1
		return max(1, count)
	return 1


#============================================
def expand_records(records: list[dict[str, object]]) -> list[dict[str, object]]:
	"""
	Repeat each record by its label count.

	Args:
		records: Source records.

	Returns:
		Expanded list; repeats are the same record object.
	"""
	expanded: list[dict[str, object]] = []
	for record in records:
		expanded.extend([record] * resolve_label_count(record))
	return expanded


#============================================
def count_labels(records: list[dict[str, object]]) -> int:
	"""
	Count label instances without expanding.
	"""
	return sum(resolve_label_count(record) for record in records)
