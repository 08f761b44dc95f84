"""
Plain text previews of imported records and labels.
"""

# local repo modules
import product_label_sheet as pls
import product_label_sheet.config
import product_label_sheet.fields
import product_label_sheet.records


PREVIEW_RECORD_LIMIT = pls.config.PREVIEW_RECORD_LIMIT
PREVIEW_LABEL_LIMIT = pls.config.PREVIEW_LABEL_LIMIT
PREVIEW_DESCRIPTION_PLACEHOLDER = pls.config.PREVIEW_DESCRIPTION_PLACEHOLDER
MAX_CELL_WIDTH = 24


#============================================
def label_total_message(records: list[dict[str, object]]) -> str | None:
	"""
	Build the info line shown when counts expand the record set.

	Args:
		records: Source records.

	Returns:
		Info message, or None when every record prints once.
	"""
	total_labels = pls.records.count_labels(records)
	if total_labels <= len(records):
		return None
	return (
		f"Info: {len(records)} records will generate {total_labels} labels "
		"based on LabelCount values."
	)


#============================================
def truncate_cell(value: str, width: int = MAX_CELL_WIDTH) -> str:
	"""
	Shorten a table cell to width characters with a trailing ellipsis.
	"""
	if len(value) <= width:
		return value
	return value[: width - 3] + "..."


#============================================
def format_record_table(
	records: list[dict[str, object]],
	limit: int = PREVIEW_RECORD_LIMIT,
) -> str:
	"""
	Format the first records as a text table.

	Column headers come from the first record, like a spreadsheet header row.

	Args:
		records: Source records.
		limit: Maximum number of rows to show.

	Returns:
		Multi-line table text, empty when there are no records.
	"""
	if not records:
		return ""
	shown = records[:limit]
	headers = list(shown[0].keys())
	rows: list[list[str]] = []
	for record in shown:
		row = []
		for key in headers:
			value = record.get(key)
			text = "" if value is None else pls.fields.format_scalar(value)
			row.append(truncate_cell(text))
		rows.append(row)
	widths = [len(header) for header in headers]
	for row in rows:
		for column, cell in enumerate(row):
			widths[column] = max(widths[column], len(cell))

	def join_cells(cells: list[str]) -> str:
		return " | ".join(cell.ljust(widths[column]) for column, cell in enumerate(cells)).rstrip()

	lines = [join_cells(headers), "-+-".join("-" * width for width in widths)]
	lines.extend(join_cells(row) for row in rows)
	lines.append(f"Showing {len(shown)} of {len(records)} items")
	return "\n".join(lines)


#============================================
def format_label_previews(
	records: list[dict[str, object]],
	currency: str = "",
	limit: int = PREVIEW_LABEL_LIMIT,
) -> str:
	"""
	Describe the first few labels as they will print.

	Args:
		records: Source records, before expansion.
		currency: Currency prefix.
		limit: Maximum number of labels.

	Returns:
		Multi-line preview text.
	"""
	blocks: list[str] = []
	for index, record in enumerate(records[:limit]):
		fields = pls.fields.resolve_label(record, index, currency)
		description = fields.description or PREVIEW_DESCRIPTION_PLACEHOLDER
		blocks.append(
			f"[{index + 1}] {fields.price}\n"
			f"    {description}\n"
			f"    {fields.code}"
		)
	return "\n".join(blocks)
