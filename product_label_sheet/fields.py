"""
Display field resolution for label records.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import product_label_sheet as pls
import product_label_sheet.records


PRICE_KEYS = ("Price", "price", "PRICE")
DESCRIPTION_KEYS = ("Description", "description", "DESC", "Name", "name")
CODE_KEYS = ("Code", "code", "ID", "id", "ItemNumber")

is_blank = pls.records.is_blank


@dataclasses.dataclass(frozen=True)
class LabelFields:
	price: str
	description: str
	code: str


#============================================
def lookup_first(
	record: dict[str, object],
	keys: tuple[str, ...],
	skip_blank: bool,
) -> object | None:
	"""
	Return the value of the first matching key in a fallback chain.

	Args:
		record: Source record.
		keys: Candidate key names in priority order.
		skip_blank: Also skip present but empty values.

	Returns:
		First matching value, or None.
	"""
	for key in keys:
		if key not in record:
			continue
		value = record[key]
		if value is None:
			continue
		if skip_blank and is_blank(value):
			continue
		return value
	return None


#============================================
def format_scalar(value: object) -> str:
	"""
	Format a cell value for display.

	Args:
		value: Cell value.

	Returns:
		Display string; integral floats drop their ".0".
	"""
	if isinstance(value, float) and math.isfinite(value) and value.is_integer():
		return str(int(value))
	return str(value).strip()


#============================================
def parse_amount(value: object) -> float:
	"""
	Parse a price value, falling back to zero.
	"""
	if isinstance(value, bool):
		return 0.0
	try:
		if isinstance(value, str):
			amount = float(value.strip().replace(",", ""))
		else:
			amount = float(value)
	except (TypeError, ValueError):
		return 0.0
	if not math.isfinite(amount):
		return 0.0
	return amount


#============================================
def format_price(amount: float, currency: str = "") -> str:
	"""
	Format an amount as grouped currency with two decimals.

	Args:
		amount: Numeric amount.
		currency: Optional prefix such as "$" or "EUR".

	Returns:
		Formatted price string.
	"""
	text = f"{amount:,.2f}"
	prefix = (currency or "").strip()
	if prefix:
		text = f"{prefix} {text}"
	return text.strip()


#============================================
def resolve_price(record: dict[str, object], currency: str = "") -> str:
	"""
	Resolve the formatted price of a record.

	Args:
		record: Source record.
		currency: Optional currency prefix.

	Returns:
		Formatted price, "0.00" when missing or invalid.
	"""
	value = lookup_first(record, PRICE_KEYS, skip_blank=False)
	amount = 0.0 if value is None else parse_amount(value)
	return format_price(amount, currency)


#============================================
def resolve_description(record: dict[str, object]) -> str:
	"""
	Resolve the description of a record, or an empty string.
	"""
	value = lookup_first(record, DESCRIPTION_KEYS, skip_blank=True)
	if value is None:
		return ""
	return format_scalar(value)


#============================================
def resolve_code(record: dict[str, object], fallback_index: int) -> str:
	"""
	Resolve the item code of a record.

	Args:
		record: Source record.
		fallback_index: 0-based position in the expanded sequence.

	Returns:
		Code string, or the 1-based position when no code is present.
	"""
	value = lookup_first(record, CODE_KEYS, skip_blank=True)
	if value is None:
		return str(fallback_index + 1)
	return format_scalar(value)


#============================================
def resolve_label(record: dict[str, object], index: int, currency: str = "") -> LabelFields:
	"""
	Resolve all three display fields of one label instance.

	Args:
		record: Source record.
		index: 0-based position in the expanded sequence.
		currency: Optional currency prefix.

	Returns:
		LabelFields.
	"""
	return LabelFields(
		price=resolve_price(record, currency),
		description=resolve_description(record),
		code=resolve_code(record, index),
	)
