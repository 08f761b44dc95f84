import product_label_sheet.fields as fields


#============================================
def test_price_grouping_with_currency() -> None:
	assert fields.resolve_price({"Price": 1095.5}, "$") == "$ 1,095.50"


#============================================
def test_price_missing_defaults_to_zero() -> None:
	assert fields.resolve_price({}) == "0.00"
	assert fields.resolve_price({"Description": "Soap"}, "EUR") == "EUR 0.00"


#============================================
def test_price_key_priority() -> None:
	record = {"PRICE": 3, "price": 2, "Price": 1}
	assert fields.resolve_price(record) == "1.00"
	assert fields.resolve_price({"PRICE": 3, "price": 2}) == "2.00"
	assert fields.resolve_price({"PRICE": 3}) == "3.00"


#============================================
def test_zero_price_is_kept() -> None:
	"""
	A present zero must not fall through to the next key.
	"""
	assert fields.resolve_price({"Price": 0, "price": 99}) == "0.00"


#============================================
def test_none_price_falls_through() -> None:
	assert fields.resolve_price({"Price": None, "price": 4.25}) == "4.25"


#============================================
def test_invalid_price_formats_as_zero() -> None:
	assert fields.resolve_price({"Price": "n/a"}) == "0.00"
	assert fields.resolve_price({"Price": float("inf")}, "$") == "$ 0.00"
	assert fields.resolve_price({"Price": float("nan")}) == "0.00"


#============================================
def test_string_prices_parse() -> None:
	assert fields.resolve_price({"Price": " 12.5 "}) == "12.50"
	assert fields.resolve_price({"Price": "1,234.5"}) == "1,234.50"
	assert fields.resolve_price({"Price": 1234567.891}) == "1,234,567.89"


#============================================
def test_blank_currency_adds_no_prefix() -> None:
	assert fields.resolve_price({"Price": 5}, "   ") == "5.00"
	assert fields.resolve_price({"Price": 5}, " kr ") == "kr 5.00"


#============================================
def test_description_fallback_chain() -> None:
	assert fields.resolve_description({"Name": "Mug", "DESC": "Blue mug"}) == "Blue mug"
	assert fields.resolve_description({"Description": "", "name": "Cup"}) == "Cup"
	assert fields.resolve_description({"description": "Plate", "Name": "X"}) == "Plate"
	assert fields.resolve_description({}) == ""


#============================================
def test_code_fallback_chain() -> None:
	assert fields.resolve_code({"ItemNumber": "IN-7", "id": 4}, 0) == "4"
	assert fields.resolve_code({"Code": "C-1", "ID": "X"}, 0) == "C-1"
	assert fields.resolve_code({"code": ""}, 2) == "3"


#============================================
def test_missing_code_and_description_use_defaults() -> None:
	label = fields.resolve_label({"Price": 1}, 4)
	assert label.code == "5"
	assert label.description == ""
	assert label.price == "1.00"


#============================================
def test_integral_floats_display_without_decimal() -> None:
	assert fields.resolve_code({"Code": 1001.0}, 0) == "1001"
	assert fields.resolve_code({"Code": 10.25}, 0) == "10.25"


#============================================
def test_lookup_first_presence_vs_blank() -> None:
	record = {"a": "", "b": "value"}
	assert fields.lookup_first(record, ("a", "b"), skip_blank=False) == ""
	assert fields.lookup_first(record, ("a", "b"), skip_blank=True) == "value"
	assert fields.lookup_first(record, ("z",), skip_blank=True) is None
