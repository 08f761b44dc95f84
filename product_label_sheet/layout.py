"""
Grid placement and pagination for label sheets.
"""

# Standard Library
import dataclasses
import typing

# local repo modules
import product_label_sheet as pls
import product_label_sheet.config


LayoutConfig = pls.config.LayoutConfig


@dataclasses.dataclass(frozen=True)
class Placement:
	index: int
	page: int
	row: int
	col: int
	x: float
	y: float
	page_break: bool


#============================================
def compute_placement(index: int, config: LayoutConfig) -> Placement:
	"""
	Map a label index to its page slot.

	Coordinates are millimeters from the top-left page corner. The page
	cycle is labels_per_page, even when it is not a multiple of columns.

	Args:
		index: 0-based label index in the expanded sequence.
		config: Layout configuration.

	Returns:
		Placement for the label.
	"""
	if index < 0:
		raise ValueError(f"label index must be non-negative, got {index}")
	position_on_page = index % config.labels_per_page
	row = position_on_page // config.columns
	col = position_on_page % config.columns
	x = config.margin_left + col * (config.label_width + config.column_gap)
	y = config.margin_top + row * (config.label_height + config.row_gap)
	return Placement(
		index=index,
		page=index // config.labels_per_page,
		row=row,
		col=col,
		x=x,
		y=y,
		page_break=(position_on_page == 0 and index > 0),
	)


#============================================
def iter_placements(count: int, config: LayoutConfig) -> typing.Iterator[Placement]:
	"""
	Yield placements for label indices 0 through count - 1.
	"""
	for index in range(count):
		yield compute_placement(index, config)


#============================================
def count_pages(count: int, config: LayoutConfig) -> int:
	"""
	Count pages needed for a number of labels.

	Args:
		count: Number of label instances.
		config: Layout configuration.

	Returns:
		Page count, 0 for no labels.
	"""
	if count <= 0:
		return 0
	return (count + config.labels_per_page - 1) // config.labels_per_page


#============================================
def find_overflowing_slots(config: LayoutConfig) -> list[tuple[int, int]]:
	"""
	List page slots whose label box extends past the page edge.

	Placement is not clamped; this only reports.

	Args:
		config: Layout configuration.

	Returns:
		List of (row, col) slots outside the page.
	"""
	overflowing: list[tuple[int, int]] = []
	epsilon = 0.001
	for placement in iter_placements(config.labels_per_page, config):
		right = placement.x + config.label_width
		bottom = placement.y + config.label_height
		if right > config.page_width + epsilon or bottom > config.page_height + epsilon:
			overflowing.append((placement.row, placement.col))
	return overflowing
