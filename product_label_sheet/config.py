"""
Shared configuration and constants.
"""

import dataclasses
import math


POINTS_PER_MM = 72.0 / 25.4

DEFAULT_LABELS_PER_PAGE = 12
DEFAULT_COLUMNS = 3
DEFAULT_PAGE_WIDTH = 210.0
DEFAULT_PAGE_HEIGHT = 297.0
DEFAULT_LABEL_WIDTH = 50.0
DEFAULT_LABEL_HEIGHT = 40.0
DEFAULT_MARGIN_TOP = 10.0
DEFAULT_MARGIN_LEFT = 10.0
DEFAULT_COLUMN_GAP = 10.0
DEFAULT_ROW_GAP = 10.0
DEFAULT_CURRENCY = ""
DEFAULT_OUTPUT_NAME = "product-labels.pdf"

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
PRICE_FONT_SIZE = 16.0
DESCRIPTION_FONT_SIZE = 10.0
CODE_FONT_SIZE = 12.0

# label box geometry, millimeters from the label top edge
PRICE_BASELINE_OFFSET = 6.0
CODE_BASELINE_INSET = 2.0
DESCRIPTION_SIDE_PADDING = 10.0
DESCRIPTION_LINE_HEIGHT = 3.5
DESCRIPTION_BASELINE_SHIFT = 3.0

BACKGROUND_RGB = (240, 240, 240)
BORDER_RGB = (200, 200, 200)
TEXT_RGB = (0, 0, 0)

PREVIEW_RECORD_LIMIT = 6
PREVIEW_LABEL_LIMIT = 4
PREVIEW_DESCRIPTION_PLACEHOLDER = "Product Description"
PREVIEW_DPI = 110
PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 10


@dataclasses.dataclass
class LayoutConfig:
	labels_per_page: int = DEFAULT_LABELS_PER_PAGE
	page_width: float = DEFAULT_PAGE_WIDTH
	page_height: float = DEFAULT_PAGE_HEIGHT
	label_width: float = DEFAULT_LABEL_WIDTH
	label_height: float = DEFAULT_LABEL_HEIGHT
	margin_top: float = DEFAULT_MARGIN_TOP
	margin_left: float = DEFAULT_MARGIN_LEFT
	column_gap: float = DEFAULT_COLUMN_GAP
	row_gap: float = DEFAULT_ROW_GAP
	columns: int = DEFAULT_COLUMNS
	currency: str = DEFAULT_CURRENCY

	@property
	def rows_per_page(self) -> int:
		# informational only, pagination cycles on labels_per_page
		return self.labels_per_page // self.columns

	#============================================
	def validate(self) -> None:
		"""
		Check the layout invariants.

		Raises:
			ValueError: If a count or length is out of range or not finite.
		"""
		lengths = {
			"page_width": self.page_width,
			"page_height": self.page_height,
			"label_width": self.label_width,
			"label_height": self.label_height,
			"margin_top": self.margin_top,
			"margin_left": self.margin_left,
			"column_gap": self.column_gap,
			"row_gap": self.row_gap,
		}
		for name, value in lengths.items():
			if not math.isfinite(value):
				raise ValueError(f"{name} must be a finite number, got {value}")
		if self.columns < 1:
			raise ValueError(f"columns must be at least 1, got {self.columns}")
		if self.labels_per_page < 1:
			raise ValueError(f"labels_per_page must be at least 1, got {self.labels_per_page}")
		if self.label_width <= 0.0 or self.label_height <= 0.0:
			raise ValueError(
				f"label size must be positive, got {self.label_width} x {self.label_height}"
			)
		if self.page_width <= 0.0 or self.page_height <= 0.0:
			raise ValueError(
				f"page size must be positive, got {self.page_width} x {self.page_height}"
			)


@dataclasses.dataclass
class GenerationResult:
	source_records: int
	total_labels: int
	pages: int
	labels_per_page: int
	output_path: str


#============================================
def build_layout_config(**overrides) -> LayoutConfig:
	"""
	Build a validated layout config from defaults plus overrides.

	Args:
		overrides: LayoutConfig field values to replace.

	Returns:
		LayoutConfig.
	"""
	config = LayoutConfig(**overrides)
	config.columns = int(config.columns)
	config.labels_per_page = int(config.labels_per_page)
	config.currency = (config.currency or "").strip()
	config.validate()
	return config


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to points.

	Args:
		value: Millimeters value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_MM


#============================================
def points_to_mm(value: float) -> float:
	"""
	Convert points to millimeters.
	"""
	return value / POINTS_PER_MM
