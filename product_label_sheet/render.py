"""
Label drawing and PDF output.
"""

# Standard Library
import io
import json
import os
import pathlib
import tempfile

# PIP3 modules
import fitz
import PIL.Image
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfgen.canvas

# local repo modules
import product_label_sheet as pls
import product_label_sheet.config
import product_label_sheet.fields
import product_label_sheet.layout
import product_label_sheet.records


LayoutConfig = pls.config.LayoutConfig
GenerationResult = pls.config.GenerationResult
LabelFields = pls.fields.LabelFields

DEFAULT_FONT_REGULAR = pls.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = pls.config.DEFAULT_FONT_BOLD
PRICE_FONT_SIZE = pls.config.PRICE_FONT_SIZE
DESCRIPTION_FONT_SIZE = pls.config.DESCRIPTION_FONT_SIZE
CODE_FONT_SIZE = pls.config.CODE_FONT_SIZE
PRICE_BASELINE_OFFSET = pls.config.PRICE_BASELINE_OFFSET
CODE_BASELINE_INSET = pls.config.CODE_BASELINE_INSET
DESCRIPTION_SIDE_PADDING = pls.config.DESCRIPTION_SIDE_PADDING
DESCRIPTION_LINE_HEIGHT = pls.config.DESCRIPTION_LINE_HEIGHT
DESCRIPTION_BASELINE_SHIFT = pls.config.DESCRIPTION_BASELINE_SHIFT
BACKGROUND_RGB = pls.config.BACKGROUND_RGB
BORDER_RGB = pls.config.BORDER_RGB
TEXT_RGB = pls.config.TEXT_RGB
PREVIEW_DPI = pls.config.PREVIEW_DPI
PROGRESS_BAR_WIDTH = pls.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = pls.config.PROGRESS_UPDATE_EVERY

mm_to_points = pls.config.mm_to_points
points_to_mm = pls.config.points_to_mm


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def rgb_to_floats(color: tuple[int, int, int]) -> tuple[float, float, float]:
	"""
	Convert 0-255 RGB components to reportlab 0.0-1.0 floats.

	Args:
		color: Tuple of (r, g, b) integers.

	Returns:
		Tuple of (r, g, b) floats.
	"""
	return (color[0] / 255.0, color[1] / 255.0, color[2] / 255.0)


#============================================
def wrap_text_to_width(
	text: str,
	font_name: str,
	font_size: float,
	max_width: float,
) -> list[str]:
	"""
	Wrap text to fit within a max width.

	Args:
		text: Input text; embedded newlines start a new line.
		font_name: Font name for width calculation.
		font_size: Font size in points.
		max_width: Maximum line width in millimeters.

	Returns:
		List of wrapped lines. A single word wider than max_width keeps
		its own line.
	"""
	lines: list[str] = []
	for paragraph in text.splitlines():
		words = paragraph.split()
		if not words:
			lines.append("")
			continue
		current = ""
		for word in words:
			candidate = word if not current else f"{current} {word}"
			width = points_to_mm(
				reportlab.pdfbase.pdfmetrics.stringWidth(candidate, font_name, font_size)
			)
			if width <= max_width or not current:
				current = candidate
				continue
			lines.append(current)
			current = word
		lines.append(current)
	return lines


class LabelSurface:
	"""
	Drawing surface over a reportlab canvas.

	Takes millimeters measured from the top-left page corner and writes
	into an in-memory PDF.
	"""

	def __init__(self, page_width: float, page_height: float) -> None:
		self.page_width = page_width
		self.page_height = page_height
		self.page_count = 1
		self._buffer = io.BytesIO()
		self._pdf = reportlab.pdfgen.canvas.Canvas(
			self._buffer,
			pagesize=(mm_to_points(page_width), mm_to_points(page_height)),
		)

	def _flip_y(self, y: float) -> float:
		return mm_to_points(self.page_height - y)

	def rect(
		self,
		x: float,
		y: float,
		width: float,
		height: float,
		fill_rgb: tuple[int, int, int] | None = None,
		stroke_rgb: tuple[int, int, int] | None = None,
	) -> None:
		"""
		Draw a rectangle whose top-left corner is at (x, y).
		"""
		if fill_rgb is not None:
			self._pdf.setFillColorRGB(*rgb_to_floats(fill_rgb))
		if stroke_rgb is not None:
			self._pdf.setStrokeColorRGB(*rgb_to_floats(stroke_rgb))
		self._pdf.rect(
			mm_to_points(x),
			self._flip_y(y + height),
			mm_to_points(width),
			mm_to_points(height),
			stroke=1 if stroke_rgb is not None else 0,
			fill=1 if fill_rgb is not None else 0,
		)

	def draw_centered_text(
		self,
		x: float,
		y: float,
		text: str,
		font_name: str,
		font_size: float,
	) -> None:
		"""
		Draw one line of text centered on x with its baseline at y.
		"""
		self._pdf.setFillColorRGB(*rgb_to_floats(TEXT_RGB))
		self._pdf.setFont(font_name, font_size)
		self._pdf.drawCentredString(mm_to_points(x), self._flip_y(y), text)

	def new_page(self) -> None:
		"""
		Close the current page and open a blank one.
		"""
		self._pdf.showPage()
		self.page_count += 1

	def finish(self) -> bytes:
		"""
		Close the document and return the PDF bytes.
		"""
		self._pdf.save()
		return self._buffer.getvalue()


#============================================
def draw_label(
	surface: LabelSurface,
	fields: LabelFields,
	x: float,
	y: float,
	config: LayoutConfig,
) -> None:
	"""
	Draw one label box and its three text blocks.

	Args:
		surface: Drawing surface (LabelSurface or compatible).
		fields: Resolved display fields.
		x: Label left edge, millimeters.
		y: Label top edge, millimeters.
		config: Layout configuration.
	"""
	width = config.label_width
	height = config.label_height
	surface.rect(x, y, width, height, fill_rgb=BACKGROUND_RGB)
	surface.rect(x, y, width, height, stroke_rgb=BORDER_RGB)

	center_x = x + width / 2.0
	surface.draw_centered_text(
		center_x,
		y + PRICE_BASELINE_OFFSET,
		fields.price,
		DEFAULT_FONT_BOLD,
		PRICE_FONT_SIZE,
	)

	lines = []
	if fields.description:
		lines = wrap_text_to_width(
			fields.description,
			DEFAULT_FONT_REGULAR,
			DESCRIPTION_FONT_SIZE,
			width - DESCRIPTION_SIDE_PADDING,
		)
	text_height = len(lines) * DESCRIPTION_LINE_HEIGHT
	first_baseline = y + height / 2.0 - text_height / 2.0 + DESCRIPTION_BASELINE_SHIFT
	for line_index, line in enumerate(lines):
		if not line:
			continue
		surface.draw_centered_text(
			center_x,
			first_baseline + line_index * DESCRIPTION_LINE_HEIGHT,
			line,
			DEFAULT_FONT_REGULAR,
			DESCRIPTION_FONT_SIZE,
		)

	surface.draw_centered_text(
		center_x,
		y + height - CODE_BASELINE_INSET,
		fields.code,
		DEFAULT_FONT_BOLD,
		CODE_FONT_SIZE,
	)


#============================================
def render_labels(
	surface: LabelSurface,
	expanded: list[dict[str, object]],
	config: LayoutConfig,
	verbose: bool = False,
) -> int:
	"""
	Draw every label of an expanded record sequence.

	Args:
		surface: Drawing surface with one page already open.
		expanded: Records after count expansion.
		config: Layout configuration.
		verbose: Print a progress bar.

	Returns:
		Number of labels drawn.
	"""
	total = len(expanded)
	for placement in pls.layout.iter_placements(total, config):
		if placement.page_break:
			surface.new_page()
		record = expanded[placement.index]
		fields = pls.fields.resolve_label(record, placement.index, config.currency)
		draw_label(surface, fields, placement.x, placement.y, config)
		drawn = placement.index + 1
		if verbose and (drawn % PROGRESS_UPDATE_EVERY == 0 or drawn == total):
			print_progress("Drawing labels", drawn, total)
	if verbose and total > 0:
		print()
	return total


#============================================
def build_label_pdf(expanded: list[dict[str, object]], config: LayoutConfig, verbose: bool = False) -> bytes:
	"""
	Render an expanded record sequence to PDF bytes.

	Args:
		expanded: Records after count expansion.
		config: Layout configuration.
		verbose: Print a progress bar.

	Returns:
		PDF document bytes.

	Raises:
		ValueError: If there is nothing to render.
	"""
	if not expanded:
		raise ValueError("No labels to render")
	config.validate()
	surface = LabelSurface(config.page_width, config.page_height)
	render_labels(surface, expanded, config, verbose=verbose)
	return surface.finish()


#============================================
def write_bytes_atomic(output_path: pathlib.Path, payload: bytes) -> None:
	"""
	Write a file through a temporary sibling so failures leave no partial file.

	Args:
		output_path: Destination path.
		payload: File contents.
	"""
	output_path = pathlib.Path(output_path)
	handle = tempfile.NamedTemporaryFile(
		mode="wb",
		dir=str(output_path.parent),
		prefix=f".{output_path.name}.",
		suffix=".tmp",
		delete=False,
	)
	temp_path = pathlib.Path(handle.name)
	try:
		with handle:
			handle.write(payload)
		os.replace(temp_path, output_path)
	except BaseException:
		temp_path.unlink(missing_ok=True)
		raise


#============================================
def write_label_pdf(
	records: list[dict[str, object]],
	output_path: pathlib.Path,
	config: LayoutConfig,
	verbose: bool = False,
) -> GenerationResult:
	"""
	Expand records, render labels, and write the PDF.

	Args:
		records: Source records.
		output_path: Output PDF path.
		config: Layout configuration.
		verbose: Print a progress bar.

	Returns:
		GenerationResult.

	Raises:
		ValueError: If the records produce no labels.
		OSError: If the output cannot be written.
	"""
	if not records:
		raise ValueError("No data available. Please provide a file with at least one row.")
	expanded = pls.records.expand_records(records)
	pdf_bytes = build_label_pdf(expanded, config, verbose=verbose)
	write_bytes_atomic(pathlib.Path(output_path), pdf_bytes)
	return GenerationResult(
		source_records=len(records),
		total_labels=len(expanded),
		pages=pls.layout.count_pages(len(expanded), config),
		labels_per_page=config.labels_per_page,
		output_path=str(output_path),
	)


#============================================
def render_pdf_first_page(pdf_path: pathlib.Path, dpi: int = PREVIEW_DPI) -> PIL.Image.Image:
	"""
	Render the first page of a PDF to an image.

	Args:
		pdf_path: PDF path.
		dpi: Raster resolution.

	Returns:
		PIL image.
	"""
	document = fitz.open(str(pdf_path))
	try:
		page = document[0]
		scale = dpi / 72.0
		matrix = fitz.Matrix(scale, scale)
		pixmap = page.get_pixmap(matrix=matrix, alpha=False)
		image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	finally:
		document.close()
	return image


#============================================
def write_preview_png(pdf_path: pathlib.Path, png_path: pathlib.Path, dpi: int = PREVIEW_DPI) -> None:
	"""
	Save a PNG preview of the first label sheet.
	"""
	image = render_pdf_first_page(pdf_path, dpi)
	image.save(str(png_path), format="PNG")


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	input_path: pathlib.Path,
	result: GenerationResult,
	config: LayoutConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		input_path: Source spreadsheet.
		result: Generation result.
		config: Layout configuration.
	"""
	data = {
		"input": str(input_path),
		"output": result.output_path,
		"source_records": result.source_records,
		"total_labels": result.total_labels,
		"labels_per_page": result.labels_per_page,
		"pages": result.pages,
		"layout": {
			"page_width": config.page_width,
			"page_height": config.page_height,
			"label_width": config.label_width,
			"label_height": config.label_height,
			"margin_top": config.margin_top,
			"margin_left": config.margin_left,
			"column_gap": config.column_gap,
			"row_gap": config.row_gap,
			"columns": config.columns,
			"rows_per_page": config.rows_per_page,
			"currency": config.currency,
		},
		"fonts": {
			"regular": DEFAULT_FONT_REGULAR,
			"bold": DEFAULT_FONT_BOLD,
		},
	}
	with pathlib.Path(manifest_path).open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
