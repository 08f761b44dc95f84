"""
CLI entry points for spreadsheet to label sheet conversion.
"""

# Standard Library
import argparse
import pathlib
import time

# local repo modules
import product_label_sheet as pls
import product_label_sheet.config
import product_label_sheet.layout
import product_label_sheet.preview
import product_label_sheet.records
import product_label_sheet.render


LayoutConfig = pls.config.LayoutConfig
GenerationResult = pls.config.GenerationResult

DEFAULT_OUTPUT_NAME = pls.config.DEFAULT_OUTPUT_NAME


#============================================
def build_config(args: argparse.Namespace) -> LayoutConfig:
	"""
	Build layout config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		LayoutConfig.

	Raises:
		ValueError: If the layout values are out of range.
	"""
	return pls.config.build_layout_config(
		labels_per_page=args.labels_per_page,
		page_width=args.page_width,
		page_height=args.page_height,
		label_width=args.label_width,
		label_height=args.label_height,
		margin_top=args.margin_top,
		margin_left=args.margin_left,
		column_gap=args.column_gap,
		row_gap=args.row_gap,
		columns=args.columns,
		currency=args.currency,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Convert product spreadsheets to printable PDF label sheets.")
	parser.add_argument("input_path", help="Excel (.xlsx/.xlsm) or CSV file with product rows.")

	output_group = parser.add_argument_group("Input/Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=DEFAULT_OUTPUT_NAME, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("--preview-png", dest="preview_png", default=None, help="Write a PNG preview of the first page.")

	page_group = parser.add_argument_group("Page")
	page_group.add_argument("--page-width", dest="page_width", type=float, default=pls.config.DEFAULT_PAGE_WIDTH, help="Page width (mm).")
	page_group.add_argument("--page-height", dest="page_height", type=float, default=pls.config.DEFAULT_PAGE_HEIGHT, help="Page height (mm).")
	page_group.add_argument("-t", "--margin-top", dest="margin_top", type=float, default=pls.config.DEFAULT_MARGIN_TOP, help="Top margin (mm).")
	page_group.add_argument("-l", "--margin-left", dest="margin_left", type=float, default=pls.config.DEFAULT_MARGIN_LEFT, help="Left margin (mm).")
	page_group.add_argument("-c", "--columns", dest="columns", type=int, default=pls.config.DEFAULT_COLUMNS, help="Labels per row.")
	page_group.add_argument("-n", "--labels-per-page", dest="labels_per_page", type=int, default=pls.config.DEFAULT_LABELS_PER_PAGE, help="Labels before a new page starts.")

	label_group = parser.add_argument_group("Label")
	label_group.add_argument("-W", "--label-width", dest="label_width", type=float, default=pls.config.DEFAULT_LABEL_WIDTH, help="Label width (mm).")
	label_group.add_argument("-H", "--label-height", dest="label_height", type=float, default=pls.config.DEFAULT_LABEL_HEIGHT, help="Label height (mm).")
	label_group.add_argument("--column-gap", dest="column_gap", type=float, default=pls.config.DEFAULT_COLUMN_GAP, help="Gap between columns (mm).")
	label_group.add_argument("--row-gap", dest="row_gap", type=float, default=pls.config.DEFAULT_ROW_GAP, help="Gap between rows (mm).")
	label_group.add_argument("--currency", dest="currency", default=pls.config.DEFAULT_CURRENCY, help="Currency prefix for prices.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-q", "--quiet", dest="verbose", action="store_false", help="Skip previews and progress output.")
	behavior_group.add_argument(
		"--stop-before-rendering",
		dest="stop_before_rendering",
		action="store_true",
		help="Stop after reading and previewing records (no PDF is written).",
	)

	parser.set_defaults(
		verbose=True,
		stop_before_rendering=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def print_previews(records: list[dict[str, object]], config: LayoutConfig) -> None:
	"""
	Print the data and label previews.
	"""
	print("Data preview")
	print(pls.preview.format_record_table(records))
	print("Label preview")
	print(pls.preview.format_label_previews(records, config.currency))


#============================================
def generate_labels(
	input_path: pathlib.Path,
	output_path: pathlib.Path,
	config: LayoutConfig,
	verbose: bool = False,
	records: list[dict[str, object]] | None = None,
) -> tuple[GenerationResult | None, str]:
	"""
	Read records and write the label PDF, reporting failures as a status.

	Args:
		input_path: Source spreadsheet.
		output_path: Output PDF path.
		config: Layout configuration.
		verbose: Print progress output.
		records: Records already read from input_path, if any.

	Returns:
		Tuple of (result or None on failure, status message).
	"""
	if records is None:
		try:
			records = pls.records.read_records(input_path)
		except (ValueError, OSError) as error:
			return None, f"Error processing input file. Please ensure it's a valid Excel or CSV file. ({error})"
	if not records:
		return None, "No data available. Please provide a file with at least one row."
	try:
		result = pls.render.write_label_pdf(records, output_path, config, verbose=verbose)
	except ValueError as error:
		return None, f"Error generating PDF: {error}"
	except OSError as error:
		return None, f"Error writing PDF to {output_path}: {error}"
	status = f"Generated {result.total_labels} labels on {result.pages} pages: {result.output_path}"
	return result, status


#============================================
def run_pipeline(args: argparse.Namespace) -> int:
	"""
	Run the full pipeline from spreadsheet input to PDF output.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Process exit code.
	"""
	try:
		config = build_config(args)
	except ValueError as error:
		print(f"Invalid label settings: {error}")
		return 1

	input_path = pathlib.Path(args.input_path)
	output_path = pathlib.Path(args.output_path)
	print("Spreadsheet to label sheet pipeline")
	print(f"Input: {input_path}")
	print(f"Output PDF: {output_path}")
	print(
		f"Page: {config.page_width:g} x {config.page_height:g} mm, "
		f"label: {config.label_width:g} x {config.label_height:g} mm"
	)
	print(f"Columns: {config.columns}, labels per page: {config.labels_per_page}")
	if config.currency:
		print(f"Currency: {config.currency}")

	overflowing = pls.layout.find_overflowing_slots(config)
	if overflowing:
		print(f"Warning: {len(overflowing)} of {config.labels_per_page} label slots extend past the page edge.")

	start_time = time.perf_counter()
	records = None
	if args.verbose or args.stop_before_rendering:
		try:
			records = pls.records.read_records(input_path)
		except (ValueError, OSError) as error:
			print(f"Error processing input file. Please ensure it's a valid Excel or CSV file. ({error})")
			return 1
		print(f"Records read: {len(records)}")
		message = pls.preview.label_total_message(records)
		if message:
			print(message)
		if records:
			print_previews(records, config)
		if args.stop_before_rendering:
			print("Stopping before rendering labels.")
			return 0

	result, status = generate_labels(input_path, output_path, config, verbose=args.verbose, records=records)
	print(status)
	if result is None:
		return 1

	if args.preview_png:
		try:
			pls.render.write_preview_png(output_path, pathlib.Path(args.preview_png))
		except OSError as error:
			print(f"Error writing preview to {args.preview_png}: {error}")
			return 1
		print(f"Preview written: {args.preview_png}")
	if args.manifest_path:
		try:
			pls.render.write_manifest(pathlib.Path(args.manifest_path), input_path, result, config)
		except OSError as error:
			print(f"Error writing manifest to {args.manifest_path}: {error}")
			return 1
		print(f"Manifest written: {args.manifest_path}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.2f}s")
	return 0


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	return run_pipeline(args)
