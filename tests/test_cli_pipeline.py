import json
import pathlib

import pypdf

import product_label_sheet.cli as cli
import product_label_sheet.config as config_module


#============================================
def write_csv(path: pathlib.Path, text: str) -> pathlib.Path:
	path.write_text(text, encoding="utf-8")
	return path


#============================================
def test_generate_labels_status(tmp_path: pathlib.Path) -> None:
	input_path = write_csv(tmp_path / "products.csv", "Price,Name,LabelCount\n2.5,Soap,13\n")
	output_path = tmp_path / "product-labels.pdf"
	config = config_module.build_layout_config()
	result, status = cli.generate_labels(input_path, output_path, config)
	assert result is not None
	assert result.total_labels == 13
	assert result.pages == 2
	assert status == f"Generated 13 labels on 2 pages: {output_path}"
	assert len(pypdf.PdfReader(str(output_path)).pages) == 2


#============================================
def test_generate_labels_rejects_empty_input(tmp_path: pathlib.Path) -> None:
	input_path = write_csv(tmp_path / "empty.csv", "Price,Name\n")
	output_path = tmp_path / "product-labels.pdf"
	result, status = cli.generate_labels(input_path, output_path, config_module.build_layout_config())
	assert result is None
	assert status.startswith("No data available")
	assert not output_path.exists()


#============================================
def test_generate_labels_reports_parse_failure(tmp_path: pathlib.Path) -> None:
	input_path = tmp_path / "broken.xlsx"
	input_path.write_bytes(b"not a workbook")
	output_path = tmp_path / "product-labels.pdf"
	result, status = cli.generate_labels(input_path, output_path, config_module.build_layout_config())
	assert result is None
	assert status.startswith("Error processing input file")
	assert not output_path.exists()


#============================================
def test_generate_labels_reports_write_failure(tmp_path: pathlib.Path) -> None:
	input_path = write_csv(tmp_path / "products.csv", "Price\n1\n")
	output_path = tmp_path / "missing_dir" / "product-labels.pdf"
	result, status = cli.generate_labels(input_path, output_path, config_module.build_layout_config())
	assert result is None
	assert status.startswith("Error writing PDF")


#============================================
def test_parse_args_defaults() -> None:
	args = cli.parse_args(["products.xlsx"])
	config = cli.build_config(args)
	assert args.output_path == "product-labels.pdf"
	assert config == config_module.LayoutConfig()


#============================================
def test_main_end_to_end(tmp_path: pathlib.Path, capsys) -> None:
	input_path = write_csv(
		tmp_path / "products.csv",
		"Price,Description,Code,Quantity\n1095.5,Desk lamp,L-77,2\n3,Bulb,,1\n",
	)
	output_path = tmp_path / "labels.pdf"
	manifest_path = tmp_path / "labels.json"
	preview_path = tmp_path / "labels.png"
	exit_code = cli.main(
		[
			str(input_path),
			"-o", str(output_path),
			"-m", str(manifest_path),
			"--preview-png", str(preview_path),
			"--currency", "$",
			"--columns", "2",
			"--labels-per-page", "2",
		]
	)
	assert exit_code == 0
	out = capsys.readouterr().out
	assert "Info: 2 records will generate 3 labels based on LabelCount values." in out
	assert "Showing 2 of 2 items" in out
	assert "$ 1,095.50" in out
	assert "Generated 3 labels on 2 pages" in out
	assert preview_path.exists()
	manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
	assert manifest["pages"] == 2
	assert manifest["layout"]["currency"] == "$"


#============================================
def test_stop_before_rendering(tmp_path: pathlib.Path, capsys) -> None:
	input_path = write_csv(tmp_path / "products.csv", "Price\n1\n")
	output_path = tmp_path / "labels.pdf"
	exit_code = cli.main([str(input_path), "-o", str(output_path), "--stop-before-rendering"])
	assert exit_code == 0
	assert not output_path.exists()
	assert "Stopping before rendering labels." in capsys.readouterr().out


#============================================
def test_invalid_settings_exit_code(tmp_path: pathlib.Path, capsys) -> None:
	input_path = write_csv(tmp_path / "products.csv", "Price\n1\n")
	exit_code = cli.main([str(input_path), "--columns", "0"])
	assert exit_code == 1
	assert "Invalid label settings" in capsys.readouterr().out


#============================================
def test_quiet_missing_input(tmp_path: pathlib.Path, capsys) -> None:
	exit_code = cli.main([str(tmp_path / "nope.csv"), "-o", str(tmp_path / "out.pdf"), "--quiet"])
	assert exit_code == 1
	assert "Error processing input file" in capsys.readouterr().out


#============================================
def test_preview_write_failure_exit_code(tmp_path: pathlib.Path, capsys) -> None:
	"""
	An unwritable preview path is reported as a status, not a traceback.
	"""
	input_path = write_csv(tmp_path / "products.csv", "Price\n1\n")
	preview_path = tmp_path / "nodir" / "preview.png"
	exit_code = cli.main(
		[str(input_path), "-o", str(tmp_path / "labels.pdf"), "--preview-png", str(preview_path)]
	)
	assert exit_code == 1
	assert "Error writing preview" in capsys.readouterr().out
	assert not preview_path.exists()


#============================================
def test_manifest_write_failure_exit_code(tmp_path: pathlib.Path, capsys) -> None:
	"""
	An unwritable manifest path is reported as a status, not a traceback.
	"""
	input_path = write_csv(tmp_path / "products.csv", "Price\n1\n")
	manifest_path = tmp_path / "nodir" / "labels.json"
	exit_code = cli.main(
		[str(input_path), "-o", str(tmp_path / "labels.pdf"), "-m", str(manifest_path)]
	)
	assert exit_code == 1
	assert "Error writing manifest" in capsys.readouterr().out
	assert not manifest_path.exists()


#============================================
def test_non_finite_label_size_rejected(tmp_path: pathlib.Path, capsys) -> None:
	input_path = write_csv(tmp_path / "products.csv", "Price\n1\n")
	output_path = tmp_path / "labels.pdf"
	exit_code = cli.main([str(input_path), "-o", str(output_path), "--label-width", "nan"])
	assert exit_code == 1
	assert "Invalid label settings" in capsys.readouterr().out
	assert not output_path.exists()
