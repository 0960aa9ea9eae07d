import pathlib

import fitz
import PIL.Image

import pdf_nup.cli


DPI = 72
INK_THRESHOLD = 240
FILLED_RATIO_MIN = 0.1
BLANK_RATIO_LIMIT = 0.01


#============================================
def _render_pdf_page(path: pathlib.Path, page_index: int) -> PIL.Image.Image:
	"""
	Render a PDF page to an image.

	Args:
		path: PDF path.
		page_index: Page to render.

	Returns:
		PIL image.
	"""
	document = fitz.open(path)
	page = document[page_index]
	scale = DPI / 72.0
	matrix = fitz.Matrix(scale, scale)
	pixmap = page.get_pixmap(matrix=matrix, alpha=False)
	image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	document.close()
	return image


#============================================
def _count_ink_ratio(gray: PIL.Image.Image, threshold: int) -> float:
	"""
	Compute the ink ratio for a grayscale region.

	Args:
		gray: Grayscale image region.
		threshold: Pixel intensity threshold.

	Returns:
		Ink ratio.
	"""
	pixels = list(gray.getdata())
	if not pixels:
		return 0.0
	ink = sum(1 for value in pixels if value < threshold)
	return ink / len(pixels)


#============================================
def test_rendered_sheets_fill_expected_cells(make_pdf, tmp_path: pathlib.Path) -> None:
	"""
	Smoke test the CLI output: filled cells carry ink, unused cells stay blank.
	"""
	input_path = tmp_path / "input.pdf"
	input_path.write_bytes(make_pdf([(200.0, 300.0)] * 7, rotations=[0, 90, 0, 270, 180, 0, 90], fill=True))
	output_path = tmp_path / "nup.pdf"

	exit_code = pdf_nup.cli.main([
		"--rows", "2",
		"--columns", "2",
		"--direction", "verticalR2L",
		"--quiet",
		str(input_path),
		str(output_path),
	])
	assert exit_code == 0

	# sheet 2 holds pages 5-7; verticalR2L leaves the bottom-left cell empty
	expected_filled = [
		{(0, 0), (0, 1), (1, 0), (1, 1)},
		{(0, 1), (1, 1), (0, 0)},
	]
	violations = []
	for page_index, filled in enumerate(expected_filled):
		gray = _render_pdf_page(output_path, page_index).convert("L")
		cell_width = gray.width // 2
		cell_height = gray.height // 2
		for row in range(2):
			for col in range(2):
				box = (col * cell_width, row * cell_height, (col + 1) * cell_width, (row + 1) * cell_height)
				ratio = _count_ink_ratio(gray.crop(box), INK_THRESHOLD)
				if (row, col) in filled and ratio < FILLED_RATIO_MIN:
					violations.append(f"page {page_index} row {row} col {col} empty ratio {ratio:.3f}")
				if (row, col) not in filled and ratio > BLANK_RATIO_LIMIT:
					violations.append(f"page {page_index} row {row} col {col} ink ratio {ratio:.3f}")

	if violations:
		message = "Unexpected cell ink in rendered sheets:\n"
		message += "\n".join(violations[:10])
		raise AssertionError(message)
