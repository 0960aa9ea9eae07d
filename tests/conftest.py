"""
Pytest configuration for local imports and PDF fixtures.
"""

# Standard Library
import io
import os
import sys

# PIP3 modules
import pypdf
import pytest
import reportlab.pdfgen.canvas

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def page_label(index: int) -> str:
	"""
	Text drawn on source page index (0-indexed).
	"""
	return f"Page {index + 1:02d}"


#============================================
def build_pdf(
	sizes: list[tuple[float, float]],
	rotations: list[int] | None = None,
	fill: bool = False,
) -> bytes:
	"""
	Build a PDF with one centered label per page.

	Args:
		sizes: Page sizes in points.
		rotations: Optional /Rotate value per page.
		fill: Paint a gray block behind the label.

	Returns:
		PDF bytes.
	"""
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=sizes[0])
	for index, (width, height) in enumerate(sizes):
		pdf.setPageSize((width, height))
		if fill:
			pdf.setFillColorRGB(0.5, 0.5, 0.5)
			pdf.rect(width * 0.1, height * 0.1, width * 0.8, height * 0.8, stroke=0, fill=1)
			pdf.setFillColorRGB(0.0, 0.0, 0.0)
		pdf.setFont("Helvetica", 12)
		pdf.drawCentredString(width / 2.0, height / 2.0, page_label(index))
		pdf.showPage()
	pdf.save()
	data = buffer.getvalue()
	if not rotations:
		return data

	reader = pypdf.PdfReader(io.BytesIO(data))
	writer = pypdf.PdfWriter()
	for page, rotation in zip(reader.pages, rotations):
		writer.add_page(page)
		if rotation:
			writer.pages[-1].rotate(rotation)
	output = io.BytesIO()
	writer.write(output)
	return output.getvalue()


#============================================
@pytest.fixture
def make_pdf():
	"""
	Factory fixture building labelled test PDFs.
	"""
	return build_pdf


#============================================
@pytest.fixture
def label_for():
	"""
	Factory fixture returning the label text of a page index.
	"""
	return page_label
