"""
Document loading, page access, merging and serialization.
"""

# Standard Library
import io
import pathlib

# PIP3 modules
import pypdf
import pypdf.errors
import pypdf.generic

# local repo modules
import pdf_nup as pn
import pdf_nup.config
import pdf_nup.errors
import pdf_nup.geometry


Rect = pn.geometry.Rect

PROGRESS_BAR_WIDTH = pn.config.PROGRESS_BAR_WIDTH

# Failures pypdf raises while walking a damaged page or content stream.
PAGE_ERRORS = (
	pypdf.errors.PyPdfError,
	KeyError,
	ValueError,
	TypeError,
	AttributeError,
	IndexError,
)


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
	end = "\n" if current >= total else "\r"
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end=end)


#============================================
def load_document_bytes(data: bytes) -> pypdf.PdfReader:
	"""
	Open a PDF held in memory.

	Args:
		data: PDF file bytes.

	Returns:
		PdfReader over the bytes.
	"""
	try:
		return pypdf.PdfReader(io.BytesIO(data))
	except pypdf.errors.PyPdfError as error:
		raise pn.errors.DocumentParseError(f"Cannot parse PDF: {error}") from error


#============================================
def read_document(path: pathlib.Path) -> bytes:
	"""
	Read PDF bytes from disk.

	Args:
		path: Input PDF path.

	Returns:
		File contents.
	"""
	path = pathlib.Path(path)
	if not path.is_file():
		raise pn.errors.DocumentNotFoundError(str(path))
	return path.read_bytes()


#============================================
def document_to_bytes(writer: pypdf.PdfWriter) -> bytes:
	"""
	Serialize a finished document.

	Args:
		writer: Output document.

	Returns:
		PDF bytes.
	"""
	with io.BytesIO() as buffer:
		writer.write(buffer)
		return buffer.getvalue()


#============================================
def write_document(writer: pypdf.PdfWriter, path: pathlib.Path) -> None:
	"""
	Write a finished document to disk.

	Args:
		writer: Output document.
		path: Output PDF path.
	"""
	path = pathlib.Path(path)
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_bytes(document_to_bytes(writer))


#============================================
def get_page(reader: pypdf.PdfReader, page_index: int) -> pypdf.PageObject:
	"""
	Fetch one page, reporting damage as a PageLoadError.

	Args:
		reader: Source document.
		page_index: 0-indexed page number.

	Returns:
		Page object.
	"""
	try:
		return reader.pages[page_index]
	except PAGE_ERRORS as error:
		raise pn.errors.PageLoadError(page_index, str(error)) from error


#============================================
def page_box(page: pypdf.PageObject, box_type: str = "cropbox") -> Rect:
	"""
	Read a page box as a Rect.

	Args:
		page: Page object.
		box_type: Box attribute name, e.g. "cropbox".

	Returns:
		Box rectangle with a bottom-left origin.
	"""
	box = getattr(page, box_type)
	xs = (float(box.left), float(box.right))
	ys = (float(box.bottom), float(box.top))
	return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


#============================================
def set_page_box(page: pypdf.PageObject, box_type: str, rect: Rect) -> None:
	"""
	Replace a page box.

	Args:
		page: Page object.
		box_type: Box attribute name.
		rect: New box.
	"""
	setattr(page, box_type, pypdf.generic.RectangleObject([rect.x, rect.y, rect.right, rect.top]))


#============================================
def page_rotation(page: pypdf.PageObject) -> int:
	"""
	Clockwise page rotation folded into 0-359.

	Args:
		page: Page object.

	Returns:
		Rotation in degrees.
	"""
	return pn.geometry.normalize_rotation(page.rotation)


#============================================
def merge_in_order(pieces: list) -> pypdf.PdfWriter:
	"""
	Concatenate documents, keeping the sequence order of the pieces.

	Args:
		pieces: Documents as PDF bytes or PdfReader objects.

	Returns:
		PdfWriter holding every page of every piece.
	"""
	if not pieces:
		raise pn.errors.AssemblyError("No documents to merge")
	writer = pypdf.PdfWriter()
	for piece in pieces:
		reader = piece
		if isinstance(piece, (bytes, bytearray)):
			reader = load_document_bytes(bytes(piece))
		for page in reader.pages:
			writer.add_page(page)
	if len(writer.pages) == 0:
		raise pn.errors.AssemblyError("Merged document has no pages")
	return writer
