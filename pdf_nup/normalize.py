"""
Page normalization: bake /Rotate into page content.

Every page is redrawn upright onto a fresh page whose crop box is the
rotated visual size, so later stages only see rotation 0 and axis-aligned
boxes. Pages are processed in parallel; each task owns its own reader,
writer and output buffer and writes a single result slot.
"""

# Standard Library
import concurrent.futures
import threading

# PIP3 modules
import pypdf

# local repo modules
import pdf_nup as pn
import pdf_nup.document
import pdf_nup.errors
import pdf_nup.geometry


Rect = pn.geometry.Rect

ROTATIONS_NEEDING_NORMALIZATION = (90, 270)


#============================================
def normalize_page(page: pypdf.PageObject, writer: pypdf.PdfWriter) -> pypdf.PageObject:
	"""
	Draw a page upright onto a new page of the writer.

	Args:
		page: Source page, possibly rotated.
		writer: Output document receiving the new page.

	Returns:
		The new page, with rotation 0 and crop box at the origin.
	"""
	box = pn.document.page_box(page, "cropbox")
	rotation = pn.document.page_rotation(page)
	size = pn.geometry.effective_size(box.size, rotation)
	new_box = Rect(0.0, 0.0, size.width, size.height)
	transform = pn.geometry.fit_transform(box, new_box, rotation)

	target = writer.add_blank_page(width=size.width, height=size.height)
	# merged content is clipped to the source crop box by pypdf
	target.merge_transformed_page(page, pypdf.Transformation(transform.ctm), expand=False)
	return target


#============================================
def normalize_page_bytes(data: bytes, page_index: int) -> bytes:
	"""
	Normalize one page of a PDF into a single-page PDF.

	Args:
		data: Source PDF bytes, shared read-only between tasks.
		page_index: 0-indexed page to normalize.

	Returns:
		Single-page PDF bytes.
	"""
	try:
		reader = pn.document.load_document_bytes(data)
		page = pn.document.get_page(reader, page_index)
		writer = pypdf.PdfWriter()
		normalize_page(page, writer)
		return pn.document.document_to_bytes(writer)
	except pn.errors.PageLoadError:
		raise
	except Exception as error:
		# any failure is reported against its page index
		raise pn.errors.PageLoadError(page_index, str(error)) from error


#============================================
def needs_normalization(reader: pypdf.PdfReader) -> bool:
	"""
	Check whether any page is turned a quarter turn.

	Args:
		reader: Source document.

	Returns:
		True if a page has rotation 90 or 270.
	"""
	for page_index in range(len(reader.pages)):
		try:
			page = pn.document.get_page(reader, page_index)
		except pn.errors.PageLoadError:
			# reported later by the stage that draws the page
			continue
		if pn.document.page_rotation(page) in ROTATIONS_NEEDING_NORMALIZATION:
			return True
	return False


#============================================
def normalize_slots(
	data: bytes,
	page_count: int,
	max_workers: int | None = None,
	verbose: bool = False,
) -> list[bytes]:
	"""
	Normalize every page in parallel into per-page result slots.

	Args:
		data: Source PDF bytes.
		page_count: Number of pages in the source.
		max_workers: Worker pool size, None for the executor default.
		verbose: Print a progress bar.

	Returns:
		Single-page PDF bytes indexed by source page.
	"""
	slots: list[bytes | None] = [None] * page_count
	failures: list[Exception | None] = [None] * page_count
	completed = [0]
	progress_lock = threading.Lock()

	def run_slot(page_index: int) -> None:
		try:
			slots[page_index] = normalize_page_bytes(data, page_index)
		except pn.errors.PageLoadError as error:
			failures[page_index] = error
		if verbose:
			with progress_lock:
				completed[0] += 1
				pn.document.print_progress("Normalize", completed[0], page_count)

	with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
		futures = [executor.submit(run_slot, page_index) for page_index in range(page_count)]
	for future in futures:
		future.result()

	page_errors = {
		page_index: error
		for page_index, error in enumerate(failures)
		if error is not None
	}
	if page_errors:
		raise pn.errors.NormalizationError(page_errors)
	return slots


#============================================
def normalize_document(
	data: bytes,
	max_workers: int | None = None,
	verbose: bool = False,
) -> pypdf.PdfWriter:
	"""
	Normalize all pages and reassemble them in source order.

	Args:
		data: Source PDF bytes.
		max_workers: Worker pool size, None for the executor default.
		verbose: Print progress.

	Returns:
		PdfWriter with every page upright and unrotated.
	"""
	reader = pn.document.load_document_bytes(data)
	page_count = len(reader.pages)
	if page_count == 0:
		raise pn.errors.EmptyDocumentError("Document has no pages to normalize")
	if verbose:
		print(f"Normalizing {page_count} pages")
	slots = normalize_slots(data, page_count, max_workers, verbose)
	return pn.document.merge_in_order(slots)
