"""
Tiling composition and the top-level N-up pipeline.
"""

# Standard Library
import pathlib

# PIP3 modules
import pypdf

# local repo modules
import pdf_nup as pn
import pdf_nup.config
import pdf_nup.direction
import pdf_nup.document
import pdf_nup.errors
import pdf_nup.geometry
import pdf_nup.normalize


GridSpec = pn.config.GridSpec
NupConfig = pn.config.NupConfig
NupResult = pn.config.NupResult
Rect = pn.geometry.Rect


#============================================
def reference_box(page: pypdf.PageObject, box_type: str) -> Rect:
	"""
	Cell box taken from a page: its box origin and visual size.

	Args:
		page: Source page.
		box_type: Page box to use.

	Returns:
		Rectangle whose size is one grid cell.
	"""
	box = pn.document.page_box(page, box_type)
	size = pn.geometry.effective_size(box.size, pn.document.page_rotation(page))
	return Rect(box.x, box.y, size.width, size.height)


#============================================
def draw_page_in_cell(
	target: pypdf.PageObject,
	page: pypdf.PageObject,
	cell: Rect,
	box_type: str,
) -> None:
	"""
	Draw a source page scaled and centered inside a cell.

	Args:
		target: Output page being built.
		page: Source page.
		cell: Destination rectangle on the output page.
		box_type: Page box mapped into the cell.
	"""
	box = pn.document.page_box(page, box_type)
	rotation = pn.document.page_rotation(page)
	transform = pn.geometry.fit_transform(box, cell, rotation)
	if box_type != "cropbox":
		# pypdf clips merged content to the crop box
		pn.document.set_page_box(page, "cropbox", box)
	target.merge_transformed_page(page, pypdf.Transformation(transform.ctm), expand=False)


#============================================
def load_chunk_pages(reader: pypdf.PdfReader, chunk: range) -> list[pypdf.PageObject | None]:
	"""
	Load the source pages of one output page.

	Args:
		reader: Source document.
		chunk: Source page indices.

	Returns:
		Pages in chunk order, None where a page could not be loaded.
	"""
	pages: list[pypdf.PageObject | None] = []
	for page_index in chunk:
		try:
			pages.append(pn.document.get_page(reader, page_index))
		except pn.errors.PageLoadError as error:
			print(f"Warning: {error}; leaving its cell blank")
			pages.append(None)
	return pages


#============================================
def compose_pages(
	reader: pypdf.PdfReader,
	grid: GridSpec,
	box_type: str = "cropbox",
	verbose: bool = False,
) -> tuple[pypdf.PdfWriter, int]:
	"""
	Tile source pages onto output pages following the grid direction.

	The output page size is fixed per output page from the first source
	page placed on it. Pages of other sizes are fitted into the same cells.
	With a box_type other than "cropbox" the source pages' crop boxes are
	overwritten, so pass a reader owned by the caller.

	Args:
		reader: Source document, already normalized when needed.
		grid: Grid specification.
		box_type: Page box used for sizing, placement and clipping.
		verbose: Print progress.

	Returns:
		Tuple of (output document, number of cells left blank by failures).
	"""
	writer = pypdf.PdfWriter()
	cells = pn.direction.fill_order(grid)
	chunks = pn.direction.chunk_ranges(len(reader.pages), grid.cells_per_page)
	blank_cells = 0
	reference: Rect | None = None
	reference_index = 0

	total = len(chunks)
	for chunk_number, chunk in enumerate(chunks, start=1):
		pages = load_chunk_pages(reader, chunk)
		loaded = [(page_index, page) for page_index, page in zip(chunk, pages) if page is not None]
		if loaded:
			reference_index, first_page = loaded[0]
			reference = reference_box(first_page, box_type)
		if reference is None:
			raise pn.errors.PageLoadError(chunk.start, "no page of the first output page could be loaded")
		if reference.width <= 0 or reference.height <= 0:
			raise pn.errors.DegenerateGeometryError(
				f"page {reference_index + 1} box {reference.width}x{reference.height} has no area"
			)

		output_rect = pn.geometry.output_page_rect(reference, grid.rows, grid.columns)
		target = writer.add_blank_page(width=output_rect.width, height=output_rect.height)
		pn.document.set_page_box(target, "mediabox", output_rect)

		for (row, column), page_index, page in zip(cells, chunk, pages):
			if page is None:
				blank_cells += 1
				continue
			cell = pn.geometry.cell_rect(reference, grid.rows, grid.columns, row, column)
			try:
				draw_page_in_cell(target, page, cell, box_type)
			except pn.document.PAGE_ERRORS as error:
				print(f"Warning: cannot draw page {page_index + 1}: {error}; leaving its cell blank")
				blank_cells += 1

		if verbose:
			pn.document.print_progress("Compose", chunk_number, total)

	return (writer, blank_cells)


#============================================
def transform(data: bytes, config: NupConfig) -> tuple[pypdf.PdfWriter, NupResult]:
	"""
	Rearrange a PDF into an N-up layout.

	Args:
		data: Source PDF bytes.
		config: N-up configuration.

	Returns:
		Tuple of (output document, NupResult).
	"""
	grid = config.grid
	pn.config.validate_grid(grid)
	box_type = pn.config.validate_box_type(config.box_type)

	reader = pn.document.load_document_bytes(data)
	page_count = len(reader.pages)
	if page_count == 0:
		raise pn.errors.EmptyDocumentError("Document has no pages")

	normalized = config.always_normalize or pn.normalize.needs_normalization(reader)
	if normalized:
		normalized_writer = pn.normalize.normalize_document(data, config.max_workers, config.verbose)
		reader = pn.document.load_document_bytes(pn.document.document_to_bytes(normalized_writer))

	if config.verbose:
		print(f"Tiling {page_count} pages, {grid.rows}x{grid.columns} {grid.direction.value}")
	writer, blank_cells = compose_pages(reader, grid, box_type, config.verbose)
	if len(writer.pages) == 0:
		raise pn.errors.AssemblyError("Tiling produced no output pages")

	result = NupResult(
		source_pages=page_count,
		output_pages=len(writer.pages),
		cells_per_page=grid.cells_per_page,
		normalized=normalized,
		blank_cells=blank_cells,
	)
	return (writer, result)


#============================================
def nup_file(input_path: pathlib.Path, output_path: pathlib.Path, config: NupConfig) -> NupResult:
	"""
	Read a PDF, rearrange it into an N-up layout and write the result.

	Args:
		input_path: Input PDF path.
		output_path: Output PDF path.
		config: N-up configuration.

	Returns:
		NupResult.
	"""
	data = pn.document.read_document(input_path)
	writer, result = transform(data, config)
	pn.document.write_document(writer, output_path)
	return result
