"""
Exception types raised by the N-up pipeline.
"""


class NupError(Exception):
	"""
	Base class for every failure reported by the pipeline.
	"""


class InvalidGridSpecError(NupError, ValueError):
	pass


class DegenerateGeometryError(NupError, ValueError):
	pass


class EmptyDocumentError(NupError):
	pass


class AssemblyError(NupError):
	pass


class DocumentNotFoundError(NupError):
	def __init__(self, path: str) -> None:
		super().__init__(f"File not found: {path}")
		self.path = path


class DocumentParseError(NupError):
	pass


class PageLoadError(NupError):
	"""
	A single source page could not be read or drawn.
	"""

	def __init__(self, page_index: int, reason: str = "") -> None:
		message = f"Cannot load page {page_index + 1}"
		if reason:
			message += f": {reason}"
		super().__init__(message)
		self.page_index = page_index


class NormalizationError(NupError):
	"""
	One or more pages failed to normalize; carries every failed index.
	"""

	def __init__(self, page_errors: dict[int, Exception]) -> None:
		self.page_errors = dict(sorted(page_errors.items()))
		self.failed_pages = list(self.page_errors)
		numbers = ", ".join(str(index + 1) for index in self.failed_pages)
		super().__init__(f"Normalization failed for page(s) {numbers}")
