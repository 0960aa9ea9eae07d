"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import enum

# local repo modules
import pdf_nup as pn
import pdf_nup.errors


DEFAULT_ROWS = 1
DEFAULT_COLUMNS = 2
DEFAULT_BOX_TYPE = "cropbox"
BOX_TYPES = (
	"cropbox",
	"mediabox",
	"trimbox",
	"bleedbox",
	"artbox",
)
PROGRESS_BAR_WIDTH = 20


class Direction(str, enum.Enum):
	HORIZONTAL_L2R = "horizontalL2R"
	HORIZONTAL_R2L = "horizontalR2L"
	VERTICAL_L2R = "verticalL2R"
	VERTICAL_R2L = "verticalR2L"


DEFAULT_DIRECTION = Direction.HORIZONTAL_L2R

DIRECTION_HELP = {
	Direction.HORIZONTAL_L2R: "from left to right, horizontally",
	Direction.HORIZONTAL_R2L: "from right to left, horizontally",
	Direction.VERTICAL_L2R: "top to bottom vertically, left to right horizontally",
	Direction.VERTICAL_R2L: "top to bottom vertically, right to left horizontally",
}


@dataclasses.dataclass(frozen=True)
class GridSpec:
	rows: int
	columns: int
	direction: Direction = DEFAULT_DIRECTION

	@property
	def cells_per_page(self) -> int:
		return self.rows * self.columns


@dataclasses.dataclass
class NupConfig:
	grid: GridSpec
	box_type: str = DEFAULT_BOX_TYPE
	max_workers: int | None = None
	always_normalize: bool = False
	verbose: bool = False


@dataclasses.dataclass
class NupResult:
	source_pages: int
	output_pages: int
	cells_per_page: int
	normalized: bool
	blank_cells: int


#============================================
def validate_grid(grid: GridSpec) -> None:
	"""
	Check that a grid has at least one row and one column.

	Args:
		grid: Grid specification.
	"""
	if not isinstance(grid.rows, int) or grid.rows < 1:
		raise pn.errors.InvalidGridSpecError(f"rows must be a positive integer, got {grid.rows!r}")
	if not isinstance(grid.columns, int) or grid.columns < 1:
		raise pn.errors.InvalidGridSpecError(f"columns must be a positive integer, got {grid.columns!r}")
	if not isinstance(grid.direction, Direction):
		raise pn.errors.InvalidGridSpecError(f"unknown direction {grid.direction!r}")


#============================================
def validate_box_type(box_type: str) -> str:
	"""
	Normalize and check a page box name.

	Args:
		box_type: Box name such as "cropbox" or "MediaBox".

	Returns:
		Lowercase box name.
	"""
	normalized = box_type.strip().lower()
	if normalized not in BOX_TYPES:
		raise ValueError(f"unknown page box {box_type!r}, expected one of {', '.join(BOX_TYPES)}")
	return normalized
