"""
Page geometry: box sizes, grid cells and fit transforms.

All functions here are pure. Coordinates use the PDF convention with the
origin at the bottom-left corner, so grid row 1 is the top row and sits at
the largest y offset.
"""

# Standard Library
import dataclasses

# local repo modules
import pdf_nup as pn
import pdf_nup.errors


IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

# (cos, sin) for clockwise quarter turns, kept exact to avoid 6e-17 noise.
QUARTER_TURN_TRIG = {
	0: (1.0, 0.0),
	90: (0.0, 1.0),
	180: (-1.0, 0.0),
	270: (0.0, -1.0),
}


@dataclasses.dataclass(frozen=True)
class Size:
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class Rect:
	x: float
	y: float
	width: float
	height: float

	@property
	def size(self) -> Size:
		return Size(self.width, self.height)

	@property
	def right(self) -> float:
		return self.x + self.width

	@property
	def top(self) -> float:
		return self.y + self.height


@dataclasses.dataclass(frozen=True)
class Transform:
	"""
	Affine PDF matrix (a, b, c, d, e, f).

	A point maps as x' = a*x + c*y + e and y' = b*x + d*y + f.
	"""
	ctm: tuple[float, float, float, float, float, float] = IDENTITY

	@property
	def scale_x(self) -> float:
		return self.ctm[0]

	@property
	def scale_y(self) -> float:
		return self.ctm[3]


#============================================
def normalize_rotation(rotation: int) -> int:
	"""
	Fold a rotation into the range 0-359.

	Args:
		rotation: Rotation in degrees, clockwise.

	Returns:
		Rotation in [0, 360).
	"""
	return int(rotation) % 360


#============================================
def effective_size(box_size: Size, rotation: int) -> Size:
	"""
	Visual size of a box shown with the given clockwise rotation.

	Args:
		box_size: Unrotated box size.
		rotation: Rotation in degrees.

	Returns:
		Size with width and height swapped for 90 and 270 degrees.
	"""
	if rotation % 180 == 0:
		return box_size
	return Size(box_size.height, box_size.width)


#============================================
def output_page_size(box_size: Size, rows: int, columns: int) -> Size:
	"""
	Size of an output page holding a rows x columns grid of boxes.

	Args:
		box_size: Size of one cell.
		rows: Number of rows.
		columns: Number of columns.

	Returns:
		Output page size.
	"""
	return Size(box_size.width * columns, box_size.height * rows)


#============================================
def output_page_rect(box: Rect, rows: int, columns: int) -> Rect:
	"""
	Output page rectangle anchored at the reference box origin.

	Args:
		box: Reference box of the first source page in the chunk.
		rows: Number of rows.
		columns: Number of columns.

	Returns:
		Output page rectangle.
	"""
	size = output_page_size(box.size, rows, columns)
	return Rect(box.x, box.y, size.width, size.height)


#============================================
def cell_rect(box: Rect, rows: int, columns: int, row: int, column: int) -> Rect:
	"""
	Destination rectangle of a grid cell on the output page.

	Args:
		box: Reference box; its origin anchors the grid and its size is one cell.
		rows: Number of rows.
		columns: Number of columns.
		row: 1-indexed row, 1 is the top row.
		column: 1-indexed column, 1 is the leftmost column.

	Returns:
		Cell rectangle.
	"""
	if not 1 <= row <= rows or not 1 <= column <= columns:
		raise IndexError(f"cell ({row}, {column}) outside a {rows}x{columns} grid")
	x = box.x + box.width * (column - 1)
	y = box.y + box.height * (rows - row)
	return Rect(x, y, box.width, box.height)


#============================================
def compose_transforms(first: Transform, second: Transform) -> Transform:
	"""
	Build the transform that applies first, then second.

	Args:
		first: Transform applied first.
		second: Transform applied to the result of first.

	Returns:
		Combined transform.
	"""
	a1, b1, c1, d1, e1, f1 = first.ctm
	a2, b2, c2, d2, e2, f2 = second.ctm
	return Transform((
		a1 * a2 + b1 * c2,
		a1 * b2 + b1 * d2,
		c1 * a2 + d1 * c2,
		c1 * b2 + d1 * d2,
		e1 * a2 + f1 * c2 + e2,
		e1 * b2 + f1 * d2 + f2,
	))


#============================================
def translation(tx: float, ty: float) -> Transform:
	return Transform((1.0, 0.0, 0.0, 1.0, tx, ty))


#============================================
def scaling(scale: float) -> Transform:
	return Transform((scale, 0.0, 0.0, scale, 0.0, 0.0))


#============================================
def clockwise_rotation(rotation: int) -> Transform:
	"""
	Rotation about the origin by a clockwise quarter turn.

	Args:
		rotation: Degrees, a multiple of 90.

	Returns:
		Rotation transform.
	"""
	normalized = normalize_rotation(rotation)
	if normalized not in QUARTER_TURN_TRIG:
		raise ValueError(f"page rotation must be a multiple of 90 degrees, got {rotation}")
	cos_value, sin_value = QUARTER_TURN_TRIG[normalized]
	return Transform((cos_value, -sin_value, sin_value, cos_value, 0.0, 0.0))


#============================================
def apply_transform(transform: Transform, x: float, y: float) -> tuple[float, float]:
	"""
	Map a point through a transform.

	Args:
		transform: Transform to apply.
		x: Point x.
		y: Point y.

	Returns:
		Tuple of (x, y).
	"""
	a, b, c, d, e, f = transform.ctm
	return (a * x + c * y + e, b * x + d * y + f)


#============================================
def transform_rect(transform: Transform, rect: Rect) -> Rect:
	"""
	Axis-aligned bounds of a rectangle after a transform.

	Args:
		transform: Transform to apply.
		rect: Source rectangle.

	Returns:
		Bounding rectangle of the mapped corners.
	"""
	corners = [
		apply_transform(transform, rect.x, rect.y),
		apply_transform(transform, rect.right, rect.y),
		apply_transform(transform, rect.x, rect.top),
		apply_transform(transform, rect.right, rect.top),
	]
	xs = [point[0] for point in corners]
	ys = [point[1] for point in corners]
	return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


#============================================
def fit_transform(source_box: Rect, dest_rect: Rect, rotation: int = 0) -> Transform:
	"""
	Map a source box into a destination rectangle, keeping its aspect ratio.

	The box is turned clockwise by rotation, scaled uniformly to the largest
	size that fits, and centered in the destination.

	Args:
		source_box: Box in source page coordinates.
		dest_rect: Destination rectangle on the target page.
		rotation: Clockwise rotation in degrees, a multiple of 90.

	Returns:
		Transform from source coordinates to target coordinates.
	"""
	if source_box.width <= 0 or source_box.height <= 0:
		raise pn.errors.DegenerateGeometryError(
			f"source box {source_box.width}x{source_box.height} has no area"
		)
	if dest_rect.width <= 0 or dest_rect.height <= 0:
		raise pn.errors.DegenerateGeometryError(
			f"destination {dest_rect.width}x{dest_rect.height} has no area"
		)

	to_origin = translation(-source_box.x, -source_box.y)
	rotate = clockwise_rotation(rotation)
	upright = compose_transforms(to_origin, rotate)
	bounds = transform_rect(upright, source_box)
	upright = compose_transforms(upright, translation(-bounds.x, -bounds.y))

	scale = min(dest_rect.width / bounds.width, dest_rect.height / bounds.height)
	offset_x = dest_rect.x + (dest_rect.width - bounds.width * scale) / 2.0
	offset_y = dest_rect.y + (dest_rect.height - bounds.height * scale) / 2.0
	placed = compose_transforms(scaling(scale), translation(offset_x, offset_y))
	return compose_transforms(upright, placed)
