import pytest

import pdf_nup.config
import pdf_nup.direction


Direction = pdf_nup.config.Direction
GridSpec = pdf_nup.config.GridSpec


#============================================
def test_horizontal_l2r_two_by_three() -> None:
	"""
	Rows outer, columns left to right.
	"""
	grid = GridSpec(2, 3, Direction.HORIZONTAL_L2R)
	assert pdf_nup.direction.fill_order(grid) == [
		(1, 1), (1, 2), (1, 3),
		(2, 1), (2, 2), (2, 3),
	]


#============================================
def test_horizontal_r2l_two_by_three() -> None:
	"""
	Rows outer, columns right to left.
	"""
	grid = GridSpec(2, 3, Direction.HORIZONTAL_R2L)
	assert pdf_nup.direction.fill_order(grid) == [
		(1, 3), (1, 2), (1, 1),
		(2, 3), (2, 2), (2, 1),
	]


#============================================
def test_vertical_l2r_two_by_three() -> None:
	"""
	Columns outer left to right, rows top to bottom.
	"""
	grid = GridSpec(2, 3, Direction.VERTICAL_L2R)
	assert pdf_nup.direction.fill_order(grid) == [
		(1, 1), (2, 1),
		(1, 2), (2, 2),
		(1, 3), (2, 3),
	]


#============================================
def test_vertical_r2l_two_by_three() -> None:
	"""
	Columns outer right to left, rows top to bottom.
	"""
	grid = GridSpec(2, 3, Direction.VERTICAL_R2L)
	assert pdf_nup.direction.fill_order(grid) == [
		(1, 3), (2, 3),
		(1, 2), (2, 2),
		(1, 1), (2, 1),
	]


#============================================
@pytest.mark.parametrize("direction", list(Direction))
@pytest.mark.parametrize("rows,columns", [(1, 1), (1, 4), (3, 1), (3, 4)])
def test_fill_order_is_bijection(direction: Direction, rows: int, columns: int) -> None:
	"""
	Every cell is filled exactly once.
	"""
	cells = pdf_nup.direction.fill_order(GridSpec(rows, columns, direction))
	expected = {(row, column) for row in range(1, rows + 1) for column in range(1, columns + 1)}
	assert len(cells) == rows * columns
	assert set(cells) == expected


#============================================
def test_direction_values_match_cli_names() -> None:
	"""
	Enum values are the names accepted on the command line.
	"""
	assert Direction("horizontalL2R") is Direction.HORIZONTAL_L2R
	assert Direction("verticalR2L") is Direction.VERTICAL_R2L


#============================================
def test_chunk_ranges_partial_last_chunk() -> None:
	"""
	Five pages on a 2x2 grid give two full chunks and one single page.
	"""
	chunks = pdf_nup.direction.chunk_ranges(5, 4)
	assert [list(chunk) for chunk in chunks] == [[0, 1, 2, 3], [4]]
	chunks = pdf_nup.direction.chunk_ranges(9, 4)
	assert [list(chunk) for chunk in chunks] == [[0, 1, 2, 3], [4, 5, 6, 7], [8]]
	assert pdf_nup.direction.chunk_ranges(0, 4) == []
