"""
Cell fill order for each reading direction.
"""

# local repo modules
import pdf_nup as pn
import pdf_nup.config


Direction = pn.config.Direction
GridSpec = pn.config.GridSpec

# direction -> (column_major, columns_reversed)
#   horizontalL2R: rows 1..R outer, columns 1..C inner
#   horizontalR2L: rows 1..R outer, columns C..1 inner
#   verticalL2R:   columns 1..C outer, rows 1..R inner
#   verticalR2L:   columns C..1 outer, rows 1..R inner
FILL_ORDER_TABLE = {
	Direction.HORIZONTAL_L2R: (False, False),
	Direction.HORIZONTAL_R2L: (False, True),
	Direction.VERTICAL_L2R: (True, False),
	Direction.VERTICAL_R2L: (True, True),
}


#============================================
def fill_order(grid: GridSpec) -> list[tuple[int, int]]:
	"""
	List grid cells in the order source pages fill them.

	Args:
		grid: Grid specification.

	Returns:
		List of 1-indexed (row, column) pairs, one per cell.
	"""
	column_major, columns_reversed = FILL_ORDER_TABLE[grid.direction]
	row_numbers = list(range(1, grid.rows + 1))
	column_numbers = list(range(1, grid.columns + 1))
	if columns_reversed:
		column_numbers.reverse()

	cells: list[tuple[int, int]] = []
	if column_major:
		for column in column_numbers:
			for row in row_numbers:
				cells.append((row, column))
	else:
		for row in row_numbers:
			for column in column_numbers:
				cells.append((row, column))
	return cells


#============================================
def chunk_ranges(page_count: int, cells_per_page: int) -> list[range]:
	"""
	Split source page indices into consecutive output page groups.

	Args:
		page_count: Number of source pages.
		cells_per_page: Cells on each output page.

	Returns:
		List of index ranges; the last one may be shorter.
	"""
	return [
		range(start, min(start + cells_per_page, page_count))
		for start in range(0, page_count, cells_per_page)
	]
