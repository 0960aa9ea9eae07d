"""
CLI entry points for N-up PDF imposition.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# local repo modules
import pdf_nup as pn
import pdf_nup.compose
import pdf_nup.config
import pdf_nup.errors


Direction = pn.config.Direction
GridSpec = pn.config.GridSpec
NupConfig = pn.config.NupConfig

DEFAULT_ROWS = pn.config.DEFAULT_ROWS
DEFAULT_COLUMNS = pn.config.DEFAULT_COLUMNS
DEFAULT_DIRECTION = pn.config.DEFAULT_DIRECTION
DEFAULT_BOX_TYPE = pn.config.DEFAULT_BOX_TYPE
BOX_TYPES = pn.config.BOX_TYPES

EPILOG = """Valid directions:
  horizontalL2R  {horizontalL2R}
  horizontalR2L  {horizontalR2L}
  verticalL2R    {verticalL2R}
  verticalR2L    {verticalR2L}

Examples:
  pdf-nup input.pdf output.pdf
  pdf-nup --rows 1 --columns 2 input.pdf output.pdf
  pdf-nup --direction horizontalR2L input.pdf output.pdf
""".format(**{direction.value: text for direction, text in pn.config.DIRECTION_HELP.items()})


#============================================
def positive_int(value: str) -> int:
	"""
	Argparse type for integers of at least 1.

	Args:
		value: Raw argument text.

	Returns:
		Parsed integer.
	"""
	try:
		number = int(value)
	except ValueError as error:
		raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from error
	if number < 1:
		raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
	return number


#============================================
def build_config(args: argparse.Namespace) -> NupConfig:
	"""
	Build N-up config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		NupConfig.
	"""
	grid = GridSpec(
		rows=args.rows,
		columns=args.columns,
		direction=Direction(args.direction),
	)
	config = NupConfig(
		grid=grid,
		box_type=args.box_type,
		max_workers=args.workers,
		always_normalize=args.always_normalize,
		verbose=args.verbose,
	)
	return config


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, None for sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(
		prog="pdf-nup",
		description="Tile rows x columns pages of a PDF onto each output page.",
		epilog=EPILOG,
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	parser.add_argument("input_path", help="Path to the input PDF file.")
	parser.add_argument("output_path", help="Path to the output PDF file.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-r", "--rows", dest="rows", type=positive_int, help="Number of rows.")
	layout_group.add_argument("-c", "--columns", dest="columns", type=positive_int, help="Number of columns.")
	layout_group.add_argument(
		"-d", "--direction",
		dest="direction",
		choices=[direction.value for direction in Direction],
		help="Reading order of pages on each sheet.",
	)
	layout_group.add_argument("-b", "--box", dest="box_type", choices=BOX_TYPES, help="Page box to tile.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-w", "--workers", dest="workers", type=positive_int, default=None, help="Normalization worker threads.")
	behavior_group.add_argument("-n", "--always-normalize", dest="always_normalize", action="store_true", help="Redraw every page upright even without quarter-turn pages.")
	behavior_group.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Print progress.")
	behavior_group.add_argument("-q", "--quiet", dest="verbose", action="store_false", help="Only print errors.")

	parser.set_defaults(
		rows=DEFAULT_ROWS,
		columns=DEFAULT_COLUMNS,
		direction=DEFAULT_DIRECTION.value,
		box_type=DEFAULT_BOX_TYPE,
		always_normalize=False,
		verbose=True,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> int:
	"""
	Run the N-up conversion for parsed arguments.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Process exit code.
	"""
	config = build_config(args)
	if config.verbose:
		print("PDF N-up")
		print(f"Input PDF: {args.input_path}")
		print(f"Output PDF: {args.output_path}")
		print(f"Grid: {config.grid.rows} rows x {config.grid.columns} columns")
		print(f"Direction: {config.grid.direction.value}")
		print(f"Page box: {config.box_type}")

	start_time = time.perf_counter()
	try:
		result = pn.compose.nup_file(
			pathlib.Path(args.input_path),
			pathlib.Path(args.output_path),
			config,
		)
	except pn.errors.NupError as error:
		print(f"Error: {error}", file=sys.stderr)
		return 1

	if config.verbose:
		print(f"Source pages: {result.source_pages}")
		print(f"Pages written: {result.output_pages}")
		print(f"Normalized rotation: {result.normalized}")
		if result.blank_cells > 0:
			print(f"Blank cells from unreadable pages: {result.blank_cells}")
		print(f"Timing: total={time.perf_counter() - start_time:.2f}s")
	return 0


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	return run_pipeline(args)
