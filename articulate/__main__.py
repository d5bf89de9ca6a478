import argparse
import json
import logging
import sys
import typing

import articulate.compiler
import articulate.config
import articulate.constants.durations
import articulate.quantize


logger = logging.getLogger(__name__)


def _load_json (path: str) -> typing.Any:

	"""
	Read a JSON document from *path*, or from stdin when *path* is ``-``.
	"""

	if path == "-":
		return json.load(sys.stdin)

	with open(path, 'r') as f:
		return json.load(f)


def _compile (args: argparse.Namespace) -> typing.Dict[str, typing.Any]:

	config = articulate.config.load_config(args.config) if args.config else articulate.config.DEFAULT_CONFIG
	data = _load_json(args.file)

	if args.quantize is not None:
		data = articulate.quantize.quantize_composition(data, args.quantize, args.mode)
		data = articulate.quantize.quantize_track(data, args.quantize, args.mode)

	if isinstance(data, dict) and "tracks" in data:
		return articulate.compiler.compile_performance(data, config=config).to_dict(args.diagnostics)

	context = {"tempo": args.tempo, "timeSignature": args.time_signature}
	return articulate.compiler.compile_events(data, context, config).to_dict(args.diagnostics)


def _quantize (args: argparse.Namespace) -> typing.Any:

	data = _load_json(args.file)

	if isinstance(data, list):
		return articulate.quantize.quantize_events(data, args.grid, mode=args.mode)

	if isinstance(data, dict) and "tracks" in data:
		return articulate.quantize.quantize_composition(data, args.grid, args.mode)

	return articulate.quantize.quantize_track(data, args.grid, args.mode)


def build_parser () -> argparse.ArgumentParser:

	"""
	Build the command line parser.
	"""

	parser = argparse.ArgumentParser(prog="articulate", description="Compile note articulations into performance modulations")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics and progress")
	commands = parser.add_subparsers(dest="command", required=True)

	compile_parser = commands.add_parser("compile", help="Compile a track or composition JSON file")
	compile_parser.add_argument("file", help="JSON file ('-' for stdin)")
	compile_parser.add_argument("--config", help="YAML coefficient file")
	compile_parser.add_argument("--tempo", type=float, default=articulate.compiler.DEFAULT_TEMPO)
	compile_parser.add_argument("--time-signature", default=articulate.compiler.DEFAULT_TIME_SIGNATURE)
	compile_parser.add_argument("--quantize", type=float, metavar="GRID", help="Snap note timing to GRID quarter notes first")
	compile_parser.add_argument("--mode", choices=articulate.quantize.MODES, default="nearest")
	compile_parser.add_argument("--diagnostics", action="store_true", help="Include diagnostics in the output")

	quantize_parser = commands.add_parser("quantize", help="Quantize a note list, track or composition JSON file")
	quantize_parser.add_argument("file", help="JSON file ('-' for stdin)")
	quantize_parser.add_argument("--grid", type=float, default=articulate.constants.durations.DEFAULT_GRID)
	quantize_parser.add_argument("--mode", choices=articulate.quantize.MODES, default="nearest")

	abc_parser = commands.add_parser("abc", help="Print the ABC length suffix for a duration")
	abc_parser.add_argument("duration", type=float, help="Duration in quarter notes")
	abc_parser.add_argument("--grid", type=float, default=articulate.constants.durations.DEFAULT_GRID)

	return parser


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the articulate command line.
	"""

	args = build_parser().parse_args(argv)

	logging.basicConfig(level=logging.INFO if args.verbose else logging.ERROR)

	try:
		if args.command == "compile":
			result: typing.Any = _compile(args)
		elif args.command == "quantize":
			result = _quantize(args)
		else:
			print(articulate.quantize.encode_abc_duration(args.duration, args.grid))
			return 0

	except (OSError, ValueError, TypeError) as e:
		logger.error(f"{args.command} failed: {e}")
		return 1

	print(json.dumps(result, indent=2))
	return 0


if __name__ == "__main__":
	sys.exit(main())
