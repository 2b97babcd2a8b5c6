import argparse
import json
import logging
import sys
from pathlib import Path

from . import einsum
from .demo import runAll
from .export import formatNonzero, formatSlices
from .tensor import Tensor

logger = logging.getLogger("tensor_einsum")


def _loadTensor(text):
    try:
        return Tensor.fromNested(json.loads(text))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Tensor argument is not valid JSON: {text!r} ({exc})") from exc


def _eval(notation, tensorArgs, slices):
    tensors = [_loadTensor(text) for text in tensorArgs]
    result = einsum(notation, tensors)
    print(formatSlices(result) if slices else formatNonzero(result))


def _buildParser():
    parser = argparse.ArgumentParser(description="Einsum contractions on small dense tensors")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="cmd")

    demoParser = subparsers.add_parser("demo", help="Run the relation-composition demo")
    demoParser.add_argument(
        "--out",
        type=Path,
        default=Path("."),
        help="Directory receiving the relation CSV files (default: current directory)",
    )

    evalParser = subparsers.add_parser("eval", help="Evaluate one einsum expression")
    evalParser.add_argument("notation", help="Einsum notation, e.g. 'ij,jk->ik'")
    evalParser.add_argument("tensors", nargs="*", help="Tensors as JSON nested lists")
    evalParser.add_argument("--slices", action="store_true", help="Print matrix slices")
    return parser


def main(argv=None):
    parser = _buildParser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.setLevel(logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.cmd == "demo":
            runAll(args.out)
            return 0
        if args.cmd == "eval":
            _eval(args.notation, args.tensors, args.slices)
            return 0
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    parser.print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
