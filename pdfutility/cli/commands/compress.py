"""CLI helpers for compressing PDF files."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.utils import read_file
from ...tools.common.interfaces import OperationContext


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("compress", help="Recompress the images of a PDF file")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument("output", help="Destination for compressed PDF")
    parser.add_argument(
        "--quality",
        type=float,
        default=0.5,
        help="JPEG quality between 0.1 and 1.0",
    )
    parser.set_defaults(tool_name="compress", build_context=_build_context)


def _build_context(args) -> OperationContext:
    return OperationContext(data=read_file(args.input), config={"quality": args.quality})
