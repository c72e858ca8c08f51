"""CLI helpers for merging PDFs."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.utils import read_file
from ...tools.common.interfaces import OperationContext


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("merge", help="Merge multiple PDFs into one")
    parser.add_argument("inputs", nargs="+", help="Input PDF files")
    parser.add_argument("output", help="Output PDF path")
    parser.add_argument(
        "--no-metadata",
        action="store_true",
        help="Do not copy metadata from the first document",
    )
    parser.set_defaults(tool_name="merge", build_context=_build_context)


def _build_context(args) -> OperationContext:
    return OperationContext(
        inputs=[read_file(path) for path in args.inputs],
        config={"metadata": not args.no_metadata},
    )
