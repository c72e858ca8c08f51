"""CLI helpers for the split command."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.model import ArchiveScheme
from ...core.utils import read_file
from ...tools.common.interfaces import OperationContext


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("split", help="Split a PDF into one document per page range")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument("output", help="Output ZIP archive holding the split documents")
    parser.add_argument("--ranges", required=True, help="Comma separated page ranges, e.g. 1-3,5")
    parser.set_defaults(tool_name="split", build_context=_build_context, archive_scheme=ArchiveScheme.SPLIT)


def _build_context(args) -> OperationContext:
    return OperationContext(data=read_file(args.input), config={"ranges": args.ranges})
