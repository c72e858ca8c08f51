"""CLI helpers for removing PDF passwords."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.utils import read_file
from ...tools.common.interfaces import OperationContext


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("unlock", help="Remove the password from a PDF")
    parser.add_argument("input", help="Input PDF path")
    parser.add_argument("output", help="Destination PDF path")
    parser.add_argument("--password", required=True, help="Password of the document")
    parser.set_defaults(tool_name="unlock", build_context=_build_context)


def _build_context(args) -> OperationContext:
    return OperationContext(data=read_file(args.input), config={"password": args.password})
