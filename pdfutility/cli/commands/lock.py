"""CLI helpers for password protecting PDFs."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.utils import read_file
from ...tools.common.interfaces import OperationContext


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("lock", help="Password protect a PDF")
    parser.add_argument("input", help="Input PDF path")
    parser.add_argument("output", help="Destination PDF path")
    parser.add_argument("--password", required=True, help="User password")
    parser.add_argument("--owner-password", help="Owner password, defaults to the user password")
    parser.set_defaults(tool_name="lock", build_context=_build_context)


def _build_context(args) -> OperationContext:
    return OperationContext(
        data=read_file(args.input),
        config={"password": args.password, "owner_password": args.owner_password},
    )
