"""Command line interface for the pdfutility toolkit."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from ..core.exceptions import PdfUtilityError
from ..core.utils import get_logger, write_file
from ..tools import load_builtin_plugins
from ..tools.common.interfaces import OperationContext
from ..tools.common.pipeline import registry
from ..tools.packager import create_archive
from .commands import compress, lock, merge, rasterize, split, unlock

COMMAND_MODULES = [split, merge, lock, unlock, rasterize, compress]

LOGGER = get_logger("pdfutility.cli")


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pdfutility", description="pdfutility CLI")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    for module in COMMAND_MODULES:
        module.configure_parser(subparsers)
    return parser


def _to_payload(args, context: OperationContext, result: bytes | list[bytes]) -> bytes:
    if isinstance(result, bytes):
        return result
    image_format = context.resources.get("format")
    extension = image_format.extension if image_format is not None else None
    return create_archive(result, args.archive_scheme, extension=extension)


def main(argv: Sequence[str] | None = None) -> Path:
    load_builtin_plugins()
    parser = _create_parser()
    args = parser.parse_args(argv)
    try:
        context: OperationContext = args.build_context(args)
        result = registry.run(args.tool_name, context)
        output = write_file(args.output, _to_payload(args, context, result))
    except (PdfUtilityError, FileNotFoundError) as exc:
        raise SystemExit(f"pdfutility {args.command}: {exc}") from exc
    LOGGER.info("Wrote %s", output)
    return output


if __name__ == "__main__":  # pragma: no cover
    main()
