"""CLI helpers for rendering PDF pages to images."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.model import ArchiveScheme, RasterFormat
from ...core.utils import read_file
from ...tools.common.interfaces import OperationContext


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("rasterize", help="Render every page of a PDF to an image")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument("output", help="Output ZIP archive holding one image per page")
    parser.add_argument(
        "--format",
        type=str.upper,
        choices=[fmt.value for fmt in RasterFormat],
        default=RasterFormat.PNG.value,
        help="Image format",
    )
    parser.add_argument("--dpi", type=int, default=300, help="Render resolution (72-600)")
    parser.set_defaults(tool_name="rasterize", build_context=_build_context, archive_scheme=ArchiveScheme.IMAGES)


def _build_context(args) -> OperationContext:
    return OperationContext(
        data=read_file(args.input),
        config={"format": args.format, "dpi": args.dpi},
    )
