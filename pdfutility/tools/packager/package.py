"""Bundle several result buffers into a single ZIP archive."""

from __future__ import annotations

from io import BytesIO
from typing import Sequence
from zipfile import ZIP_DEFLATED, ZipFile

from ...core.exceptions import EmptyInputError, ProcessingError, ValidationError
from ...core.model import ArchiveScheme
from ...core.utils import get_logger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfutility.tools.package")


class PackagingError(ProcessingError):
    """Raised when the archive cannot be built."""


def create_archive(
    buffers: Sequence[bytes],
    scheme: ArchiveScheme | str = ArchiveScheme.SPLIT,
    *,
    extension: str | None = None,
) -> bytes:
    """Write ``buffers`` into one ZIP archive, named by ``scheme`` in input order.

    Entry ``i`` (1-based) holds ``buffers[i - 1]``. Either the whole archive
    is returned or :class:`PackagingError` is raised.
    """

    if not buffers:
        raise EmptyInputError("No outputs to package")
    if not isinstance(scheme, ArchiveScheme):
        try:
            scheme = ArchiveScheme[str(scheme).upper()]
        except KeyError as exc:
            raise ValidationError(f"Unknown archive scheme: {scheme!r}") from exc
    names = [scheme.entry_name(index, extension) for index in range(1, len(buffers) + 1)]

    target = BytesIO()
    try:
        with ZipFile(target, "w", compression=ZIP_DEFLATED) as archive:
            for name, buffer in zip(names, buffers):
                archive.writestr(name, buffer)
                LOGGER.debug("Added %s (%d bytes) to archive", name, len(buffer))
    except (OSError, ValueError) as exc:
        raise PackagingError(f"Unable to build archive: {exc}") from exc

    payload = target.getvalue()
    LOGGER.info("Created ZIP archive with %d entries, %d bytes", len(buffers), len(payload))
    return payload


@register_tool("package")
class PackageTool(BaseTool):
    name = "package"

    def run(self) -> bytes:
        context = self.context
        buffers = list(context.inputs)
        scheme = context.config.get("scheme", ArchiveScheme.SPLIT)
        extension = context.config.get("extension")

        result = create_archive(buffers, scheme, extension=extension)
        context.resources["result"] = result
        return result


__all__ = ["PackagingError", "create_archive", "PackageTool"]
