"""FastAPI application exposing PDF utilities from the shared library."""

from __future__ import annotations

import time
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel

from pdfutility import (
    AdmissionController,
    CapacityError,
    CredentialError,
    PdfUtilityError,
    ProcessingError,
    Settings,
    StateError,
    StructuralError,
    ValidationError,
    decode_base64,
    encode_base64,
    is_pdf_encrypted,
    looks_like_pdf,
    registry,
    validate_upload,
)
from pdfutility.core.model import ArchiveScheme, CompressionReport
from pdfutility.core.utils import get_logger
from pdfutility.core.validator import PDF_MEDIA_TYPE
from pdfutility.tools.common.interfaces import OperationContext
from pdfutility.tools.packager import create_archive

LOGGER = get_logger("pdfutility.backend")

app = FastAPI(title="pdfutility API", version="0.1.0")
app.state.settings = Settings.from_env()
app.state.admission = AdmissionController.from_settings(app.state.settings)

DOCS_PREFIX = "/api"
API_PREFIX = "/api/v1/pdf"
ZIP_MEDIA_TYPE = "application/zip"

STATUS_BY_ERROR: tuple[tuple[type[PdfUtilityError], int], ...] = (
    (ValidationError, 400),
    (CredentialError, 401),
    (StateError, 409),
    (StructuralError, 422),
    (CapacityError, 429),
    (ProcessingError, 500),
)


class Base64Payload(BaseModel):
    base64: str


def status_for(exc: PdfUtilityError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


@app.exception_handler(PdfUtilityError)
async def handle_pdfutility_error(request: Request, exc: PdfUtilityError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        LOGGER.error("%s failed: %s", request.url.path, exc, exc_info=exc)
    else:
        LOGGER.info("%s rejected with %d: %s", request.url.path, status_code, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def enforce_admission(request: Request) -> None:
    """Reject the request when the caller exhausted its bucket for this route."""

    controller: AdmissionController = request.app.state.admission
    client_key = request.client.host if request.client else "unknown"
    controller.require_admission(client_key, request.url.path)


router = APIRouter(prefix=API_PREFIX, dependencies=[Depends(enforce_admission)])


def _safe_filename(filename: str | None, default: str) -> str:
    """Return a header-safe filename derived from user input."""

    if not filename:
        return default

    candidate = Path(filename).name.replace('"', "")
    return candidate or default


def _attachment(filename: str, **extra: str) -> dict[str, str]:
    return {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "Access-Control-Expose-Headers": "Content-Disposition",
        **extra,
    }


async def _read_pdf_upload(request: Request, upload: UploadFile) -> bytes:
    settings: Settings = request.app.state.settings
    contents = await upload.read()
    return validate_upload(
        upload.filename,
        upload.content_type,
        contents,
        max_bytes=settings.max_upload_bytes,
    )


async def _run_tool(name: str, context: OperationContext):
    return await run_in_threadpool(registry.run, name, context)


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    """Lightweight health endpoint for uptime checks."""
    return {"status": "ok"}


@app.get(
    f"{DOCS_PREFIX}/openapi.json",
    include_in_schema=False,
    name="prefixed_openapi",
)
async def prefixed_openapi() -> JSONResponse:
    """Expose the OpenAPI schema under the gateway's ``/api`` prefix."""

    return JSONResponse(app.openapi())


@app.get(f"{DOCS_PREFIX}/docs", include_in_schema=False)
async def prefixed_swagger_ui(request: Request) -> HTMLResponse:
    """Serve Swagger UI from the same ``/api`` prefix used by the gateway."""

    return get_swagger_ui_html(
        openapi_url=str(request.url_for("prefixed_openapi")),
        title=f"{app.title} - Swagger UI",
    )


@router.post("/unlock", response_class=Response)
async def unlock_document(
    request: Request,
    file: UploadFile = File(..., description="Password protected PDF."),
    password: str = Form(..., description="Password of the document."),
) -> Response:
    """Remove the password from ``file``. Unprotected PDFs are returned as-is."""

    data = await _read_pdf_upload(request, file)
    result = await _run_tool("unlock", OperationContext(data=data, config={"password": password}))

    filename = "unlocked_" + _safe_filename(file.filename, "document.pdf")
    return Response(result, media_type=PDF_MEDIA_TYPE, headers=_attachment(filename))


@router.post("/lock", response_class=Response)
async def lock_document(
    request: Request,
    file: UploadFile = File(..., description="Unprotected PDF to lock."),
    password: str = Form(..., description="Password used to open the document."),
    owner_password: str | None = Form(None, description="Optional owner password."),
) -> Response:
    """Encrypt ``file`` with AES-128 and the standard permission profile."""

    data = await _read_pdf_upload(request, file)
    LOGGER.info("Locking PDF %s", file.filename)
    context = OperationContext(data=data, config={"password": password, "owner_password": owner_password})
    result = await _run_tool("lock", context)

    filename = "locked_" + _safe_filename(file.filename, "document.pdf")
    return Response(result, media_type=PDF_MEDIA_TYPE, headers=_attachment(filename))


@router.post("/split", response_class=Response)
async def split_document(
    request: Request,
    file: UploadFile = File(..., description="Source PDF to split."),
    pages: str = Form(..., description="Comma separated page ranges, e.g. '1-3,5,7-9'."),
) -> Response:
    """Split ``file`` into one PDF per range, returned as a ZIP archive."""

    data = await _read_pdf_upload(request, file)
    parts = await _run_tool("split", OperationContext(data=data, config={"ranges": pages}))
    archive = await run_in_threadpool(create_archive, parts, ArchiveScheme.SPLIT)

    stem = Path(_safe_filename(file.filename, "document.pdf")).stem
    headers = _attachment(f"split_{stem}_pages.zip", **{"X-Split-Files-Count": str(len(parts))})
    return Response(archive, media_type=ZIP_MEDIA_TYPE, headers=headers)


@router.post("/merge", response_class=Response)
async def merge_documents(
    request: Request,
    files: List[UploadFile] = File(..., description="PDF files to merge, in order."),
) -> Response:
    """Merge the uploaded PDFs into a single document."""

    inputs = [await _read_pdf_upload(request, upload) for upload in files]
    merged = await _run_tool("merge", OperationContext(inputs=inputs))

    filename = f"merged_{int(time.time() * 1000)}.pdf"
    headers = _attachment(filename, **{"X-Merged-Files-Count": str(len(inputs))})
    return Response(merged, media_type=PDF_MEDIA_TYPE, headers=headers)


@router.post("/to-images", response_class=Response)
async def convert_to_images(
    request: Request,
    file: UploadFile = File(..., description="Source PDF to render."),
    format: str = Form("PNG", description="PNG, JPEG, JPG, GIF or BMP."),
    dpi: int | None = Form(None, description="Render resolution between 72 and 600."),
) -> Response:
    """Render every page of ``file`` and return the images as a ZIP archive."""

    settings: Settings = request.app.state.settings
    data = await _read_pdf_upload(request, file)
    resolution = settings.default_dpi if dpi is None else dpi
    context = OperationContext(data=data, config={"format": format, "dpi": resolution})
    images = await _run_tool("rasterize", context)
    image_format = context.resources["format"]
    archive = await run_in_threadpool(create_archive, images, ArchiveScheme.IMAGES, extension=image_format.extension)

    stem = Path(_safe_filename(file.filename, "document.pdf")).stem
    headers = _attachment(
        f"{stem}_images.zip",
        **{
            "X-Images-Count": str(len(images)),
            "X-Image-Format": image_format.value,
            "X-Image-DPI": str(resolution),
        },
    )
    return Response(archive, media_type=ZIP_MEDIA_TYPE, headers=headers)


@router.post("/compress", response_class=Response)
async def compress_document(
    request: Request,
    file: UploadFile = File(..., description="Source PDF to compress."),
    quality: float | None = Form(None, description="JPEG quality between 0.1 and 1.0."),
) -> Response:
    """Recompress the images of ``file`` and report the size difference."""

    settings: Settings = request.app.state.settings
    data = await _read_pdf_upload(request, file)
    level = settings.default_quality if quality is None else quality
    context = OperationContext(data=data, config={"quality": level})
    result = await _run_tool("compress", context)
    report: CompressionReport = context.resources["report"]

    filename = "compressed_" + _safe_filename(file.filename, "document.pdf")
    headers = _attachment(
        filename,
        **{
            "X-Original-Size": str(report.original_size),
            "X-Compressed-Size": str(report.compressed_size),
            "X-Size-Reduction": f"{report.reduction_percent:.2f}",
        },
    )
    return Response(result, media_type=PDF_MEDIA_TYPE, headers=headers)


@router.post("/to-base64", response_model=Base64Payload)
async def convert_to_base64(
    request: Request,
    file: UploadFile = File(..., description="Unprotected PDF to encode."),
) -> Base64Payload:
    """Return ``file`` as a Base64 string."""

    data = await _read_pdf_upload(request, file)
    if await run_in_threadpool(is_pdf_encrypted, data):
        raise ValidationError("PDF is password protected")
    return Base64Payload(base64=encode_base64(data))


@router.post("/from-base64", response_class=Response)
async def convert_from_base64(
    base64: str = Form(..., description="Base64 encoded PDF, optionally as a data URL."),
) -> Response:
    """Decode a Base64 string back into a PDF download."""

    data = decode_base64(base64)
    if not looks_like_pdf(data):
        raise ValidationError("Provided base64 is not valid")

    LOGGER.info("Converted base64 to PDF of %d bytes", len(data))
    filename = f"converted_{int(time.time() * 1000)}.pdf"
    return Response(data, media_type=PDF_MEDIA_TYPE, headers=_attachment(filename))


app.include_router(router)


__all__ = ["app", "status_for"]
