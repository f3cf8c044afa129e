"""
FastAPI application for the PDF Chat service.
"""

import logging
from typing import Optional

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings, validate_required_settings
from .exceptions import GENERIC_PROCESSING_ERROR, DocumentValidationError, PDFChatError
from .models import AskResponse, ErrorResponse, HealthResponse, UploadRouteStatus
from .services import DocumentService
from .services.document_service import file_too_large_message
from .utils import format_timestamp, handle_processing_error

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logging.getLogger("urllib3").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

# Validate required settings on startup
try:
    validate_required_settings()
except ValueError as e:
    logger.error(f"Configuration validation failed: {e}")
    raise

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Ask questions about uploaded PDF documents",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services
document_service = DocumentService()


def _error_response(exc: PDFChatError) -> JSONResponse:
    if exc.status_code < 500:
        body = ErrorResponse(error=exc.message)
    else:
        body = ErrorResponse(
            error=GENERIC_PROCESSING_ERROR,
            kind=exc.kind,
            retryable=exc.retryable,
            detail=exc.message if settings.debug else None
        )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(PDFChatError)
async def pdfchat_exception_handler(request: Request, exc: PDFChatError):
    """Turn service errors into JSON error bodies."""
    if exc.status_code < 500:
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return _error_response(exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {str(exc)}")
    return _error_response(PDFChatError(str(exc)))


@app.get("/", response_model=dict)
async def root():
    """Root endpoint."""
    return {
        "message": "PDF Chat API is running",
        "version": settings.app_version,
        "timestamp": format_timestamp()
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    health_info = document_service.health_check()

    return HealthResponse(
        status=health_info.get("status", "unknown"),
        message="Service health check completed",
        version=settings.app_version,
        timestamp=format_timestamp(),
        cached_documents=health_info.get("cached_documents", 0)
    )


async def read_upload(file: UploadFile, file_name: str, max_bytes: int) -> bytes:
    """
    Read an upload, refusing anything over ``max_bytes``.

    A known size is checked before reading; otherwise at most one byte past
    the limit is read.
    """
    size = getattr(file, "size", None)
    if size is not None and size > max_bytes:
        raise DocumentValidationError(file_too_large_message(file_name, size), {"filename": file_name})

    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise DocumentValidationError(file_too_large_message(file_name), {"filename": file_name})
    return content


@app.get("/api/upload", response_model=UploadRouteStatus)
async def upload_route_status():
    """Liveness check for the upload route."""
    return UploadRouteStatus(msg="Upload route working...")


@app.post(
    "/api/upload",
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def upload_and_ask(
    file: Optional[UploadFile] = File(None),
    file_name: Optional[str] = Form(None, alias="fileName"),
    question: Optional[str] = Form(None)
):
    """
    Answer a question about a PDF.

    Send the PDF under ``file`` the first time; afterwards ``fileName`` alone
    refers to the already parsed document.
    """
    if file is not None and file.filename:
        file_name = file.filename

    try:
        document_service.check_request(question, file_name, file is not None)
        content = None
        if file is not None:
            content = await read_upload(file, file_name, settings.max_file_size_mb * 1024 * 1024)

        return await run_in_threadpool(
            document_service.answer_question,
            question,
            file_name,
            content,
            file.content_type if file is not None else None
        )

    except PDFChatError:
        raise
    except Exception as e:
        handle_processing_error("upload_and_ask", e, {"filename": file_name})
        raise PDFChatError(str(e)) from e


def run() -> None:
    import uvicorn
    uvicorn.run(
        "pdfchat.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )


if __name__ == "__main__":
    run()
