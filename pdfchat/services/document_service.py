"""
Main document service that ties PDF extraction, the parsed document cache and
answer generation together.
"""

from typing import Any, Dict, Optional

from .pdf_processor import PDFProcessor
from .chat_service import ChatService
from .document_cache import DocumentCache, ParsedDocument
from ..config import settings
from ..exceptions import DocumentValidationError, PDFChatError
from ..models import AskResponse
from ..utils import (
    calculate_file_hash,
    validate_file_type,
    validate_file_size,
    measure_time,
    truncate,
    log_processing_info,
    handle_processing_error
)
import logging

logger = logging.getLogger(__name__)

NO_DOCUMENT_MESSAGE = "No file uploaded or no PDF content available for this file."
QUESTION_REQUIRED_MESSAGE = "Question is required."


def file_too_large_message(file_name: str, size: Optional[int] = None) -> str:
    """Message for an upload over the size limit, with its size when known."""
    if size is None:
        return f"File {file_name} is too large. Maximum size is {settings.max_file_size_mb}MB."
    return (
        f"File {file_name} is too large: {size / 1024 / 1024:.1f}MB. "
        f"Maximum size is {settings.max_file_size_mb}MB."
    )


class DocumentService:
    """Answers questions about uploaded PDFs."""

    def __init__(
        self,
        pdf_processor: Optional[PDFProcessor] = None,
        chat_service: Optional[ChatService] = None,
        cache: Optional[DocumentCache] = None
    ):
        """Initialize the document service."""
        self.pdf_processor = pdf_processor or PDFProcessor()
        self.chat_service = chat_service or ChatService()
        self.cache = cache or DocumentCache(
            max_entries=settings.document_cache_max_entries,
            ttl_seconds=settings.document_cache_ttl_seconds
        )

    def _validate_upload(self, file_name: str, content: bytes, content_type: Optional[str]) -> None:
        """
        Validate an uploaded file.

        Raises:
            DocumentValidationError: If the file is empty, too large or not a PDF
        """
        if not content:
            raise DocumentValidationError(f"File {file_name} is empty.")

        if not validate_file_size(len(content)):
            raise DocumentValidationError(file_too_large_message(file_name, len(content)))

        if not validate_file_type(file_name, content_type):
            raise DocumentValidationError(
                f"Invalid file type: {file_name}. Only PDF files are allowed."
            )

    def _load_upload(
        self,
        file_name: str,
        content: bytes,
        content_type: Optional[str],
        cached: Optional[ParsedDocument]
    ) -> ParsedDocument:
        """Return the parsed form of an uploaded file, extracting it only when its content is new."""
        self._validate_upload(file_name, content, content_type)
        fingerprint = calculate_file_hash(content)

        if cached is not None and cached.fingerprint == fingerprint:
            return cached

        shared = self.cache.bind(file_name, fingerprint)
        if shared is not None:
            log_processing_info("Reusing parsed content", {
                "filename": file_name,
                "parsed_as": shared.file_name,
                "fingerprint": fingerprint[:12]
            })
            return shared

        documents = self.pdf_processor.extract_text_from_pdf(content, file_name, fingerprint)
        parsed = ParsedDocument(
            file_name=file_name,
            fingerprint=fingerprint,
            documents=documents,
            lines=self.pdf_processor.to_lines(documents)
        )
        self.cache.put(file_name, parsed)

        log_processing_info("Document cached", {
            "filename": file_name,
            "fingerprint": fingerprint[:12],
            "pages": len(documents),
            "lines": len(parsed.lines),
            "cached_documents": len(self.cache)
        })
        return parsed

    def check_request(
        self,
        question: Optional[str],
        file_name: Optional[str],
        has_file: bool
    ) -> Optional[ParsedDocument]:
        """
        Check that a request names a usable document and carries a question.

        Returns:
            The cached parse for ``file_name``, if there is one

        Raises:
            DocumentValidationError: If there is no document to use or no question
        """
        cached = self.cache.get_by_name(file_name) if file_name else None

        if not file_name or (cached is None and not has_file):
            raise DocumentValidationError(NO_DOCUMENT_MESSAGE, {"filename": file_name})
        if not question:
            raise DocumentValidationError(QUESTION_REQUIRED_MESSAGE, {"filename": file_name})
        return cached

    @measure_time
    def answer_question(
        self,
        question: Optional[str],
        file_name: Optional[str],
        file_content: Optional[bytes] = None,
        content_type: Optional[str] = None
    ) -> AskResponse:
        """
        Answer a question about a PDF.

        Args:
            question: User's question
            file_name: Name identifying the document
            file_content: Raw PDF bytes, or None to use a previously parsed document
            content_type: Content type reported for the upload

        Returns:
            AskResponse with the answer and the document's text lines

        Raises:
            DocumentValidationError: If there is no document to use or no question
            PDFChatError: If extraction or answer generation fails
        """
        cached = self.check_request(question, file_name, file_content is not None)

        try:
            if file_content is not None:
                parsed = self._load_upload(file_name, file_content, content_type, cached)
            else:
                parsed = cached

            log_processing_info("Question received", {
                "filename": file_name,
                "question": truncate(question),
                "lines": len(parsed.lines)
            })

            answer = self.chat_service.generate_response(question, parsed.lines)

            return AskResponse(
                answer=answer,
                file_name=file_name,
                parsed_text=parsed.lines
            )

        except DocumentValidationError:
            raise
        except PDFChatError as e:
            handle_processing_error(
                "answer_question",
                e,
                {"filename": file_name, "kind": e.kind, **e.context}
            )
            raise

    def health_check(self) -> Dict[str, Any]:
        """
        Perform health check.

        Returns:
            Dictionary with health status information
        """
        chat_health = self.chat_service.health_check()
        return {
            "status": chat_health.get("status", "unknown"),
            "chat_service": chat_health,
            "cached_documents": len(self.cache)
        }
