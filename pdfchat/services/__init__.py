"""
Services package for the PDF Chat service.
"""

from .pdf_processor import PDFProcessor
from .chat_service import ChatService
from .document_cache import DocumentCache, ParsedDocument
from .document_service import DocumentService

__all__ = [
    "PDFProcessor",
    "ChatService",
    "DocumentCache",
    "ParsedDocument",
    "DocumentService"
]
