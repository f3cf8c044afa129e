"""
PDF processing service for extracting text from PDF files.
"""

import PyPDF2
from io import BytesIO
from typing import List, Optional
from langchain_core.documents import Document

from ..exceptions import ExtractionError
from ..utils import (
    measure_time,
    create_document_metadata,
    log_processing_info,
)
import logging

logger = logging.getLogger(__name__)


class PDFProcessor:
    """Service for processing PDF files and extracting text."""

    @measure_time
    def extract_text_from_pdf(
        self,
        file_content: bytes,
        filename: str,
        fingerprint: Optional[str] = None
    ) -> List[Document]:
        """
        Extract text from PDF file content, one Document per page.

        Pages without extractable text are kept with empty content so that
        page numbering matches the source file.

        Args:
            file_content: PDF file content as bytes
            filename: Name of the PDF file
            fingerprint: Content hash recorded in each page's metadata

        Returns:
            List of Document objects with extracted text

        Raises:
            ExtractionError: If the content cannot be read as a PDF or a page
                cannot be extracted; nothing partial is returned
        """
        try:
            pdf_reader = PyPDF2.PdfReader(BytesIO(file_content))
            total_pages = len(pdf_reader.pages)
        except Exception as e:
            raise ExtractionError(
                f"Failed to read PDF {filename}: {e}",
                {"filename": filename, "file_size": len(file_content)}
            ) from e

        log_processing_info("PDF extraction started", {
            "filename": filename,
            "total_pages": total_pages,
            "file_size": len(file_content)
        })

        documents = []
        for page_num, page in enumerate(pdf_reader.pages):
            try:
                page_text = page.extract_text() or ""
            except Exception as page_error:
                raise ExtractionError(
                    f"Failed to extract text from page {page_num + 1} of {filename}: {page_error}",
                    {"filename": filename, "page": page_num + 1}
                ) from page_error

            documents.append(Document(
                page_content=page_text,
                metadata=create_document_metadata(
                    filename=filename,
                    page_num=page_num + 1,
                    total_pages=total_pages,
                    fingerprint=fingerprint
                )
            ))

        log_processing_info("PDF extraction completed", {
            "filename": filename,
            "pages_extracted": len(documents),
            "total_pages": total_pages
        })

        return documents

    @staticmethod
    def to_lines(documents: List[Document]) -> List[str]:
        """Concatenate page texts with newlines and split the result into lines."""
        return "\n".join(doc.page_content for doc in documents).split("\n")
