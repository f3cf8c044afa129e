import os
from io import BytesIO

# The app refuses to start without an API key
os.environ["GEMINI_API_KEY"] = os.environ.get("GEMINI_API_KEY") or "test-key"

import pytest
from PyPDF2 import PageObject, PdfWriter
from fastapi.testclient import TestClient
from langchain_core.documents import Document

from pdfchat import main
from pdfchat.services import DocumentCache, DocumentService, PDFProcessor


def make_pdf(pages: int = 2) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def fail_page_extraction(monkeypatch, page: int = 2):
    """Make text extraction raise on the given (1-based) page of the next PDF read."""
    original = PageObject.extract_text
    seen = []

    def extract_text(self, *args, **kwargs):
        seen.append(self)
        if len(seen) == page:
            raise ValueError("corrupt content stream")
        return original(self, *args, **kwargs)

    monkeypatch.setattr(PageObject, "extract_text", extract_text)


class StubProcessor(PDFProcessor):
    """Returns fixed pages and counts how often extraction runs."""

    def __init__(self, pages=None):
        self.pages = pages or ["Invoice 42\nTotal: 100 EUR", "Due in 30 days"]
        self.calls = []

    def extract_text_from_pdf(self, file_content, filename, fingerprint=None):
        self.calls.append(filename)
        return [
            Document(page_content=text, metadata={"filename": filename, "page": i + 1})
            for i, text in enumerate(self.pages)
        ]


class FakeChatService:
    """Stands in for the Gemini client."""

    def __init__(self, answer="The total is 100 EUR.", error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    def generate_response(self, question, lines):
        self.calls.append((question, list(lines)))
        if self.error is not None:
            raise self.error
        return self.answer

    def health_check(self):
        return {"status": "healthy", "model": "fake"}


@pytest.fixture
def pdf_bytes():
    return make_pdf()


@pytest.fixture
def processor():
    return StubProcessor()


@pytest.fixture
def chat_service():
    return FakeChatService()


@pytest.fixture
def document_service(processor, chat_service):
    return DocumentService(
        pdf_processor=processor,
        chat_service=chat_service,
        cache=DocumentCache(max_entries=4, ttl_seconds=0)
    )


@pytest.fixture
def api(monkeypatch, document_service):
    monkeypatch.setattr(main, "document_service", document_service)
    return TestClient(main.app)
