import pytest
from langchain_core.documents import Document

from pdfchat.exceptions import ExtractionError
from pdfchat.services.pdf_processor import PDFProcessor

from tests.conftest import fail_page_extraction, make_pdf


def test_one_document_per_page():
    documents = PDFProcessor().extract_text_from_pdf(make_pdf(3), "blank.pdf", "abc123")

    assert len(documents) == 3
    assert [doc.metadata["page"] for doc in documents] == [1, 2, 3]
    assert all(doc.metadata["total_pages"] == 3 for doc in documents)
    assert all(doc.metadata["fingerprint"] == "abc123" for doc in documents)
    assert all(isinstance(doc.page_content, str) for doc in documents)


def test_unreadable_content_raises_extraction_error():
    with pytest.raises(ExtractionError) as exc_info:
        PDFProcessor().extract_text_from_pdf(b"definitely not a pdf", "broken.pdf")

    assert exc_info.value.kind == "extraction"
    assert exc_info.value.context["filename"] == "broken.pdf"


def test_failed_page_fails_the_whole_document(monkeypatch):
    fail_page_extraction(monkeypatch, page=2)

    with pytest.raises(ExtractionError) as exc_info:
        PDFProcessor().extract_text_from_pdf(make_pdf(3), "scanned.pdf")

    assert exc_info.value.context == {"filename": "scanned.pdf", "page": 2}
    assert "page 2 of scanned.pdf" in exc_info.value.message


def test_to_lines_joins_pages_then_splits_lines():
    documents = [
        Document(page_content="Title\nIntro"),
        Document(page_content=""),
        Document(page_content="Closing"),
    ]

    assert PDFProcessor.to_lines(documents) == ["Title", "Intro", "", "Closing"]


def test_to_lines_of_no_pages():
    assert PDFProcessor.to_lines([]) == [""]
