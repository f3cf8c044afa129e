"""
PDF Chat

Upload PDFs, pick one and ask questions about it. Answers come from Google
Gemini using the document's extracted text as context.

Features:
- In-memory PDF text extraction (no file storage)
- Parsed documents cached by content fingerprint, bounded by size and age
- Google Gemini integration
- Typed error kinds reported to the caller
- Streamlit chat page
"""

__version__ = "1.0.0"
__author__ = "PDF Chat Team"
__description__ = "Ask questions about uploaded PDF documents"
