"""
Utility functions for the PDF Chat service.
"""

import time
import hashlib
from functools import wraps
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import logging

from .config import settings

logger = logging.getLogger(__name__)


def validate_file_type(filename: str, content_type: Optional[str] = None) -> bool:
    """Validate if the file type is allowed."""
    if content_type == "application/pdf":
        return True
    if not filename or '.' not in filename:
        return False

    file_extension = filename.lower().split('.')[-1]
    return file_extension in settings.allowed_file_types


def validate_file_size(file_size: int) -> bool:
    """Validate if the file size is within limits."""
    max_size_bytes = settings.max_file_size_mb * 1024 * 1024
    return file_size <= max_size_bytes


def calculate_file_hash(content: bytes) -> str:
    """Calculate SHA-256 hash of file content."""
    return hashlib.sha256(content).hexdigest()


def format_timestamp() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def measure_time(func):
    """Decorator to measure function execution time."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        end_time = time.time()
        execution_time = end_time - start_time

        logger.info(f"{func.__name__} executed in {execution_time:.2f} seconds")
        return result
    return wrapper


def create_document_metadata(filename: str, page_num: int, total_pages: int,
                             fingerprint: Optional[str] = None) -> Dict[str, Any]:
    """Create metadata for a single extracted page."""
    metadata = {
        'source': filename,
        'filename': filename,
        'page': page_num,
        'total_pages': total_pages,
        'created_at': format_timestamp()
    }

    if fingerprint:
        metadata['fingerprint'] = fingerprint

    return metadata


def truncate(text: str, limit: int = 80) -> str:
    """Shorten text for log lines."""
    if len(text) <= limit:
        return text
    return text[:limit - 3] + "..."


def log_processing_info(operation: str, details: Dict[str, Any]) -> None:
    """Log processing information."""
    logger.info(f"{operation}: {details}")


def handle_processing_error(operation: str, error: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
    """Handle and log processing errors."""
    error_info = {
        'operation': operation,
        'error_type': type(error).__name__,
        'error_message': str(error),
        'timestamp': format_timestamp()
    }

    if context:
        error_info.update(context)

    logger.error(f"Processing error: {error_info}")
    return error_info
