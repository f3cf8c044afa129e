"""
Pydantic models for request/response validation.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class AskResponse(BaseModel):
    """Response model for an answered question."""
    model_config = ConfigDict(populate_by_name=True)

    answer: str = Field(..., description="Answer generated from the document text")
    file_name: str = Field(..., alias="fileName", description="Name of the document the answer refers to")
    parsed_text: List[str] = Field(default_factory=list, alias="parsedText", description="Extracted document text, one entry per line")


class UploadRouteStatus(BaseModel):
    """Response model for the upload route liveness check."""
    msg: str = Field(..., description="Status message")


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str = Field(..., description="Health status")
    message: str = Field(..., description="Status message")
    version: str = Field(..., description="Application version")
    timestamp: str = Field(..., description="Current timestamp")
    cached_documents: int = Field(default=0, description="Number of parsed documents held in memory")


class ErrorResponse(BaseModel):
    """Response model for errors."""
    error: str = Field(..., description="Error message")
    kind: Optional[str] = Field(default=None, description="Error category")
    retryable: Optional[bool] = Field(default=None, description="Whether repeating the request may succeed")
    detail: Optional[str] = Field(default=None, description="Detailed error information (debug mode only)")


class ChatMessage(BaseModel):
    """A single transcript entry held by the chat client."""
    model_config = ConfigDict(populate_by_name=True)

    role: Literal["user", "bot"] = Field(..., description="Who wrote the message")
    content: str = Field(..., description="Message text")
    file_name: str = Field(..., alias="fileName", description="Document the message is about")
