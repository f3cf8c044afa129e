"""
Chat service for generating answers with the Google Gemini API.
"""

from typing import Any, Dict, List, Optional

import requests

from ..config import settings
from ..exceptions import UpstreamAPIError, UpstreamResponseError
from ..utils import (
    measure_time,
    log_processing_info,
)
import logging

logger = logging.getLogger(__name__)


class ChatService:
    """Service for generating chat responses using the Gemini generateContent endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """Initialize the chat service from explicit values or application settings."""
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.api_base = (api_base or settings.gemini_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.gemini_timeout_seconds
        self.http = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def _create_prompt(self, question: str, context: str) -> str:
        """
        Create a prompt for the LLM.

        Args:
            question: User's question
            context: Full text of the document

        Returns:
            Formatted prompt string
        """
        return f'Based on the document text: "{context}", answer this question: "{question}"'

    def _extract_answer(self, payload: Any) -> str:
        """
        Pull the first candidate's text out of a generateContent response.

        Raises:
            UpstreamResponseError: If the payload does not have the expected shape
        """
        if not isinstance(payload, dict):
            raise UpstreamResponseError("Gemini response is not a JSON object")

        candidates = payload.get("candidates")
        if not candidates:
            block_reason = (payload.get("promptFeedback") or {}).get("blockReason")
            message = "Gemini response contained no candidates"
            if block_reason:
                message += f" (blocked: {block_reason})"
            raise UpstreamResponseError(message, {"block_reason": block_reason})

        try:
            text = candidates[0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            finish_reason = candidates[0].get("finishReason") if isinstance(candidates[0], dict) else None
            raise UpstreamResponseError(
                "Gemini candidate has no text part",
                {"finish_reason": finish_reason}
            ) from e

        if not isinstance(text, str):
            raise UpstreamResponseError("Gemini candidate text is not a string")
        return text

    def _post(self, body: Dict[str, Any]) -> Any:
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }
        try:
            response = self.http.post(self.endpoint, headers=headers, json=body, timeout=self.timeout)
        except requests.Timeout as e:
            raise UpstreamAPIError(f"Gemini request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            # The exception text can carry request details, so only the type is reported
            raise UpstreamAPIError(f"Gemini request failed: {type(e).__name__}") from e

        if not response.ok:
            raise UpstreamAPIError(
                f"Gemini returned HTTP {response.status_code}",
                status=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamResponseError("Gemini response is not valid JSON") from e

    @measure_time
    def generate_response(self, question: str, lines: List[str]) -> str:
        """
        Answer a question using the document text as context.

        Args:
            question: User's question
            lines: Extracted document text, one entry per line

        Returns:
            The answer text of the first candidate
        """
        context = "\n".join(lines)
        prompt = self._create_prompt(question, context)
        body = {"contents": [{"parts": [{"text": prompt}]}]}

        payload = self._post(body)
        answer = self._extract_answer(payload)

        log_processing_info("Response generated", {
            "model": self.model,
            "question_length": len(question),
            "context_length": len(context),
            "answer_length": len(answer)
        })

        return answer

    def health_check(self) -> Dict[str, Any]:
        """Report whether the service is configured to reach Gemini."""
        return {
            "status": "healthy" if self.api_key else "unconfigured",
            "model": self.model
        }
