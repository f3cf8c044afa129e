"""
Chat client for the PDF Chat API.

Holds everything the chat page shows: the picked files, the selected file, the
question being typed, the transcript, a loading flag and the last error. The
Streamlit page renders this state and forwards user actions to it.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

import requests

from .config import settings
from .models import ChatMessage
import logging

logger = logging.getLogger(__name__)

NO_FILE_SELECTED_MESSAGE = "Please select a file to ask a question about."
NO_QUESTION_MESSAGE = "Please enter a question."
DEFAULT_SERVER_ERROR_MESSAGE = "Failed to process the PDF."
REQUEST_FAILED_MESSAGE = "An error occurred while uploading the PDF or processing the question."


@dataclass
class UploadedFile:
    """A PDF picked by the user, held in memory only."""
    name: str
    content: bytes


class ChatClient:
    """Client-side state and actions of the chat page."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.http = session or requests.Session()
        self.timeout = timeout

        self.files: List[UploadedFile] = []
        self.selected_file: Optional[str] = None
        self.question: str = ""
        self.transcript: List[ChatMessage] = []
        self.loading: bool = False
        self.error: Optional[str] = None

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}/api/upload"

    @property
    def file_names(self) -> List[str]:
        return [f.name for f in self.files]

    @property
    def can_submit(self) -> bool:
        return not self.loading and bool(self.selected_file)

    def set_files(self, files: Iterable[UploadedFile]) -> None:
        """Replace the picked files and start a fresh conversation."""
        self.files = list(files)
        self.error = None
        self.transcript = []
        self.selected_file = None

    def select_file(self, name: Optional[str]) -> None:
        self.selected_file = name or None

    def set_question(self, question: str) -> None:
        self.question = question

    def _find_file(self, name: str) -> Optional[UploadedFile]:
        for uploaded in self.files:
            if uploaded.name == name:
                return uploaded
        return None

    def submit(self) -> bool:
        """
        Ask the current question about the selected file.

        Returns True when an answer was added to the transcript. Validation
        problems, server errors and transport failures set ``error`` instead
        and leave the transcript untouched.
        """
        if self.loading:
            return False
        if not self.selected_file:
            self.error = NO_FILE_SELECTED_MESSAGE
            return False
        if not self.question:
            self.error = NO_QUESTION_MESSAGE
            return False

        self.loading = True
        self.error = None
        question = self.question
        file_name = self.selected_file

        try:
            data = {"question": question}
            files = None
            uploaded = self._find_file(file_name)
            if uploaded is not None:
                files = {"file": (uploaded.name, uploaded.content, "application/pdf")}
            else:
                data["fileName"] = file_name

            response = self.http.post(self.upload_url, data=data, files=files, timeout=self.timeout)
            payload = response.json()
            if not isinstance(payload, dict):
                payload = {}

            if response.ok:
                self.transcript.extend([
                    ChatMessage(role="user", content=question, file_name=file_name),
                    ChatMessage(role="bot", content=payload.get("answer") or "", file_name=file_name),
                ])
                return True

            self.error = payload.get("error") or DEFAULT_SERVER_ERROR_MESSAGE
            logger.warning(f"Question about {file_name} failed with HTTP {response.status_code}: {self.error}")
            return False

        except (requests.RequestException, ValueError) as e:
            logger.error(f"Request to {self.upload_url} failed: {type(e).__name__}")
            self.error = REQUEST_FAILED_MESSAGE
            return False

        finally:
            self.question = ""
            self.loading = False
