from unittest.mock import Mock

import pytest
import requests

from pdfchat.client import (
    DEFAULT_SERVER_ERROR_MESSAGE,
    NO_FILE_SELECTED_MESSAGE,
    NO_QUESTION_MESSAGE,
    REQUEST_FAILED_MESSAGE,
    ChatClient,
    UploadedFile,
)


def api_reply(payload, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    chat = ChatClient(base_url="http://api.test/", session=session)
    chat.set_files([
        UploadedFile(name="invoice.pdf", content=b"%PDF-invoice"),
        UploadedFile(name="contract.pdf", content=b"%PDF-contract"),
    ])
    return chat


def test_no_file_selected_is_rejected_without_request(client, session):
    client.set_question("What is the total?")

    assert client.submit() is False

    assert client.error == NO_FILE_SELECTED_MESSAGE
    session.post.assert_not_called()
    assert client.transcript == []


def test_empty_question_is_rejected_without_request(client, session):
    client.select_file("invoice.pdf")

    assert client.submit() is False

    assert client.error == NO_QUESTION_MESSAGE
    session.post.assert_not_called()


def test_successful_question_adds_user_then_bot_message(client, session):
    session.post.return_value = api_reply({
        "answer": "100 EUR",
        "fileName": "invoice.pdf",
        "parsedText": ["Total: 100 EUR"],
    })
    client.select_file("invoice.pdf")
    client.set_question("What is the total?")

    assert client.submit() is True

    assert [(m.role, m.content, m.file_name) for m in client.transcript] == [
        ("user", "What is the total?", "invoice.pdf"),
        ("bot", "100 EUR", "invoice.pdf"),
    ]
    assert client.question == ""
    assert client.loading is False
    assert client.error is None


def test_held_file_is_sent_as_upload(client, session):
    session.post.return_value = api_reply({"answer": "ok"})
    client.select_file("contract.pdf")
    client.set_question("Who signed?")

    client.submit()

    args, kwargs = session.post.call_args
    assert args[0] == "http://api.test/api/upload"
    assert kwargs["files"] == {"file": ("contract.pdf", b"%PDF-contract", "application/pdf")}
    assert kwargs["data"] == {"question": "Who signed?"}


def test_file_no_longer_held_is_sent_by_name(client, session):
    session.post.return_value = api_reply({"answer": "ok"})
    client.select_file("older.pdf")
    client.set_question("Summary?")

    client.submit()

    kwargs = session.post.call_args.kwargs
    assert kwargs["files"] is None
    assert kwargs["data"] == {"question": "Summary?", "fileName": "older.pdf"}


def test_server_error_sets_error_and_keeps_transcript(client, session):
    session.post.return_value = api_reply(
        {"error": "Failed to parse the PDF or answer the question.", "kind": "upstream_api"},
        status_code=500
    )
    client.select_file("invoice.pdf")
    client.set_question("What is the total?")

    assert client.submit() is False

    assert client.error == "Failed to parse the PDF or answer the question."
    assert client.transcript == []
    assert client.question == ""
    assert client.loading is False


def test_server_error_without_message_uses_default(client, session):
    session.post.return_value = api_reply({}, status_code=502)
    client.select_file("invoice.pdf")
    client.set_question("What is the total?")

    client.submit()

    assert client.error == DEFAULT_SERVER_ERROR_MESSAGE


def test_server_error_with_unparsable_body_is_a_request_failure(client, session):
    response = api_reply(None, status_code=502)
    response.json.side_effect = ValueError("Expecting value")
    session.post.return_value = response
    client.select_file("invoice.pdf")
    client.set_question("What is the total?")

    assert client.submit() is False

    assert client.error == REQUEST_FAILED_MESSAGE
    assert client.transcript == []
    assert client.question == ""
    assert client.loading is False


def test_transport_failure_sets_error(client, session):
    session.post.side_effect = requests.ConnectionError("refused")
    client.select_file("invoice.pdf")
    client.set_question("What is the total?")

    assert client.submit() is False

    assert client.error == REQUEST_FAILED_MESSAGE
    assert client.transcript == []
    assert client.question == ""
    assert client.loading is False


def test_new_error_replaces_previous_one(client, session):
    client.submit()
    assert client.error == NO_FILE_SELECTED_MESSAGE
    client.select_file("invoice.pdf")

    client.submit()

    assert client.error == NO_QUESTION_MESSAGE
    session.post.assert_not_called()


def test_submit_is_ignored_while_request_in_flight(client, session):
    client.select_file("invoice.pdf")
    client.set_question("What is the total?")
    client.loading = True

    assert client.can_submit is False
    assert client.submit() is False
    session.post.assert_not_called()


def test_new_file_selection_resets_conversation(client, session):
    session.post.return_value = api_reply({"answer": "100 EUR"})
    client.select_file("invoice.pdf")
    client.set_question("What is the total?")
    client.submit()
    client.error = "stale"

    client.set_files([UploadedFile(name="report.pdf", content=b"%PDF-report")])

    assert client.file_names == ["report.pdf"]
    assert client.transcript == []
    assert client.selected_file is None
    assert client.error is None
    assert client.can_submit is False
