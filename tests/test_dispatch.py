# tests/test_dispatch.py
import json
import urllib.error

import pytest

from conftest import FakeGleanClient, json_response
from core.dispatch import GleanToolHandler, build_chat_payload
from core.glean_client import HttpResponse
from core.models import ChatResponseError


def make_handler(config, **client_kwargs):
    client = FakeGleanClient(**client_kwargs)
    return GleanToolHandler(config, client=client), client


# --- search ------------------------------------------------------------------

def test_search_passes_json_through(config):
    upstream = {"results": [{"title": "Onboarding", "url": "https://wiki/x", "snippets": ["héllo"]}],
                "hasMoreResults": False, "requestID": "abc"}
    handler, client = make_handler(config, response=json_response(upstream))

    result = handler.handle("search", {"query": "onboarding"})

    assert client.calls == [("search", {"query": "onboarding"})]
    assert result.is_error is False
    assert json.loads(result.text) == upstream
    assert "isError" not in result.to_dict()


def test_search_passes_body_through_even_on_http_error_status(config):
    handler, _ = make_handler(config, response=json_response({"error": "bad query"}, status=400))
    result = handler.handle("search", {"query": "?"})
    assert json.loads(result.text) == {"error": "bad query"}
    assert result.is_error is False


def test_search_network_failure_is_reported_as_text(config):
    handler, _ = make_handler(config, error=urllib.error.URLError("connection refused"))

    result = handler.handle("search", {"query": "anything"})

    assert result.is_error is False
    assert result.text.startswith("Error occurred: ")
    assert "connection refused" in result.text
    assert result.to_dict() == {"content": [{"type": "text", "text": result.text}]}


def test_search_undecodable_body_is_reported_as_text(config):
    handler, _ = make_handler(config, response=HttpResponse(status=502, body=b"<html>Bad gateway</html>"))
    result = handler.handle("search", {"query": "anything"})
    assert result.is_error is False
    assert result.text.startswith("Error occurred: ")


# --- chat --------------------------------------------------------------------

def test_chat_sends_single_user_message_without_streaming(config):
    handler, client = make_handler(config, response=json_response({"messages": []}))

    handler.handle("chat", {"message": "What is our PTO policy?"})

    assert client.calls == [("chat", {
        "stream": False,
        "messages": [{"author": "USER", "fragments": [{"text": "What is our PTO policy?"}]}],
    })]


def test_chat_normalizes_successful_response(config):
    body = {"messages": [
        {"messageType": "CONTENT", "fragments": [{"text": "Hello "}, {"text": "world"}],
         "citations": [{"sourceDocument": {"title": "Doc1", "url": "http://x"}}]},
    ]}
    handler, _ = make_handler(config, response=json_response(body))

    result = handler.handle("chat", {"message": "hi"})

    assert result.is_error is False
    assert result.text == "Hello world\nSources:\nSource 1: Doc1 (http://x)\n"


def test_chat_http_failure_is_error_flagged(config):
    handler, _ = make_handler(config, response=HttpResponse(status=500, body=b"oops"))

    result = handler.handle("chat", {"message": "hi"})

    assert result.is_error is True
    assert "500" in result.text and "oops" in result.text
    assert result.text == "Error: 500 - oops"
    assert result.to_dict()["isError"] is True


def test_chat_malformed_ok_body_raises(config):
    handler, _ = make_handler(config, response=json_response(["not", "an", "object"]))
    with pytest.raises(ChatResponseError):
        handler.handle("chat", {"message": "hi"})


def test_chat_network_failure_propagates(config):
    handler, _ = make_handler(config, error=urllib.error.URLError("timed out"))
    with pytest.raises(urllib.error.URLError):
        handler.handle("chat", {"message": "hi"})


# --- unknown tool --------------------------------------------------------------

def test_unknown_tool_is_error_flagged_without_network_call(config):
    handler, client = make_handler(config, response=json_response({}))

    result = handler.handle("foo", {})

    assert result.is_error is True
    assert result.text == "Unknown tool: foo"
    assert len(client.calls) == 0


def test_build_chat_payload():
    assert build_chat_payload("x") == {
        "stream": False,
        "messages": [{"author": "USER", "fragments": [{"text": "x"}]}],
    }
