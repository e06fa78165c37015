# =============================================================================
# core/normalizer.py  —  Chat Response Normalization
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the nested JSON returned by Glean's chat endpoint into ONE string
#   the agent can read: the answer text followed by a numbered source list.
#
#   Input (simplified):
#     {"messages": [
#        {"messageType": "CONTENT",
#         "fragments": [{"text": "Hello "}, {"text": "world"}],
#         "citations": [{"sourceDocument": {"title": "Doc1", "url": "http://x"}}]}
#     ]}
#
#   Output:
#     "Hello world\nSources:\nSource 1: Doc1 (http://x)\n"
#
# RULES:
#   - Only messages whose messageType is exactly "CONTENT" are rendered.
#     Everything else (control/status messages, missing type) is skipped,
#     citations included.
#   - Fragments are joined in order with no separator.
#   - Citation numbers follow the citation's POSITION in the list, so a
#     citation that renders nothing still uses up its number.
#   - Text is passed through verbatim: no truncation, no escaping.
#
# This is a pure function: same input, same output, input never modified.
# =============================================================================

from typing import Any

from core.models import ChatApiResponse, Citation, Message

CONTENT_MESSAGE_TYPE = "CONTENT"


def _render_citation(idx: int, citation: Citation) -> str:
    lines = ""
    document = citation.source_document
    if document is not None and document.title and document.url:
        lines += f"Source {idx}: {document.title} ({document.url})\n"
    # Not an elif: a record carrying both shapes renders both lines.
    person = citation.source_person
    if person is not None and person.name:
        lines += f"Source {idx}: {person.name}\n"
    return lines


def _render_message(message: Message) -> str:
    rendered = "".join(fragment.text or "" for fragment in message.fragments)

    if message.citations:
        rendered += "\nSources:\n"
        for idx, citation in enumerate(message.citations, start=1):
            rendered += _render_citation(idx, citation)

    return rendered


def normalize_chat_response(data: Any) -> str:
    """Flatten a decoded chat response body into display text.

    Args:
        data: The decoded JSON body from the chat endpoint.

    Returns:
        The concatenated text of every CONTENT message, in order.  Empty
        string when there are no CONTENT messages.

    Raises:
        ChatResponseError: The body is not a JSON object, or its message
            collection (or anything nested in it) has the wrong type.
    """
    response = ChatApiResponse.from_dict(data)
    return "".join(
        _render_message(message)
        for message in response.messages
        if message.message_type == CONTENT_MESSAGE_TYPE
    )
