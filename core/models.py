# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that flows
# through the Glean tool server.  They are request-scoped: built from one
# upstream JSON body, read once by the normalizer, then thrown away.
#
# WIRE FORMAT vs PYTHON NAMES:
#   Glean speaks camelCase JSON ("messageType", "sourceDocument").  Each model
#   has a from_dict() constructor that reads the wire keys, so the rest of the
#   code only ever sees snake_case attributes.
#
# STRUCTURAL VALIDATION:
#   from_dict() raises ChatResponseError when a value has the wrong *kind*
#   (a message that is a string, a fragment list that is a dict ...).
#   Missing optional keys are not errors; they become None or [].
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


class ChatResponseError(ValueError):
    """The chat endpoint answered 200 OK but the body has an unexpected shape."""


def _as_list(value: Any, what: str) -> list:
    # null and a missing key both mean "no items"
    if value is None:
        return []
    if not isinstance(value, list):
        raise ChatResponseError(f"Unexpected API response structure: {what} is not a list")
    return value


def _as_mapping(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ChatResponseError(f"Unexpected API response structure: {what} is not an object")
    return value


def _as_optional_str(value: Any, what: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ChatResponseError(f"Unexpected API response structure: {what} is not a string")
    return value


# -----------------------------------------------------------------------------
# Fragment — one piece of text inside a chat message
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Fragment:
    text: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Fragment":
        data = _as_mapping(data, "fragment")
        return cls(text=_as_optional_str(data.get("text"), "fragment text"))


# -----------------------------------------------------------------------------
# Citation sources
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SourceDocument:
    title: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class SourcePerson:
    name: Optional[str] = None


@dataclass(frozen=True)
class Citation:
    """A reference attached to a chat message.

    Glean puts the document and the person on the same record, so this is
    NOT an either/or type: both fields are optional and the normalizer checks
    each one on its own.  A citation can carry a document, a person, both,
    or neither.
    """

    source_document: Optional[SourceDocument] = None
    source_person: Optional[SourcePerson] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Citation":
        data = _as_mapping(data, "citation")

        document = data.get("sourceDocument")
        person = data.get("sourcePerson")

        return cls(
            source_document=(
                SourceDocument(
                    title=_as_optional_str(document.get("title"), "document title"),
                    url=_as_optional_str(document.get("url"), "document url"),
                )
                if isinstance(document, dict) else None
            ),
            source_person=(
                SourcePerson(name=_as_optional_str(person.get("name"), "person name"))
                if isinstance(person, dict) else None
            ),
        )


# -----------------------------------------------------------------------------
# Message — one turn of the conversation returned by the chat endpoint
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Message:
    message_type: Optional[str] = None       # Only "CONTENT" gets rendered
    fragments: list[Fragment] = field(default_factory=list)
    citations: list[Citation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Message":
        data = _as_mapping(data, "message")
        return cls(
            message_type=_as_optional_str(data.get("messageType"), "messageType"),
            fragments=[Fragment.from_dict(f) for f in _as_list(data.get("fragments"), "fragments")],
            citations=[Citation.from_dict(c) for c in _as_list(data.get("citations"), "citations")],
        )


@dataclass(frozen=True)
class ChatApiResponse:
    messages: list[Message] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ChatApiResponse":
        if not isinstance(data, dict):
            raise ChatResponseError("Unexpected API response structure")
        raw_messages = _as_list(data.get("messages"), "messages")
        return cls(messages=[Message.from_dict(m) for m in raw_messages])


# -----------------------------------------------------------------------------
# ToolResult — what a tool hands back to the MCP caller
# -----------------------------------------------------------------------------
# The protocol expects {"content": [{"type": "text", "text": ...}], "isError"?}.
# isError is left out entirely on the normal path, including the search path
# that reports a caught transport error as plain text.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            result["isError"] = True
        return result
