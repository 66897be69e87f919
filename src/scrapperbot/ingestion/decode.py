"""Two-phase decoding of inbound lines.

Phase one parses the JSON object and sniffs its ``Type`` discriminant with
a minimal envelope model. Phase two validates the typed model registered
for that discriminant. Unregistered discriminants decode to
:class:`UnknownMessage` rather than failing.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from scrapperbot._constants import LOG_SNIPPET_LENGTH
from scrapperbot.exceptions import ScrapperDecodeError
from scrapperbot.models._base import ScrapperBaseModel
from scrapperbot.models.messages import (
    BotMessage,
    InboundMessage,
    MessageEnvelope,
    MessageType,
    ReadyMessage,
    UnknownMessage,
)

_DECODERS: dict[str, type[ScrapperBaseModel]] = {
    MessageType.READY: ReadyMessage,
    MessageType.BOT: BotMessage,
}


def _snippet(line: str) -> str:
    return line[:LOG_SNIPPET_LENGTH]


def parse_line(line: str) -> dict[str, Any]:
    """Parse one wire line into a JSON object."""
    text = line.strip()
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ScrapperDecodeError(f"Invalid JSON: {_snippet(text)}", line=text) from exc
    if not isinstance(payload, dict):
        raise ScrapperDecodeError(f"Message is not a JSON object: {_snippet(text)}", line=text)
    return payload


def sniff_type(payload: dict[str, Any], *, line: str = "") -> str:
    """Return the ``Type`` discriminant of a parsed message."""
    try:
        return MessageEnvelope.model_validate(payload).type
    except ValidationError as exc:
        raise ScrapperDecodeError(f"Message has no usable Type field: {_snippet(line)}", line=line) from exc


def decode_payload(payload: dict[str, Any], *, line: str = "") -> InboundMessage:
    message_type = sniff_type(payload, line=line)
    model = _DECODERS.get(message_type)
    if model is None:
        return UnknownMessage(type=message_type, raw=payload)
    try:
        decoded = model.model_validate(payload)
    except ValidationError as exc:
        raise ScrapperDecodeError(
            f"Malformed {message_type} message: {exc.error_count()} validation error(s)",
            message_type=message_type,
            line=line,
        ) from exc
    assert isinstance(decoded, (ReadyMessage, BotMessage))  # noqa: S101
    return decoded


def decode_line(line: str) -> InboundMessage:
    """Decode one wire line into a typed message.

    Raises :class:`ScrapperDecodeError` for invalid JSON, a missing
    discriminant, or a known discriminant with a malformed payload.
    """
    payload = parse_line(line)
    return decode_payload(payload, line=line.strip())
