from __future__ import annotations

import json
from typing import Any, Dict

from pydantic import ValidationError

from snakeclient.api.messages import (
    INBOUND_KINDS,
    InboundMessage,
    OutboundMessage,
    UnrecognizedMessage,
)
from snakeclient.common.constants import EVENT_SUFFIX


class DecodeError(ValueError):
    """Inbound frame could not be turned into a message."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


def logical_kind(type_label: str) -> str:
    """Map a dotted discriminator to its logical message name.

    ``se.cygni.snake.api.event.MapUpdateEvent`` -> ``MapUpdate``
    """
    name = type_label.rsplit(".", 1)[-1]
    if name.endswith(EVENT_SUFFIX) and name != EVENT_SUFFIX:
        name = name[: -len(EVENT_SUFFIX)]
    return name


def decode_inbound(raw: str) -> InboundMessage:
    """Decode one text frame.

    Unknown discriminators come back as ``UnrecognizedMessage``. Anything
    that is not a JSON object with a string ``type``, or whose fields do not
    fit the named kind, raises ``DecodeError``.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Frame is not valid JSON: {exc}", raw) from exc
    if not isinstance(data, dict):
        raise DecodeError("Frame is not a JSON object", raw)
    type_label = data.pop("type", None)
    if not isinstance(type_label, str) or not type_label:
        raise DecodeError("Frame has no string 'type' field", raw)

    kind = INBOUND_KINDS.get(logical_kind(type_label))
    if kind is None:
        return UnrecognizedMessage(type=type_label, payload=data)
    # JSON mode so arrays still validate as tuples under strict; "type" is
    # ignored as an extra key.
    try:
        return kind.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"Malformed {kind.__name__}: {exc}", raw) from exc


def outbound_payload(message: OutboundMessage) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": message.wire_type()}
    payload.update(message.model_dump(mode="json", by_alias=True))
    return payload


def encode_outbound(message: OutboundMessage) -> str:
    return json.dumps(outbound_payload(message), separators=(",", ":"))
