"""Content-Length framed JSON messages, as spoken by stdio tool clients.

A frame is ``Content-Length: <n>\\r\\n\\r\\n`` followed by ``n`` bytes of
UTF-8 JSON. Other header lines are tolerated and ignored.
"""

from __future__ import annotations

import json
from functools import partial
from typing import Any, BinaryIO, Dict, Iterator, Optional, Tuple

from .errors import MCPProtocolError


HEADER_TERMINATOR = b"\r\n\r\n"
_LENGTH_FIELD = b"content-length"


def encode_message(payload: Dict[str, Any]) -> bytes:
    body = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return b"".join((b"Content-Length: ", str(len(body)).encode("ascii"), HEADER_TERMINATOR, body))


def _content_length(header_block: bytes) -> int:
    length: Optional[int] = None
    for line in header_block.split(b"\r\n"):
        if not line.strip():
            continue
        name, colon, value = line.partition(b":")
        if not colon:
            raise MCPProtocolError(f"Header line without a colon: {line!r}")
        if name.strip().lower() != _LENGTH_FIELD:
            continue
        value = value.strip()
        if not value.isdigit():
            raise MCPProtocolError(f"Content-Length is not a byte count: {value!r}")
        length = int(value)

    if length is None:
        raise MCPProtocolError("Frame has no Content-Length header")
    return length


def decode_frame(buffer: bytearray) -> Tuple[Optional[Any], int]:
    """Pull the first complete frame out of ``buffer``.

    Returns ``(message, consumed)``. ``(None, 0)`` means more bytes are
    needed; the buffer itself is never modified.
    """
    header_end = buffer.find(HEADER_TERMINATOR)
    if header_end == -1:
        return None, 0

    body_start = header_end + len(HEADER_TERMINATOR)
    body_end = body_start + _content_length(bytes(buffer[:header_end]))
    if body_end > len(buffer):
        return None, 0

    body = bytes(buffer[body_start:body_end])
    try:
        return json.loads(body.decode("utf-8")), body_end
    except (UnicodeDecodeError, ValueError) as exc:
        raise MCPProtocolError(f"Frame body is not UTF-8 JSON: {exc}") from exc


def iter_messages(stream: BinaryIO, *, chunk_size: int = 1) -> Iterator[Any]:
    """Yield every message read from ``stream`` until it reaches EOF.

    Small reads keep an interactive client from stalling on a partial frame.
    """
    pending = bytearray()
    for chunk in iter(partial(stream.read, chunk_size), b""):
        pending += chunk
        message, consumed = decode_frame(pending)
        while consumed:
            del pending[:consumed]
            yield message
            message, consumed = decode_frame(pending)
