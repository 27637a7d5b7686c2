"""
Server-Sent Events Framing

Line-oriented decoding of upstream SSE bytes and encoding of outgoing SSE frames.
"""

from __future__ import annotations

import json
from typing import Any


class SSELineDecoder:
    """
    Line-oriented SSE Decoder: Splits a bytes stream on newlines and extracts data payloads.

    - Every newline terminates a line, blank lines are ignored
    - Supports CRLF (\r\n)
    - Only lines prefixed with "data:" carry a payload, other fields are ignored
    - Bytes are buffered until a full line is available so multi-byte characters
      split across network chunks decode correctly
    """

    def __init__(self) -> None:
        self._buf = b""

    def feed(self, chunk: bytes) -> list[str]:
        """
        Append bytes and return the data payloads of every completed line.
        """
        if not chunk:
            return []

        lines = (self._buf + chunk).split(b"\n")
        self._buf = lines.pop()  # Keep last incomplete line

        payloads: list[str] = []
        for line in lines:
            payload = self._extract_data_payload(line)
            if payload is not None:
                payloads.append(payload)
        return payloads

    def flush(self) -> list[str]:
        """
        Drain the trailing partial line (if any) once the upstream stream has closed.
        """
        remaining, self._buf = self._buf, b""
        if not remaining:
            return []
        payload = self._extract_data_payload(remaining)
        return [payload] if payload is not None else []

    @staticmethod
    def _extract_data_payload(line: bytes) -> str | None:
        text = line.decode("utf-8", errors="replace").rstrip("\r")
        if not text.startswith("data:"):
            return None
        payload = text[5:].strip()
        return payload or None


def encode_sse_data(payload: dict[str, Any]) -> bytes:
    """Serialize one object as an SSE data frame."""
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n".encode("utf-8")
