"""
Framing for the AI SDK data-stream protocol (v1).

Each record is a single line `<tag>:<json>\\n`:
- `0` : a chunk of assistant text
- `e` : end-of-step metadata (finish reason, usage, continuation flag)
- `d` : done metadata (finish reason, usage)
"""

from __future__ import annotations

import enum
import json
from typing import Any, Dict, Iterator

STREAM_PROTOCOL_HEADER = "X-Vercel-AI-Data-Stream"
STREAM_PROTOCOL_VERSION = "v1"
STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"

FINISH_REASON = "stop"
PROMPT_TOKENS = 10


class FramerState(enum.Enum):
    EMITTING_LINES = "emitting-lines"
    EMITTING_END_METADATA = "emitting-end-metadata"
    EMITTING_DONE_METADATA = "emitting-done-metadata"
    CLOSED = "closed"


def encode_record(tag: str, payload: Any) -> str:
    return f"{tag}:{json.dumps(payload, ensure_ascii=False, separators=(',', ':'))}\n"


def usage_for(message: str) -> Dict[str, int]:
    # Character count stands in for a real completion token count
    return {"promptTokens": PROMPT_TOKENS, "completionTokens": len(message)}


class DataStreamFramer:
    """
    Single-use producer of the framed records for one reply.

    Iterating yields every content line, then one `e` and one `d` record.
    The framer is closed once iteration ends or is abandoned; iterating a
    closed framer raises RuntimeError.
    """

    def __init__(self, message: str):
        self.message = message
        self.state = FramerState.EMITTING_LINES
        self._started = False

    def __iter__(self) -> Iterator[str]:
        if self._started or self.state is FramerState.CLOSED:
            raise RuntimeError("DataStreamFramer is single-use; create a new one per reply")
        self._started = True
        return self._records()

    def _records(self) -> Iterator[str]:
        try:
            lines = self.message.split("\n")
            last = len(lines) - 1
            for i, line in enumerate(lines):
                yield encode_record("0", line + "\n" if i < last else line)

            usage = usage_for(self.message)

            self.state = FramerState.EMITTING_END_METADATA
            yield encode_record(
                "e",
                {"finishReason": FINISH_REASON, "usage": usage, "isContinued": False},
            )

            self.state = FramerState.EMITTING_DONE_METADATA
            yield encode_record("d", {"finishReason": FINISH_REASON, "usage": usage})
        finally:
            self.state = FramerState.CLOSED
