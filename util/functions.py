# util/functions.py
import json
import time
from typing import Any


def to_text(body: bytes | str) -> str:
    """
    - Normalize a stored object body to text.
    - Invalid UTF-8 is replaced rather than raised; signatures are opaque.
    """
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8", errors="replace")
    return body


def dump_json(data: Any) -> bytes:
    return json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")


def epoch_millis() -> str:
    return str(int(time.time() * 1000))
