# starchain/core/encoding.py
import base64
import binascii
import json
from typing import Any

from starchain.core.canon import canonical_json
from starchain.core.errors import DecodeError


def b64url_encode(data: bytes) -> str:
    """Encode bytes to base64url (no padding, URL-safe)."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(s: str) -> bytes:
    """Decode base64url string back to bytes."""
    # Restore padding
    padding = len(s) % 4
    if padding:
        s += "=" * (4 - padding)
    return base64.urlsafe_b64decode(s)


def encode_payload(data: Any) -> str:
    """Structured record -> block body (base64url of canonical JSON)."""
    return b64url_encode(canonical_json(data))


def decode_payload(body: str) -> Any:
    """
    Inverse of encode_payload.
    Every failure (bad alphabet, bad padding, bad UTF-8, bad JSON) is raised as DecodeError.
    """
    if not isinstance(body, str) or not body:
        raise DecodeError("Block body is empty or not a string")
    try:
        raw = b64url_decode(body)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Block body is not valid base64url: {e}") from e
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Block body is not valid JSON: {e}") from e
