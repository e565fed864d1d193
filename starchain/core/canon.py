# starchain/core/canon.py
from typing import Any

try:
    import jcs
except ImportError:
    raise ImportError("Please install jcs: pip install jcs")


def canonical_json(obj: Any) -> bytes:
    """
    Deterministic UTF-8 bytes according to RFC 8785 (JSON Canonicalization Scheme).
    Used for block hashing and payload encoding, so equal records always
    produce equal bytes.
    """
    return jcs.canonicalize(obj)

