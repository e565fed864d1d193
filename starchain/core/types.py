# starchain/core/types.py
from dataclasses import dataclass
from typing import Any, Dict, Optional

from starchain.core.encoding import encode_payload, decode_payload


@dataclass(frozen=True)
class Block:
    """
    Single entry in the tamper-evident star chain.

    A Block is built with only its body set; height, time, previous_hash and
    hash are filled in once, by the chain, at append time. Frozen so an
    appended block can never drift away from the hash that commits to it.
    """
    body: str                       # base64url(canonical JSON of the record)
    height: Optional[int] = None    # None until appended, 0 for genesis
    time: Optional[int] = None      # epoch seconds, set at append
    previous_hash: str = ""         # hex(sha256) of predecessor, empty for genesis
    hash: Optional[str] = None      # hex(sha256) over the fields above

    @classmethod
    def create(cls, data: Any) -> "Block":
        """New unappended block carrying `data` as its encoded body."""
        return cls(body=encode_payload(data))

    @property
    def is_appended(self) -> bool:
        return self.hash is not None

    def header_dict(self) -> Dict[str, Any]:
        """Every field the hash commits to."""
        return {
            "height": self.height,
            "time": self.time,
            "body": self.body,
            "previousBlockHash": self.previous_hash,
        }

    def compute_hash(self) -> str:
        from starchain.crypto.hashing import block_hash
        return block_hash(self)

    def validate(self) -> bool:
        """Self-hash check only; linkage to neighbours is the chain's job."""
        if self.hash is None:
            return False
        return self.compute_hash() == self.hash

    def decode_payload(self) -> Any:
        """Original record; raises DecodeError if the body is malformed."""
        return decode_payload(self.body)

    def to_dict(self) -> dict:
        """Wire shape handed to API layers."""
        return {
            "hash": self.hash,
            "height": self.height,
            "body": self.body,
            "time": self.time,
            "previousBlockHash": self.previous_hash,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Block":
        return cls(
            body=data["body"],
            height=data.get("height"),
            time=data.get("time"),
            previous_hash=data.get("previousBlockHash") or "",
            hash=data.get("hash"),
        )
