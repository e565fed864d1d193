# starchain/crypto/hashing.py
import hashlib

from starchain.core.canon import canonical_json


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def block_hash(block) -> str:
    """hex(sha256) of the block's canonical header (height, time, body, previousBlockHash)."""
    return sha256_hex(canonical_json(block.header_dict()))
