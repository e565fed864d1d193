# starchain/crypto/wallet.py
"""
Bitcoin signed-message support (the scheme Electrum and Bitcoin Core use for
"Sign message"), restricted to legacy P2PKH addresses.

verify_message is the default ownership check for Chain.submit_star;
WalletKey is the client side, used by the demo and the tests.
"""
import base64
import binascii
import hashlib
from dataclasses import dataclass
from typing import List, Optional

import base58
from Crypto.Hash import RIPEMD160
from ecdsa import SECP256k1, SigningKey, VerifyingKey
from ecdsa.errors import MalformedPointError
from ecdsa.numbertheory import SquareRootError
from ecdsa.util import sigdecode_string, sigencode_string_canonize

MESSAGE_MAGIC = b"\x18Bitcoin Signed Message:\n"
MAINNET_P2PKH = 0x00
TESTNET_P2PKH = 0x6F
P2PKH_VERSIONS = (MAINNET_P2PKH, TESTNET_P2PKH)
WIF_VERSIONS = (0x80, 0xEF)

# 27..30 uncompressed key, 31..34 compressed key; low two bits are the recovery id
HEADER_MIN = 27
HEADER_MAX = 34
COMPRESSED_FLAG = 4


def _varint(n: int) -> bytes:
    if n < 0xFD:
        return bytes([n])
    if n <= 0xFFFF:
        return b"\xfd" + n.to_bytes(2, "little")
    if n <= 0xFFFFFFFF:
        return b"\xfe" + n.to_bytes(4, "little")
    return b"\xff" + n.to_bytes(8, "little")


def message_digest(message: str) -> bytes:
    """Double SHA-256 of the magic-prefixed message."""
    raw = message.encode("utf-8")
    data = MESSAGE_MAGIC + _varint(len(raw)) + raw
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def hash160(data: bytes) -> bytes:
    """RIPEMD-160(SHA-256(data))."""
    return RIPEMD160.new(hashlib.sha256(data).digest()).digest()


def _recover_candidates(rs: bytes, digest: bytes) -> List[VerifyingKey]:
    """
    Keys that validate `rs` over `digest`, indexed by recovery id:
    ecdsa lifts r to the point R with even y first, then to -R.
    """
    return VerifyingKey.from_public_key_recovery_with_digest(
        rs, digest, SECP256k1, hashfunc=hashlib.sha256, sigdecode=sigdecode_string
    )


def _public_key_bytes(vk: VerifyingKey, compressed: bool) -> bytes:
    return vk.to_string("compressed" if compressed else "uncompressed")


def p2pkh_address(vk: VerifyingKey, compressed: bool = True, version: int = MAINNET_P2PKH) -> str:
    return base58.b58encode_check(bytes([version]) + hash160(_public_key_bytes(vk, compressed))).decode("ascii")


def _address_hash160(address: str) -> Optional[bytes]:
    """Pubkey hash carried by a P2PKH address, or None if it is not one."""
    try:
        decoded = base58.b58decode_check(address)
    except ValueError:
        return None
    if len(decoded) != 21 or decoded[0] not in P2PKH_VERSIONS:
        return None
    return decoded[1:]


def verify_message(message: str, address: str, signature: str) -> bool:
    """
    True iff `signature` (base64, 65-byte compact form) is a signature of
    `message` by the key behind the P2PKH `address`. Malformed input is
    simply not a valid proof, so it returns False instead of raising.
    """
    expected = _address_hash160(address)
    if expected is None:
        return False

    try:
        sig = base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError):
        return False
    if len(sig) != 65:
        return False

    header = sig[0]
    if not HEADER_MIN <= header <= HEADER_MAX:
        return False
    compressed = (header - HEADER_MIN) >= COMPRESSED_FLAG
    recid = (header - HEADER_MIN) & 3
    if recid > 1:
        # r >= n is astronomically unlikely; not produced by real wallets
        return False

    digest = message_digest(message)
    try:
        candidates = _recover_candidates(sig[1:], digest)
    except (ValueError, ArithmeticError, SquareRootError, MalformedPointError):
        # r/s that do not describe a point on the curve
        return False

    return hash160(_public_key_bytes(candidates[recid], compressed)) == expected


@dataclass
class WalletKey:
    """secp256k1 wallet key able to produce ownership proofs."""
    signing_key: SigningKey
    compressed: bool = True

    @classmethod
    def generate(cls, compressed: bool = True) -> "WalletKey":
        return cls(SigningKey.generate(curve=SECP256k1), compressed)

    @classmethod
    def from_secret_exponent(cls, secret: int, compressed: bool = True) -> "WalletKey":
        return cls(SigningKey.from_secret_exponent(secret, curve=SECP256k1), compressed)

    @classmethod
    def from_wif(cls, wif: str) -> "WalletKey":
        """Import a key exported in Wallet Import Format (mainnet 0x80 or testnet 0xEF)."""
        decoded = base58.b58decode_check(wif)
        if decoded[0] not in WIF_VERSIONS:
            raise ValueError(f"Unknown WIF version byte: {decoded[0]:#04x}")
        if len(decoded) == 34 and decoded[-1] == 0x01:
            secret, compressed = decoded[1:33], True
        elif len(decoded) == 33:
            secret, compressed = decoded[1:], False
        else:
            raise ValueError("WIF payload has an unexpected length")
        return cls(SigningKey.from_string(secret, curve=SECP256k1), compressed)

    @property
    def verifying_key(self) -> VerifyingKey:
        return self.signing_key.get_verifying_key()

    def address(self, version: int = MAINNET_P2PKH) -> str:
        return p2pkh_address(self.verifying_key, self.compressed, version)

    def sign_message(self, message: str) -> str:
        """Base64 compact signature, as a wallet's "Sign message" would return."""
        digest = message_digest(message)
        rs = self.signing_key.sign_digest_deterministic(
            digest, hashfunc=hashlib.sha256, sigencode=sigencode_string_canonize
        )

        own = self.verifying_key.to_string()
        for recid, vk in enumerate(_recover_candidates(rs, digest)):
            if vk.to_string() == own:
                break
        else:
            raise RuntimeError("Could not determine recovery id for signature")

        header = HEADER_MIN + recid + (COMPRESSED_FLAG if self.compressed else 0)
        return base64.b64encode(bytes([header]) + rs).decode("ascii")
