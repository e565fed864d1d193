# starchain/__init__.py
"""
starchain — in-process, tamper-evident star registry.
Hash-linked blocks plus a wallet-signature ownership proof for registering stars.
"""

from starchain.core.config import ChainConfig
from starchain.core.errors import (
    AppendError,
    DecodeError,
    MalformedMessageError,
    ProofWindowExpiredError,
    SignatureInvalidError,
    StarChainError,
    SubmissionError,
)
from starchain.core.types import Block
from starchain.chain.blockchain import Chain
from starchain.crypto.wallet import WalletKey, verify_message
from starchain.verify.verifier import ChainVerifier, VerificationFailure, VerificationResult

__version__ = "0.1.0-dev"

__all__ = [
    "AppendError",
    "Block",
    "Chain",
    "ChainConfig",
    "ChainVerifier",
    "DecodeError",
    "MalformedMessageError",
    "ProofWindowExpiredError",
    "SignatureInvalidError",
    "StarChainError",
    "SubmissionError",
    "VerificationFailure",
    "VerificationResult",
    "WalletKey",
    "verify_message",
]
