# starchain/chain/blockchain.py
import logging
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional

from starchain.core.config import ChainConfig
from starchain.core.errors import (
    AppendError,
    DecodeError,
    MalformedMessageError,
    ProofWindowExpiredError,
    SignatureInvalidError,
)
from starchain.core.types import Block
from starchain.crypto.wallet import verify_message
from starchain.verify.verifier import ChainVerifier, VerificationResult

logger = logging.getLogger(__name__)


def epoch_seconds() -> int:
    return int(time.time())


@dataclass(eq=False)
class Chain:
    """
    In-memory star registry.
    Owns the ordered block list, creates the genesis block on construction and
    only grows through _add_block. All access goes through one lock, so a block
    becomes visible to readers only once its hash is set.
    """
    config: ChainConfig = field(default_factory=ChainConfig)
    verify_signature: Callable[[str, str, str], bool] = verify_message
    clock: Callable[[], int] = epoch_seconds
    _blocks: List[Block] = field(default_factory=list, init=False, repr=False)
    _height: int = field(default=-1, init=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    def __post_init__(self):
        self.initialize_chain()

    def initialize_chain(self) -> None:
        """Append the genesis block if the chain is still empty."""
        with self._lock:
            if self._height == -1:
                genesis = self._add_block(Block.create(self.config.genesis_data))
                logger.info("Genesis block created: %s", genesis.hash)

    def get_chain_height(self) -> int:
        with self._lock:
            return self._height

    @property
    def height(self) -> int:
        return self.get_chain_height()

    def __len__(self) -> int:
        with self._lock:
            return len(self._blocks)

    def _add_block(self, block: Block) -> Block:
        """
        Finalize `block` (height, time, previous_hash, hash) and push it.
        Returns the finalized block; the argument itself is never modified.
        Raises AppendError with the chain untouched if anything goes wrong.
        """
        with self._lock:
            if block.is_appended:
                raise AppendError(f"Block {block.hash} is already part of a chain")
            try:
                height = self._height + 1
                previous_hash = ""
                if height != 0:
                    previous = self._block_at(self._height)
                    if previous is None:
                        raise AppendError(f"No block at height {self._height} to link to")
                    previous_hash = previous.hash

                finalized = replace(
                    block,
                    height=height,
                    time=int(self.clock()),
                    previous_hash=previous_hash,
                )
                finalized = replace(finalized, hash=finalized.compute_hash())
            except AppendError:
                raise
            except Exception as e:
                raise AppendError(f"Block cannot be added: {e}") from e

            self._blocks.append(finalized)
            self._height = height
            logger.debug("Appended block %d: %s", height, finalized.hash)
            return finalized

    def _block_at(self, height: int) -> Optional[Block]:
        if 0 <= height < len(self._blocks):
            block = self._blocks[height]
            if block.height == height:
                return block
        return None

    # ------------------------------------------------------------------
    # Ownership proof
    # ------------------------------------------------------------------

    def request_message_ownership_verification(self, address: str) -> str:
        """Challenge the wallet at `address` must sign: "<address>:<now>:<registry tag>"."""
        return f"{address}:{int(self.clock())}:{self.config.registry_tag}"

    @staticmethod
    def _message_time(message: str) -> int:
        if not isinstance(message, str):
            raise MalformedMessageError("Ownership message must be a string")
        parts = message.split(":")
        if len(parts) < 2 or not parts[1].strip():
            raise MalformedMessageError(f"Ownership message has no timestamp field: {message!r}")
        try:
            return int(parts[1])
        except ValueError:
            raise MalformedMessageError(f"Ownership message timestamp is not an integer: {parts[1]!r}")

    def submit_star(self, address: str, message: str, signature: str, star: Any) -> Block:
        """
        Register `star` for `address`.
        The message must be at most proof_window_seconds old (boundary inclusive)
        and signed by the wallet behind `address`. Returns the appended block.
        """
        message_time = self._message_time(message)

        elapsed = int(self.clock()) - message_time
        if elapsed > self.config.proof_window_seconds:
            logger.warning("Rejected star for %s: message expired (%ss elapsed)", address, elapsed)
            raise ProofWindowExpiredError(elapsed, self.config.proof_window_seconds)

        if not self.verify_signature(message, address, signature):
            logger.warning("Rejected star for %s: invalid signature", address)
            raise SignatureInvalidError(f"Signature does not prove ownership of {address}")

        return self._add_block(Block.create({"star": star, "owner": address}))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_block_by_hash(self, block_hash: str) -> Optional[Block]:
        """First block (ascending height) with this hash, or None."""
        with self._lock:
            for block in self._blocks:
                if block.hash == block_hash:
                    return block
        return None

    def get_block_by_height(self, height: int) -> Optional[Block]:
        with self._lock:
            return self._block_at(height)

    def get_stars_by_wallet_address(self, address: str) -> List[Any]:
        """
        Stars owned by `address`, ascending height.
        Blocks whose body cannot be decoded, or that do not hold an owner
        record, are skipped with a warning; the scan always finishes.
        """
        stars = []
        for block in self.get_chain()[1:]:
            try:
                record = block.decode_payload()
            except DecodeError as e:
                logger.warning("Skipping block %s in owner scan: %s", block.height, e)
                continue
            if not isinstance(record, dict) or "owner" not in record:
                logger.warning("Skipping block %s in owner scan: not a star record", block.height)
                continue
            if record["owner"] == address:
                stars.append(record.get("star"))
        return stars

    def get_chain(self) -> List[Block]:
        """Returns copy of the full chain (blocks are frozen, the list is yours)"""
        with self._lock:
            return self._blocks.copy()

    def get_last_hash(self) -> Optional[str]:
        with self._lock:
            if not self._blocks:
                return None
            return self._blocks[-1].hash

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def verify(self) -> VerificationResult:
        """Structured report over a snapshot of the chain."""
        return ChainVerifier().verify(self.get_chain())

    def validate_chain(self) -> List[str]:
        """Every violation, in height order. Empty list means the chain is valid."""
        return self.verify().messages
