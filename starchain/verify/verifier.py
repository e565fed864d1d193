# starchain/verify/verifier.py
from typing import List, Optional, Sequence
from dataclasses import dataclass, field

from starchain.core.types import Block


@dataclass
class VerificationFailure:
    height: int
    message: str
    category: str = "general"  # "self_hash", "linkage", "sequence", "genesis"


@dataclass
class VerificationResult:
    is_valid: bool
    message: str = ""
    failures: List[VerificationFailure] = field(default_factory=list)

    @property
    def first_failure(self) -> Optional[VerificationFailure]:
        return self.failures[0] if self.failures else None

    @property
    def messages(self) -> List[str]:
        return [f.message for f in self.failures]

    def __bool__(self):
        return self.is_valid

    def __str__(self):
        if self.is_valid:
            return "Chain is valid ✓"
        lines = [f"Verification FAILED ({len(self.failures)} issues):"]
        for f in self.failures:
            lines.append(f"  • [{f.height}] {f.category}: {f.message}")
        return "\n".join(lines)


class ChainVerifier:
    """
    Offline verifier for star chains.
    Works on any ordered block list: a live chain snapshot or one rebuilt with Block.from_dict.
    Every block is checked; failures accumulate instead of stopping the walk.
    Failures are reported against the block's position in the list, which is
    its height on any untampered chain; a tampered height shows up as a
    "sequence" failure at that position.
    """

    def verify(self, blocks: Sequence[Block]) -> VerificationResult:
        if not blocks:
            return VerificationResult(True, "Empty chain is valid")

        result = VerificationResult(True)

        for i, block in enumerate(blocks):
            # Self-hash: stored hash must match the fields it commits to
            if not block.validate():
                result.failures.append(
                    VerificationFailure(i, f"block {i} fails self-hash validation", "self_hash"))

            # Linkage
            if i > 0 and block.previous_hash != blocks[i - 1].hash:
                result.failures.append(
                    VerificationFailure(i, f"block {i} previous-hash linkage broken", "linkage"))

            if block.height != i:
                result.failures.append(
                    VerificationFailure(i, f"block {i} height mismatch: stored {block.height}", "sequence"))

            if i == 0 and block.previous_hash:
                result.failures.append(
                    VerificationFailure(i, "block 0 genesis previous-hash is not empty", "genesis"))

        result.is_valid = not result.failures
        result.message = "Valid chain" if result.is_valid else f"Failed with {len(result.failures)} issues"
        return result
