# starchain/core/config.py
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

DEFAULT_PROOF_WINDOW_SECONDS = 300
DEFAULT_REGISTRY_TAG = "starRegistry"


def _default_genesis() -> Dict[str, Any]:
    return {"data": "Genesis Block"}


@dataclass(frozen=True)
class ChainConfig:
    """Tunables for a Chain. Defaults match the public star registry."""
    proof_window_seconds: int = DEFAULT_PROOF_WINDOW_SECONDS
    registry_tag: str = DEFAULT_REGISTRY_TAG
    genesis_data: Dict[str, Any] = field(default_factory=_default_genesis)

    def __post_init__(self):
        if self.proof_window_seconds < 0:
            raise ValueError("proof_window_seconds must be non-negative")
        if not self.registry_tag or ":" in self.registry_tag:
            raise ValueError("registry_tag must be non-empty and contain no ':'")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ChainConfig":
        """Resolve overrides in this order:
        1. STARCHAIN_PROOF_WINDOW / STARCHAIN_REGISTRY_TAG environment variables
        2. Defaults
        """
        env = os.environ if environ is None else environ

        window = env.get("STARCHAIN_PROOF_WINDOW")
        tag = env.get("STARCHAIN_REGISTRY_TAG")

        kwargs: Dict[str, Any] = {}
        if window:
            try:
                kwargs["proof_window_seconds"] = int(window)
            except ValueError:
                raise ValueError(f"STARCHAIN_PROOF_WINDOW must be an integer, got {window!r}")
        if tag:
            kwargs["registry_tag"] = tag
        return cls(**kwargs)
