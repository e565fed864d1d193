# starchain/core/errors.py
"""
Typed failures for the star registry.

Lookups never raise: an unknown hash or height is simply None.
"""


class StarChainError(Exception):
    """Base class for every error raised by starchain."""


class DecodeError(StarChainError):
    """A stored block body could not be decoded back to its record."""


class AppendError(StarChainError):
    """
    Internal invariant violation while appending (e.g. the previous block
    could not be found). Never part of normal control flow.
    """


class SubmissionError(StarChainError):
    """A star submission was rejected; the chain is left unchanged."""


class MalformedMessageError(SubmissionError):
    """The ownership message is missing its colon-delimited timestamp field."""


class ProofWindowExpiredError(SubmissionError):
    """The ownership message is older than the proof window."""

    def __init__(self, elapsed: int, window: int):
        self.elapsed = elapsed
        self.window = window
        super().__init__(f"Ownership message expired: {elapsed}s elapsed, window is {window}s")


class SignatureInvalidError(SubmissionError):
    """The signature does not prove control of the wallet address."""
