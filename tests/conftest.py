# tests/conftest.py
import pytest

from starchain.chain.blockchain import Chain


class FakeClock:
    """Settable epoch-seconds clock."""

    def __init__(self, now: int = 1_700_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class FakeVerifier:
    """Accepts exactly the signature "valid" and records every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, message: str, address: str, signature: str) -> bool:
        self.calls.append((message, address, signature))
        return signature == "valid"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_verifier() -> FakeVerifier:
    return FakeVerifier()


@pytest.fixture
def chain(clock, fake_verifier) -> Chain:
    return Chain(verify_signature=fake_verifier, clock=clock)


def submit(chain: Chain, address: str, star, signature: str = "valid"):
    message = chain.request_message_ownership_verification(address)
    return chain.submit_star(address, message, signature, star)
