# tests/test_registry.py
import pytest

from starchain.core.config import ChainConfig
from starchain.core.errors import (
    MalformedMessageError,
    ProofWindowExpiredError,
    SignatureInvalidError,
    SubmissionError,
)
from starchain.chain.blockchain import Chain

STAR = {"dec": "68° 52' 56.9", "ra": "16h 29m 1.0s", "story": "Found it in the backyard"}


def test_request_message_format(chain, clock):
    message = chain.request_message_ownership_verification("1AddrA")
    assert message == f"1AddrA:{clock.now}:starRegistry"


def test_request_message_uses_configured_tag(clock, fake_verifier):
    chain = Chain(config=ChainConfig(registry_tag="testRegistry"), verify_signature=fake_verifier, clock=clock)
    assert chain.request_message_ownership_verification("x").endswith(":testRegistry")


def test_submit_star_appends_owner_record(chain, fake_verifier):
    message = chain.request_message_ownership_verification("addrA")
    block = chain.submit_star("addrA", message, "valid", STAR)

    assert block.height == 1
    assert block.decode_payload() == {"star": STAR, "owner": "addrA"}
    assert chain.get_block_by_height(1) == block
    assert fake_verifier.calls == [(message, "addrA", "valid")]


def test_proof_window_boundary_inclusive(chain, clock):
    message = chain.request_message_ownership_verification("addrA")
    clock.advance(300)
    block = chain.submit_star("addrA", message, "valid", STAR)
    assert block.height == 1


def test_proof_window_expired(chain, clock, fake_verifier):
    message = chain.request_message_ownership_verification("addrA")
    clock.advance(301)
    with pytest.raises(ProofWindowExpiredError) as excinfo:
        chain.submit_star("addrA", message, "valid", STAR)
    assert excinfo.value.elapsed == 301
    assert excinfo.value.window == 300
    assert chain.get_chain_height() == 0
    # Stale messages are rejected before the signature is checked
    assert fake_verifier.calls == []


def test_invalid_signature_leaves_chain_unchanged(chain):
    message = chain.request_message_ownership_verification("addrA")
    with pytest.raises(SignatureInvalidError):
        chain.submit_star("addrA", message, "H" + "A" * 87, STAR)
    assert chain.get_chain_height() == 0


@pytest.mark.parametrize("message", ["addrA", "addrA::starRegistry", "addrA:soon:starRegistry", ""])
def test_malformed_message(chain, message):
    with pytest.raises(MalformedMessageError):
        chain.submit_star("addrA", message, "valid", STAR)
    assert chain.get_chain_height() == 0


def test_submission_errors_share_base(chain, clock):
    message = chain.request_message_ownership_verification("addrA")
    clock.advance(1000)
    with pytest.raises(SubmissionError):
        chain.submit_star("addrA", message, "valid", STAR)


def test_shorter_window_from_config(clock, fake_verifier):
    chain = Chain(config=ChainConfig(proof_window_seconds=60), verify_signature=fake_verifier, clock=clock)
    message = chain.request_message_ownership_verification("addrA")
    clock.advance(61)
    with pytest.raises(ProofWindowExpiredError):
        chain.submit_star("addrA", message, "valid", STAR)
