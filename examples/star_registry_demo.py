# examples/star_registry_demo.py
# Run with: poetry run python examples/star_registry_demo.py
#
# Registers a few stars with real wallet signatures, then tampers with the
# chain to show what validate_chain reports.

import logging
from dataclasses import replace

from starchain import Chain, ChainConfig, WalletKey, SubmissionError


def register(chain: Chain, wallet: WalletKey, star: dict):
    address = wallet.address()
    message = chain.request_message_ownership_verification(address)
    signature = wallet.sign_message(message)
    return chain.submit_star(address, message, signature, star)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="[starchain] %(levelname)s %(message)s")

    chain = Chain(config=ChainConfig.from_env())
    alice = WalletKey.generate()
    bob = WalletKey.generate()

    register(chain, alice, {"dec": "68° 52' 56.9", "ra": "16h 29m 1.0s", "story": "Alice's first star"})
    register(chain, bob, {"dec": "-26° 29' 24.9", "ra": "13h 03m 33.35s", "story": "Bob's star"})
    register(chain, alice, {"dec": "12° 01' 00.0", "ra": "02h 11m 4.2s", "story": "Alice again"})

    print(f"Chain height: {chain.get_chain_height()}")
    for block in chain.get_chain():
        print(f"{block.height:4d} | {block.time} | {block.hash[:16]}… ← {block.previous_hash[:16] or '—'}")

    print(f"\nAlice owns: {[s['story'] for s in chain.get_stars_by_wallet_address(alice.address())]}")
    print(f"Bob owns:   {[s['story'] for s in chain.get_stars_by_wallet_address(bob.address())]}")

    # Impostor tries to register a star for Alice
    message = chain.request_message_ownership_verification(alice.address())
    try:
        chain.submit_star(alice.address(), message, bob.sign_message(message), {"story": "stolen"})
    except SubmissionError as e:
        print(f"\nRejected: {e}")

    print(f"\nValidation (untouched): {chain.validate_chain() or 'valid ✓'}")

    # Demo only: reach into the chain and rewrite a block
    chain._blocks[2] = replace(chain._blocks[2], time=0)
    print("Validation (tampered):")
    for line in chain.validate_chain():
        print(f"  • {line}")
