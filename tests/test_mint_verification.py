import uuid

import pytest

from deployment.verification import MintVerifier


@pytest.fixture
def verifier(vivid_nft, chain_session):
    return MintVerifier(contract=vivid_nft, transactor=chain_session.transactor)


def test_verify_mint(verifier, vivid_nft, account1, live):
    token_uri = "https://example.com/token/1"
    if live:
        token_uri = f"https://example.com/token/{uuid.uuid4()}"
    expected_token_id = vivid_nft.getCurrentTokenId()

    report = verifier.verify_mint(
        recipient=account1.address, token_uri=token_uri, expected_token_id=expected_token_id
    )

    assert report.token_id == expected_token_id
    assert report.recipient == account1.address
    assert report.token_uri == token_uri
    if not live:
        assert report.token_id == 0


def test_verify_mint_with_wrong_expected_token_id(verifier, vivid_nft, account1):
    current = vivid_nft.getCurrentTokenId()

    with pytest.raises(MintVerifier.Failed):
        verifier.verify_mint(
            recipient=account1.address,
            token_uri=f"https://example.com/token/{uuid.uuid4()}",
            expected_token_id=current + 1,
        )
    assert vivid_nft.getCurrentTokenId() == current


def test_verify_batch_mint(verifier, vivid_nft, account1, account2):
    first_token_id = vivid_nft.getCurrentTokenId()
    token_uris = [f"https://example.com/token/{uuid.uuid4()}" for _ in range(2)]

    reports = verifier.verify_batch_mint(
        recipients=[account1.address, account2.address], token_uris=token_uris
    )

    assert [report.token_id for report in reports] == [first_token_id, first_token_id + 1]
    assert len({report.txn_hash for report in reports}) == 1
