"""
Post-deployment mint verification.

A verifier submits a mint through a transactor, requires a successful
receipt, and then checks the resulting on-chain state with view calls and
the events correlated with that transaction. Any divergence raises
``MintVerifier.Failed``; nothing is retried.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Sequence

import click
from ape.api import ReceiptAPI
from ape.contracts import ContractInstance
from eth_utils import to_checksum_address
from hexbytes import HexBytes

from deployment.constants import (
    ARRAYS_LENGTH_MISMATCH,
    BATCH_TOO_LARGE,
    EMPTY_ARRAYS,
    MAX_BATCH_SIZE,
    TOKEN_MINTED_EVENT,
)
from deployment.params import Transactor


class MintReport(NamedTuple):
    """A mint whose on-chain effects were verified."""

    token_id: int
    recipient: str
    token_uri: str
    txn_hash: str


def validate_batch(recipients: Sequence[str], token_uris: Sequence[str]) -> None:
    """Checks the shape of a batch mint before any transaction is sent."""
    if not recipients or not token_uris:
        raise ValueError(EMPTY_ARRAYS)
    if len(recipients) != len(token_uris):
        raise ValueError(ARRAYS_LENGTH_MISMATCH)
    if len(recipients) > MAX_BATCH_SIZE:
        raise ValueError(BATCH_TOO_LARGE)


def events_for_transaction(
    contract: ContractInstance, event_name: str, receipt: ReceiptAPI
) -> List[Any]:
    """Returns the logs of an event emitted by the contract in the receipt's transaction."""
    contract_event = getattr(contract, event_name)
    txn_hash = HexBytes(receipt.txn_hash)
    contract_address = to_checksum_address(contract.address)
    return [
        log
        for log in contract_event.from_receipt(receipt)
        if HexBytes(log.transaction_hash) == txn_hash
        and to_checksum_address(log.contract_address) == contract_address
    ]


class MintVerifier:
    """Mints through a transactor and asserts the results against a VividNFT contract."""

    class Failed(AssertionError):
        """Raised when observed chain state diverges from the expected state"""

    def __init__(
        self,
        contract: ContractInstance,
        transactor: Transactor,
        event_name: str = TOKEN_MINTED_EVENT,
    ):
        self.contract = contract
        self.transactor = transactor
        self.event_name = event_name

    def _check(self, description: str, actual: Any, expected: Any) -> None:
        if actual != expected:
            message = f"{description}: expected {expected!r}, got {actual!r}"
            click.secho(f"\tx {message}", fg="red")
            raise self.Failed(message)
        click.secho(f"\t✓ {description} == {expected!r}", fg="green")

    def _require_success(self, receipt: ReceiptAPI) -> None:
        if receipt.failed:
            message = f"Transaction {receipt.txn_hash} failed with status {receipt.status}"
            click.secho(f"\tx {message}", fg="red")
            raise self.Failed(message)
        click.secho(f"\t✓ Transaction {receipt.txn_hash} confirmed", fg="green")

    def current_token_id(self) -> int:
        """Returns the id the next minted token will receive."""
        return int(self.contract.getCurrentTokenId())

    def _check_token(self, token_id: int, recipient: str, token_uri: str) -> None:
        owner = to_checksum_address(self.contract.ownerOf(token_id))
        self._check(f"ownerOf({token_id})", owner, to_checksum_address(recipient))
        self._check(f"tokenURI({token_id})", self.contract.tokenURI(token_id), token_uri)
        self._check(f"isURIUsed({token_uri!r})", bool(self.contract.isURIUsed(token_uri)), True)

    def _check_event(self, receipt: ReceiptAPI, expected_arguments: Dict[str, Any]) -> None:
        logs = events_for_transaction(self.contract, self.event_name, receipt)
        if not logs:
            message = f"No {self.event_name} event found for transaction {receipt.txn_hash}"
            click.secho(f"\tx {message}", fg="red")
            raise self.Failed(message)

        observed = list()
        for log in logs:
            arguments = dict(log.event_arguments)
            if "to" in arguments:
                arguments["to"] = to_checksum_address(arguments["to"])
            observed.append(arguments)
            if arguments == expected_arguments:
                click.secho(f"\t✓ {self.event_name}{expected_arguments}", fg="green")
                return

        message = (
            f"No {self.event_name} event with arguments {expected_arguments} "
            f"for transaction {receipt.txn_hash}; observed {observed}"
        )
        click.secho(f"\tx {message}", fg="red")
        raise self.Failed(message)

    def verify_mint(
        self, recipient: str, token_uri: str, expected_token_id: Optional[int] = None
    ) -> MintReport:
        """Mints a single token and verifies ownership, URI, counter and event."""
        recipient = to_checksum_address(recipient)
        token_id = self.current_token_id()
        if expected_token_id is not None:
            self._check("getCurrentTokenId() before mint", token_id, expected_token_id)

        receipt = self.transactor.transact(self.contract.safeMint, recipient, token_uri)

        click.echo(f"\nVerifying mint of token #{token_id}")
        self._require_success(receipt)
        self._check("getCurrentTokenId()", self.current_token_id(), token_id + 1)
        self._check_token(token_id=token_id, recipient=recipient, token_uri=token_uri)
        self._check_event(
            receipt,
            expected_arguments={"to": recipient, "tokenId": token_id, "tokenURI": token_uri},
        )
        return MintReport(
            token_id=token_id,
            recipient=recipient,
            token_uri=token_uri,
            txn_hash=str(receipt.txn_hash),
        )

    def verify_batch_mint(
        self, recipients: Sequence[str], token_uris: Sequence[str]
    ) -> List[MintReport]:
        """Mints a batch of tokens and verifies ownership, URIs and the counter of each."""
        validate_batch(recipients, token_uris)
        recipients = [to_checksum_address(recipient) for recipient in recipients]
        token_uris = list(token_uris)
        first_token_id = self.current_token_id()

        receipt = self.transactor.transact(self.contract.batchMint, recipients, token_uris)

        click.echo(f"\nVerifying batch mint of {len(recipients)} token(s)")
        self._require_success(receipt)
        self._check(
            "getCurrentTokenId()", self.current_token_id(), first_token_id + len(recipients)
        )

        reports = list()
        for offset, (recipient, token_uri) in enumerate(zip(recipients, token_uris)):
            token_id = first_token_id + offset
            self._check_token(token_id=token_id, recipient=recipient, token_uri=token_uri)
            reports.append(
                MintReport(
                    token_id=token_id,
                    recipient=recipient,
                    token_uri=token_uri,
                    txn_hash=str(receipt.txn_hash),
                )
            )
        return reports
