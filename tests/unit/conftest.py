import itertools
from collections import OrderedDict, namedtuple

import pytest

from deployment.registry import RegistryEntry

CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ALICE = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
BOB = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"

_txn_hashes = (f"0x{n:064x}" for n in itertools.count(1))


class FakeLog:
    def __init__(self, event_name, contract_address, transaction_hash, **event_arguments):
        self.event_name = event_name
        self.contract_address = contract_address
        self.transaction_hash = transaction_hash
        self.event_arguments = event_arguments


class FakeReceipt:
    def __init__(self, logs=None, failed=False):
        self.txn_hash = next(_txn_hashes)
        self.logs = logs or list()
        self.failed = failed
        self.status = 0 if failed else 1


class FakeEvent:
    def __init__(self, event_name):
        self.event_name = event_name

    def from_receipt(self, receipt):
        return [log for log in receipt.logs if log.event_name == self.event_name]


class FakeVividNFT:
    """Just enough of VividNFT's observable behavior to drive a verifier."""

    def __init__(self):
        self.address = CONTRACT_ADDRESS
        self.TokenMinted = FakeEvent("TokenMinted")
        self.counter = 0
        self.owners = dict()
        self.uris = dict()
        # misbehaviour switches
        self.fail_transactions = False
        self.emit_events = True
        self.event_from_other_transaction = False
        self.owner_override = None

    def getCurrentTokenId(self):
        return self.counter

    def ownerOf(self, token_id):
        return self.owner_override or self.owners[token_id]

    def tokenURI(self, token_id):
        return self.uris[token_id]

    def isURIUsed(self, token_uri):
        return token_uri in self.uris.values()

    def _mint(self, to, token_uri, receipt):
        token_id = self.counter
        self.owners[token_id] = to
        self.uris[token_id] = token_uri
        self.counter += 1
        if self.emit_events:
            transaction_hash = receipt.txn_hash
            if self.event_from_other_transaction:
                transaction_hash = next(_txn_hashes)
            receipt.logs.append(
                FakeLog(
                    "TokenMinted",
                    self.address,
                    transaction_hash,
                    to=to.lower(),
                    tokenId=token_id,
                    tokenURI=token_uri,
                )
            )

    def safeMint(self, to, token_uri):
        receipt = FakeReceipt(failed=self.fail_transactions)
        if not receipt.failed:
            self._mint(to, token_uri, receipt)
        return receipt

    def batchMint(self, recipients, token_uris):
        receipt = FakeReceipt(failed=self.fail_transactions)
        if not receipt.failed:
            for to, token_uri in zip(recipients, token_uris):
                self._mint(to, token_uri, receipt)
        return receipt


class FakeTransactor:
    def __init__(self, account=None, autosign=True):
        self.account = account or FakeAccount()
        self.transactions = list()
        self.autosign = autosign

    def get_account(self):
        return self.account

    def transact(self, method, *args):
        self.transactions.append((method.__name__, args))
        return method(*args)


class FakeHandle:
    def __init__(self, contract_name, args, address=CONTRACT_ADDRESS):
        self.contract_name = contract_name
        self.args = args
        self.address = address


class FakeExecutor:
    def __init__(self):
        self.reviewed = list()
        self.deployed = list()

    def review(self, plan):
        self.reviewed.append(plan)

    def deploy_contract(self, contract_name, args):
        handle = FakeHandle(contract_name, args)
        self.deployed.append(handle)
        return handle


AbiInput = namedtuple("AbiInput", ["name", "type"])


class FakeContainer:
    """Stands in for an ape ContractContainer of a two-string constructor contract."""

    def __init__(self, name, inputs):
        self.contract_type = namedtuple("ContractType", ["name"])(name)
        constructor_abi = namedtuple("ConstructorABI", ["inputs"])(inputs)
        self.constructor = namedtuple("Constructor", ["abi"])(constructor_abi)
        self.attached = list()

    def at(self, address):
        self.attached.append(address)
        return FakeHandle(self.contract_type.name, args=None, address=address)


class FakeAccount:
    def __init__(self, address=OWNER):
        self.address = address
        self.deployments = list()

    def deploy(self, container, *args, **kwargs):
        self.deployments.append((container.contract_type.name, args, kwargs))
        return FakeHandle(container.contract_type.name, list(args))


@pytest.fixture
def fake_vivid_nft():
    return FakeVividNFT()


@pytest.fixture
def fake_transactor():
    return FakeTransactor()


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def fake_vivid_nft_container():
    return FakeContainer(
        "VividNFT", inputs=[AbiInput(name="name", type="string"), AbiInput("symbol", "string")]
    )


@pytest.fixture
def registry_entry_factory():
    def factory(chain_id=1337, name="VividNFT", address=CONTRACT_ADDRESS):
        return RegistryEntry(
            chain_id=chain_id,
            name=name,
            address=address,
            abi=[
                OrderedDict(type="function", name="symbol", inputs=[], outputs=[]),
                OrderedDict(type="constructor", inputs=[]),
            ],
            tx_hash="0x" + "ab" * 32,
            block_number=42,
            deployer=OWNER,
        )

    return factory
