import pytest
from ape import accounts as ape_accounts
from ape import networks

from deployment.constants import VIVID_NFT
from deployment.params import Transactor
from deployment.resolution import HandleStrategy, resolve_contract
from deployment.session import ChainSession
from deployment.utils import get_contract_container

TOKEN_NAME = "Vivid NFT Collection"
TOKEN_SYMBOL = "VIVID"


def pytest_addoption(parser):
    group = parser.getgroup("vivid-nft")
    group.addoption(
        "--vivid-nft-address",
        action="store",
        default=None,
        help="Run against a VividNFT already deployed at this address instead of a fresh one",
    )
    group.addoption(
        "--vivid-nft-account",
        action="store",
        default=None,
        help="Alias of the ape account that owns the deployed VividNFT",
    )


@pytest.fixture(scope="session")
def vivid_nft_address(request):
    return request.config.getoption("--vivid-nft-address")


@pytest.fixture(scope="session")
def live(vivid_nft_address):
    return vivid_nft_address is not None


@pytest.fixture(scope="session")
def vivid_nft_container():
    try:
        return get_contract_container(VIVID_NFT)
    except ValueError:
        pytest.skip(f"{VIVID_NFT} is not part of this project")


@pytest.fixture(scope="module")
def owner(request, accounts):
    alias = request.config.getoption("--vivid-nft-account")
    if alias:
        return ape_accounts.load(alias)
    return accounts[0]


@pytest.fixture(scope="module")
def account1(accounts):
    return accounts[1]


@pytest.fixture(scope="module")
def account2(accounts):
    return accounts[2]


@pytest.fixture(scope="module")
def account3(accounts):
    return accounts[3]


@pytest.fixture(scope="module")
def chain_session(owner):
    return ChainSession(provider=networks.provider, transactor=Transactor(owner, autosign=True))


@pytest.fixture(scope="module")
def vivid_nft(chain_session, owner, vivid_nft_container, vivid_nft_address):
    strategy = HandleStrategy.ADDRESS if vivid_nft_address else HandleStrategy.DEPLOY
    return resolve_contract(
        session=chain_session,
        strategy=strategy,
        contract_name=VIVID_NFT,
        address=vivid_nft_address,
        deploy=lambda: owner.deploy(vivid_nft_container, TOKEN_NAME, TOKEN_SYMBOL),
    )
