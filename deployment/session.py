import typing
from typing import NamedTuple

from ape import networks
from ape.api import AccountAPI, ProviderAPI

from deployment.params import Transactor


class ChainSession(NamedTuple):
    """The connection and signing account of a single script run."""

    provider: ProviderAPI
    transactor: Transactor

    @classmethod
    def from_active_provider(
        cls, account: typing.Optional[AccountAPI] = None, autosign: bool = False
    ) -> "ChainSession":
        provider = networks.provider
        session = cls(provider=provider, transactor=Transactor(account=account, autosign=autosign))
        session.print_info()
        return session

    @property
    def chain_id(self) -> int:
        return self.provider.chain_id

    @property
    def network_name(self) -> str:
        return self.provider.network.name

    @property
    def account(self) -> AccountAPI:
        return self.transactor.get_account()

    def print_info(self) -> None:
        print(
            f"Account: {self.account.address}",
            f"Ecosystem: {self.provider.network.ecosystem.name}",
            f"Network: {self.network_name}",
            f"Chain ID: {self.chain_id}",
            sep="\n",
        )
