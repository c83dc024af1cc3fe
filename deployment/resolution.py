import typing
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from ape import Contract
from ape.contracts import ContractInstance

from deployment.builder import DeploymentModule, ModuleExecutor
from deployment.constants import VIVID_NFT
from deployment.params import ModuleParameters
from deployment.registry import contract_from_entry, find_entry
from deployment.session import ChainSession
from deployment.utils import _load_yaml, check_plugins, get_contract_at, validate_config


class HandleStrategy(Enum):
    """Ways of obtaining a handle to a contract."""

    ADDRESS = "address"
    REGISTRY = "registry"
    DEPLOY = "deploy"


def deploy_module(
    session: ChainSession,
    module: DeploymentModule,
    params_filepath: Path,
    verify: bool = False,
    reuse: bool = True,
) -> Mapping[str, Any]:
    """
    Runs a deployment module on the session's chain and records new contracts.
    With `reuse` off, contracts are deployed even when the registry already lists them.
    """
    check_plugins(verify=verify)
    config = _load_yaml(params_filepath)
    registry_filepath = validate_config(config=config, chain_id=session.chain_id)
    parameters = ModuleParameters.from_config(config)

    executor = ModuleExecutor(
        transactor=session.transactor,
        registry_filepath=registry_filepath,
        chain_id=session.chain_id,
        verify=verify,
        reuse=reuse,
    )
    contracts = module.run(parameters=parameters, executor=executor)
    executor.finalize()
    return contracts


def _contract_at(contract_name: str, address: str) -> ContractInstance:
    try:
        return get_contract_at(contract_name, address)
    except ValueError:
        # not a project contract; let ape fetch the ABI from the explorer
        print(f"(i) {contract_name} is not part of the project; fetching its ABI.")
        return Contract(address)


def resolve_contract(
    session: ChainSession,
    strategy: HandleStrategy,
    contract_name: str = VIVID_NFT,
    address: typing.Optional[str] = None,
    registry_filepath: typing.Optional[Path] = None,
    deploy: typing.Optional[typing.Callable[[], ContractInstance]] = None,
) -> ContractInstance:
    """Returns a handle to a contract obtained with the given strategy."""
    strategy = HandleStrategy(strategy)

    if strategy is HandleStrategy.ADDRESS:
        if not address:
            raise ValueError(f"A contract address is required to attach to {contract_name}.")
        return _contract_at(contract_name, address)

    if strategy is HandleStrategy.REGISTRY:
        if not registry_filepath:
            raise ValueError(f"A registry filepath is required to look up {contract_name}.")
        entry = find_entry(
            filepath=registry_filepath, chain_id=session.chain_id, contract_name=contract_name
        )
        if entry is None:
            raise ValueError(
                f"Contract '{contract_name}' not found in registry, '{registry_filepath}', "
                f"for chain {session.chain_id}"
            )
        return contract_from_entry(entry)

    if deploy is None:
        raise ValueError(f"No deployment available for {contract_name}.")
    return deploy()
