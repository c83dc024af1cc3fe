from collections import OrderedDict
from pathlib import Path
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
)

from ape.contracts.base import ContractInstance
from ape.utils import ZERO_ADDRESS

from deployment.confirm import _confirm_module_plan, _print_module_plan
from deployment.params import ModuleParameters, Transactor, validate_constructor_args
from deployment.registry import RegistryEntry, find_entry, registry_from_ape_deployments
from deployment.utils import get_contract_container


class PlannedContract(NamedTuple):
    """A contract a module will deploy, as recorded by a planning run."""

    contract_name: str
    args: List[Any]
    address: str = ZERO_ADDRESS


class ModulePlan(NamedTuple):
    """The resolved parameters and requested contracts of a module."""

    module_id: str
    parameters: Mapping[str, Any]
    defaults: FrozenSet[str]
    contracts: List[PlannedContract]


class ContractAction(NamedTuple):
    """What an executor will do for one planned contract."""

    contract_name: str
    named_args: OrderedDict
    registered_address: Optional[str] = None


class ModuleBuilder:
    """
    Passed to a module's build function. Resolves named parameters and
    requests contract instantiation from an executor.
    """

    def __init__(self, module_id: str, parameters: Mapping[str, Any], executor):
        self.module_id = module_id
        self._parameters = parameters
        self._executor = executor
        self.requested_parameters: Dict[str, Any] = dict()
        self.defaulted_parameters = set()

    def get_parameter(self, name: str, default: Any = None) -> Any:
        """
        Returns the configured value of a parameter. A parameter that is
        absent, or left blank in the params file, falls back to its default.
        """
        value = self._parameters.get(name)
        if value is None:
            if default is None:
                raise DeploymentModule.Invalid(
                    f"Parameter '{name}' of module '{self.module_id}' has no value and no default."
                )
            value = default
            self.defaulted_parameters.add(name)
        self.requested_parameters[name] = value
        return value

    def contract(self, contract_name: str, args: Sequence[Any] = ()):
        """Requests instantiation of a contract with the given constructor arguments."""
        return self._executor.deploy_contract(contract_name, list(args))


class _PlanningExecutor:
    """Records requested contracts without touching the chain."""

    def __init__(self):
        self.planned: List[PlannedContract] = list()

    def deploy_contract(self, contract_name: str, args: List[Any]) -> PlannedContract:
        if any(planned.contract_name == contract_name for planned in self.planned):
            raise DeploymentModule.Invalid(f"{contract_name} is requested more than once.")
        planned = PlannedContract(contract_name=contract_name, args=args)
        self.planned.append(planned)
        return planned


class DeploymentModule:
    """A named deployment declaration."""

    class Invalid(Exception):
        """Raised when a module or its parameters are invalid"""

    def __init__(self, module_id: str, build: Callable[[ModuleBuilder], Dict[str, Any]]):
        self.module_id = module_id
        self._build = build

    def __repr__(self) -> str:
        return f"DeploymentModule({self.module_id})"

    def _execute(
        self, parameters: ModuleParameters, executor
    ) -> Tuple[ModuleBuilder, Mapping[str, Any]]:
        module_parameters = parameters.for_module(self.module_id)
        builder = ModuleBuilder(
            module_id=self.module_id, parameters=module_parameters, executor=executor
        )
        result = self._build(builder)
        if not isinstance(result, dict) or not result:
            raise self.Invalid(
                f"Module '{self.module_id}' must return a non-empty mapping of contracts."
            )

        unknown_parameters = set(module_parameters) - set(builder.requested_parameters)
        if unknown_parameters:
            raise self.Invalid(
                f"Unknown parameters for module '{self.module_id}': "
                f"{', '.join(sorted(unknown_parameters))}"
            )
        return builder, MappingProxyType(dict(result))

    def plan(self, parameters: ModuleParameters) -> ModulePlan:
        """Validates the module against its parameters and lists the contracts it deploys."""
        executor = _PlanningExecutor()
        builder, _ = self._execute(parameters, executor)
        return ModulePlan(
            module_id=self.module_id,
            parameters=MappingProxyType(dict(builder.requested_parameters)),
            defaults=frozenset(builder.defaulted_parameters),
            contracts=executor.planned,
        )

    def run(self, parameters: ModuleParameters, executor) -> Mapping[str, Any]:
        """Deploys the module and returns its contracts keyed as the module declares them."""
        executor.review(self.plan(parameters))
        _, contracts = self._execute(parameters, executor)
        return contracts


def build_module(module_id: str) -> Callable[[Callable], DeploymentModule]:
    """Declares a build function as a deployment module."""

    def decorator(build: Callable[[ModuleBuilder], Dict[str, Any]]) -> DeploymentModule:
        return DeploymentModule(module_id=module_id, build=build)

    return decorator


class ModuleExecutor:
    """
    Deploys module contracts with a transactor's account and records them in a
    contract registry for one chain. Contracts already recorded in the registry
    are reattached instead of being deployed again, unless `reuse` is off.
    """

    def __init__(
        self,
        transactor: Transactor,
        registry_filepath: Path,
        chain_id: int,
        verify: bool = False,
        reuse: bool = True,
    ):
        self.transactor = transactor
        self.registry_filepath = registry_filepath
        self.chain_id = chain_id
        self.verify = verify
        self.reuse = reuse
        self.deployments: List[ContractInstance] = list()

    def _registered(self, contract_name: str) -> Optional[RegistryEntry]:
        if not self.reuse:
            return None
        return find_entry(
            filepath=self.registry_filepath, chain_id=self.chain_id, contract_name=contract_name
        )

    def review(self, plan: ModulePlan) -> List[ContractAction]:
        """
        Validates the planned constructor arguments, shows what will be reused or
        deployed, and asks for confirmation unless transactions are autosigned.
        """
        actions = list()
        for planned in plan.contracts:
            container = get_contract_container(planned.contract_name)
            entry = self._registered(planned.contract_name)
            actions.append(
                ContractAction(
                    contract_name=planned.contract_name,
                    named_args=validate_constructor_args(container, planned.args),
                    registered_address=entry.address if entry else None,
                )
            )
        if self.transactor.autosign:
            _print_module_plan(plan, actions)
        else:
            _confirm_module_plan(plan, actions)
        return actions

    def deploy_contract(self, contract_name: str, args: List[Any]) -> ContractInstance:
        container = get_contract_container(contract_name)
        validate_constructor_args(container, args)

        entry = self._registered(contract_name)
        if entry is not None:
            print(f"(i) {contract_name} is already deployed at {entry.address}; reusing it.")
            return container.at(entry.address)

        account = self.transactor.get_account()
        instance = account.deploy(container, *args, publish=self.verify)
        self.deployments.append(instance)
        return instance

    def finalize(self) -> None:
        """Records the contracts deployed by this executor in the registry."""
        if not self.deployments:
            print("(i) No new deployments; registry left untouched.")
            return
        registry_from_ape_deployments(
            deployments=self.deployments, output_filepath=self.registry_filepath
        )
