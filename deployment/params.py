import typing
from collections import OrderedDict
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping

from ape.api import AccountAPI, ReceiptAPI
from ape_accounts import KeyfileAccount
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractTransactionHandler
from ethpm_types import MethodABI
from web3.auto import w3

from deployment.confirm import _continue
from deployment.utils import _load_yaml

MODULES_PARAMETER_KEY = "modules"


class ModuleParameters:
    """
    Represents the named parameter values of a set of deployment modules.
    Values are read-only once loaded.
    """

    class Invalid(Exception):
        """Raised when the module parameters are invalid"""

    def __init__(self, parameters: typing.Dict[str, typing.Dict[str, Any]]):
        self._parameters = dict()
        for module_id, values in parameters.items():
            if values is None:
                values = dict()
            if not isinstance(values, dict):
                raise self.Invalid(f"Malformed parameters for module '{module_id}'.")
            self._parameters[module_id] = MappingProxyType(dict(values))

    @classmethod
    def from_config(cls, config: typing.Dict) -> "ModuleParameters":
        """Loads the module parameters from a params config."""
        print("Processing module parameters...")
        parameters = config.get(MODULES_PARAMETER_KEY) or dict()
        if not isinstance(parameters, dict):
            raise cls.Invalid("Malformed module parameters YAML.")
        return cls(parameters=parameters)

    @classmethod
    def from_yaml(cls, filepath: Path) -> "ModuleParameters":
        config = _load_yaml(filepath)
        return cls.from_config(config or dict())

    def for_module(self, module_id: str) -> Mapping[str, Any]:
        """Returns the parameters of a single module; empty if none were given."""
        return self._parameters.get(module_id, MappingProxyType(dict()))

    def __contains__(self, module_id: str) -> bool:
        return module_id in self._parameters


def _validate_method_args(
    method_abis: List[MethodABI], args: typing.Sequence[Any]
) -> typing.Dict[str, Any]:
    """Validates the transaction arguments against the function ABI."""
    if len(method_abis) == 0:
        raise ValueError("No method abis provided for validation of args")

    abis_matching_args_length = [abi for abi in method_abis if len(abi.inputs) == len(args)]
    for abi in abis_matching_args_length:
        named_args = {}
        for arg, abi_input in zip(args, abi.inputs):
            if not w3.is_encodable(abi_input.type, arg):
                break
            named_args[abi_input.name] = arg
        else:
            return named_args
    raise ValueError(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) and given type(s)"
    )


def validate_constructor_args(
    container: ContractContainer, args: typing.Sequence[Any]
) -> OrderedDict:
    """
    Validates positional constructor arguments against the constructor ABI
    and returns them keyed by their ABI names.
    """
    contract_name = container.contract_type.name
    abi_inputs = container.constructor.abi.inputs
    if len(args) != len(abi_inputs):
        raise ValueError(
            f"Constructor arguments length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(args)}."
        )

    named_args = OrderedDict()
    for position, (abi_input, value) in enumerate(zip(abi_inputs, args)):
        if not w3.is_encodable(abi_input.type, value):
            raise ValueError(
                f"{contract_name} constructor argument '{abi_input.name}' at position {position} "
                f"has a value '{value}' whose type does not match expected ABI type "
                f"'{abi_input.type}'"
            )
        named_args[abi_input.name or f"arg{position}"] = value
    return named_args


class Transactor:
    """
    Represents an ape account plus validated/annotated transaction execution.
    """

    def __init__(self, account: typing.Optional[AccountAPI] = None, autosign: bool = False):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign
        if isinstance(self._account, KeyfileAccount):
            self._account.set_autosign(autosign)

    def get_account(self) -> AccountAPI:
        """Returns the transactor account."""
        return self._account

    @property
    def autosign(self) -> bool:
        return self._autosign

    def transact(self, method: ContractTransactionHandler, *args) -> ReceiptAPI:
        named_args = _validate_method_args(method_abis=method.abis, args=args)
        base_message = (
            f"\nTransacting {method.contract.contract_type.name}"
            f"[{method.contract.address[:10]}].{method}"
        )
        if named_args:
            pretty_args = "\n\t".join(f"{k}={v}" for k, v in named_args.items())
            message = f"{base_message} with arguments:\n\t{pretty_args}"
        else:
            message = f"{base_message} with no arguments"
        print(message)
        if not self._autosign:
            _continue()

        return method(*args, sender=self._account)
