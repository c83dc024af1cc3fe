import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional

from ape import Contract
from ape.contracts import ContractInstance
from eth_typing import ABI, ChecksumAddress
from eth_utils import to_checksum_address

from deployment.utils import _load_json, get_contract_container

ChainId = int
ContractName = str


STANDARD_REGISTRY_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}


class RegistryEntry(NamedTuple):
    """Represents a single deployed contract in a contract registry."""

    chain_id: ChainId
    name: ContractName
    address: ChecksumAddress
    abi: ABI
    tx_hash: str
    block_number: int
    deployer: str


def _get_abi(contract_instance: ContractInstance) -> ABI:
    """Returns the ABI of a contract instance."""
    contract_abi = list()
    for entry in contract_instance.contract_type.abi:
        contract_abi.append(entry.model_dump(mode="json", by_alias=True))
    return contract_abi


def _get_entry(contract_instance: ContractInstance) -> RegistryEntry:
    receipt = contract_instance.receipt
    entry = RegistryEntry(
        name=contract_instance.contract_type.name,
        address=to_checksum_address(contract_instance.address),
        abi=_get_abi(contract_instance),
        chain_id=receipt.chain_id,
        tx_hash=str(receipt.txn_hash),
        block_number=receipt.block_number,
        deployer=receipt.transaction.sender,
    )
    return entry


def read_registry(filepath: Path) -> List[RegistryEntry]:
    data = _load_json(filepath)
    registry_entries = list()
    for chain_id, entries in data.items():
        for contract_name, artifacts in entries.items():
            registry_entry = RegistryEntry(
                chain_id=int(chain_id),
                name=contract_name,
                address=artifacts["address"],
                abi=artifacts["abi"],
                tx_hash=artifacts["tx_hash"],
                block_number=artifacts["block_number"],
                deployer=artifacts["deployer"],
            )
            registry_entries.append(registry_entry)
    return registry_entries


def write_registry(entries: List[RegistryEntry], filepath: Path, silent: bool = False) -> Path:
    """
    Writes registry entries to a file.

    Entries of an existing registry are kept; an entry for a contract
    name that is already registered on the same chain replaces it.
    """

    if not entries:
        if not silent:
            print("No entries provided.")
        return filepath

    data = defaultdict(dict)
    if filepath.exists():
        if not silent:
            print(f"Updating existing registry at {filepath}.")
        for chain_id, chain_entries in _load_json(filepath).items():
            data[chain_id].update(chain_entries)
    else:
        if not silent:
            print(f"Creating new registry at {filepath}.")
        # Create the parent directory if it does not exist
        filepath.parent.mkdir(parents=True, exist_ok=True)

    for entry in entries:
        entry_abi = list(entry.abi)
        entry_abi.sort(key=lambda d: (d["type"], d.get("name", "")))

        data[str(entry.chain_id)][entry.name] = {
            "address": entry.address,
            "abi": entry_abi,
            "tx_hash": entry.tx_hash,
            "block_number": int(entry.block_number),
            "deployer": entry.deployer,
        }

    # enforce a common order
    ordered = {
        chain_id: dict(sorted(data[chain_id].items()))
        for chain_id in sorted(data, key=int)
    }
    with open(filepath, "w") as file:
        json.dump(ordered, file, **STANDARD_REGISTRY_JSON_FORMAT)

    return filepath


def find_entry(
    filepath: Path, chain_id: ChainId, contract_name: ContractName
) -> Optional[RegistryEntry]:
    """Returns the registry entry of a contract on a chain, if there is one."""
    if not filepath.exists():
        return None
    for entry in read_registry(filepath=filepath):
        if entry.chain_id == chain_id and entry.name == contract_name:
            return entry
    return None


def registry_from_ape_deployments(
    deployments: List[ContractInstance], output_filepath: Path
) -> Path:
    """Creates or updates a contract registry from ape deployments."""
    entries = [_get_entry(contract_instance=instance) for instance in deployments]
    output_filepath = write_registry(entries=entries, filepath=output_filepath)
    print(f"(i) Registry written to {output_filepath}!")
    return output_filepath


def contract_from_entry(registry_entry: RegistryEntry) -> ContractInstance:
    """
    Returns a handle to a registered contract. When the contract type is not part of the
    project, the handle is built from the registered ABI.
    """
    try:
        contract_container = get_contract_container(registry_entry.name)
    except ValueError:
        return Contract(registry_entry.address, abi=registry_entry.abi)
    return contract_container.at(registry_entry.address)


def contracts_from_registry(filepath: Path, chain_id: ChainId) -> Dict[str, ContractInstance]:
    """Returns a dictionary of contract instances from a contract registry."""
    registry_entries = read_registry(filepath=filepath)
    deployments = dict()
    for registry_entry in registry_entries:
        if registry_entry.chain_id != chain_id:
            continue
        deployments[registry_entry.name] = contract_from_entry(registry_entry)
    return deployments
