from pathlib import Path

import click

from deployment.modules import MODULES
from deployment.resolution import HandleStrategy
from deployment.types import ChecksumAddress, MinInt, TokenURI

module_option = click.option(
    "--module",
    "-m",
    "module_id",
    help="Deployment module to run",
    type=click.Choice(sorted(MODULES)),
    required=True,
)

params_filepath_option = click.option(
    "--params-filepath",
    "-p",
    help="Filepath of the module parameters YAML",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=False,
)

registry_filepath_option = click.option(
    "--registry-filepath",
    "-f",
    help="Filepath of the contract registry",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=False,
)

strategy_option = click.option(
    "--strategy",
    "-s",
    help=(
        "How to obtain the contract: attach by address, look up a registry, or run "
        "VividNFTModule (which reuses a registered VividNFT unless --fresh is given)"
    ),
    type=click.Choice([strategy.value for strategy in HandleStrategy]),
    default=HandleStrategy.ADDRESS.value,
    show_default=True,
)

contract_address_option = click.option(
    "--contract-address",
    "-c",
    help="Address of the deployed VividNFT contract",
    type=ChecksumAddress(),
    required=False,
)

recipient_option = click.option(
    "--recipient",
    "-r",
    "recipients",
    help="Recipient of the minted token; repeat for a batch mint",
    type=ChecksumAddress(),
    multiple=True,
    required=True,
)

token_uri_option = click.option(
    "--token-uri",
    "-u",
    "token_uris",
    help="Metadata URI of the minted token; repeat for a batch mint",
    type=TokenURI(),
    multiple=True,
    required=True,
)

expected_token_id_option = click.option(
    "--expected-token-id",
    "-t",
    help="Token id the mint is expected to produce; checked against the on-chain counter",
    type=MinInt(0),
    required=False,
)

autosign_option = click.option(
    "--auto",
    "autosign",
    help="Automatically sign transactions.",
    is_flag=True,
)

verify_option = click.option(
    "--verify",
    help="Publish deployed contracts to the network's block explorer.",
    is_flag=True,
)

fresh_option = click.option(
    "--fresh",
    help="Deploy new contracts even when the registry already lists them for this chain.",
    is_flag=True,
)
