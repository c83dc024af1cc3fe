#!/usr/bin/python3
from pathlib import Path

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from deployment.modules import MODULES
from deployment.options import autosign_option, fresh_option, module_option, verify_option
from deployment.resolution import deploy_module
from deployment.session import ChainSession


@click.command(cls=ConnectedProviderCommand)
@account_option()
@network_option(required=True)
@module_option
@click.option(
    "--params-filepath",
    "-p",
    help="Filepath of the module parameters YAML",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=True,
)
@verify_option
@fresh_option
@autosign_option
def cli(network, account, module_id, params_filepath, verify, fresh, autosign):
    """Deploy a module; contracts already in the registry are reused unless --fresh is given."""
    session = ChainSession.from_active_provider(account=account, autosign=autosign)
    contracts = deploy_module(
        session=session,
        module=MODULES[module_id],
        params_filepath=params_filepath,
        verify=verify,
        reuse=not fresh,
    )
    click.secho(f"\n{module_id}", fg="green")
    for key, contract in contracts.items():
        click.secho(f"\t{key}: {contract.address}", fg="cyan")


if __name__ == "__main__":
    cli()
