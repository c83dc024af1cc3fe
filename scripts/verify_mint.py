#!/usr/bin/python3
import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from deployment.constants import VIVID_NFT
from deployment.modules import VIVID_NFT_KEY, vivid_nft_module
from deployment.options import (
    autosign_option,
    contract_address_option,
    expected_token_id_option,
    fresh_option,
    params_filepath_option,
    recipient_option,
    registry_filepath_option,
    strategy_option,
    token_uri_option,
)
from deployment.resolution import HandleStrategy, deploy_module, resolve_contract
from deployment.session import ChainSession
from deployment.verification import MintVerifier


def _check_strategy_options(strategy, contract_address, registry_filepath, params_filepath):
    required = {
        HandleStrategy.ADDRESS: ("--contract-address", contract_address),
        HandleStrategy.REGISTRY: ("--registry-filepath", registry_filepath),
        HandleStrategy.DEPLOY: ("--params-filepath", params_filepath),
    }
    option_name, value = required[strategy]
    if not value:
        raise click.BadOptionUsage(
            option_name=option_name,
            message=f"{option_name} is required for the '{strategy.value}' strategy",
        )


@click.command(cls=ConnectedProviderCommand, name="verify-mint")
@account_option()
@network_option(required=True)
@strategy_option
@contract_address_option
@registry_filepath_option
@params_filepath_option
@fresh_option
@recipient_option
@token_uri_option
@expected_token_id_option
@autosign_option
def cli(
    network,
    account,
    strategy,
    contract_address,
    registry_filepath,
    params_filepath,
    fresh,
    recipients,
    token_uris,
    expected_token_id,
    autosign,
):
    """Mint through a VividNFT contract and verify the resulting state and events."""
    strategy = HandleStrategy(strategy)
    _check_strategy_options(strategy, contract_address, registry_filepath, params_filepath)
    if len(recipients) != len(token_uris):
        raise click.BadOptionUsage(
            option_name="--token-uri",
            message=f"Got {len(recipients)} recipient(s) but {len(token_uris)} token URI(s)",
        )
    if len(recipients) > 1 and expected_token_id is not None:
        raise click.BadOptionUsage(
            option_name="--expected-token-id",
            message="--expected-token-id only applies to a single mint",
        )
    if fresh and strategy is not HandleStrategy.DEPLOY:
        raise click.BadOptionUsage(
            option_name="--fresh", message="--fresh only applies to the 'deploy' strategy"
        )

    session = ChainSession.from_active_provider(account=account, autosign=autosign)

    def deploy():
        contracts = deploy_module(
            session=session,
            module=vivid_nft_module,
            params_filepath=params_filepath,
            reuse=not fresh,
        )
        return contracts[VIVID_NFT_KEY]

    vivid_nft = resolve_contract(
        session=session,
        strategy=strategy,
        contract_name=VIVID_NFT,
        address=contract_address,
        registry_filepath=registry_filepath,
        deploy=deploy,
    )
    click.echo(f"\n{VIVID_NFT} at {vivid_nft.address}")

    verifier = MintVerifier(contract=vivid_nft, transactor=session.transactor)
    try:
        if len(recipients) == 1:
            reports = [
                verifier.verify_mint(
                    recipient=recipients[0],
                    token_uri=token_uris[0],
                    expected_token_id=expected_token_id,
                )
            ]
        else:
            reports = verifier.verify_batch_mint(recipients=recipients, token_uris=token_uris)
    except MintVerifier.Failed:
        click.secho("\nMint verification failed!", fg="red")
        raise click.Abort()

    click.secho("\nMint verified", fg="green")
    for report in reports:
        click.secho(
            f"\t#{report.token_id} -> {report.recipient} ({report.token_uri}) "
            f"in {report.txn_hash}",
            fg="cyan",
        )


if __name__ == "__main__":
    cli()
