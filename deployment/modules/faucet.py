from deployment.builder import build_module
from deployment.constants import FAUCET

FAUCET_KEY = "faucet"


@build_module("FaucetModule")
def faucet_module(m):
    faucet = m.contract(FAUCET)
    return {FAUCET_KEY: faucet}
