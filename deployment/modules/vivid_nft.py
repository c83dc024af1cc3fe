from deployment.builder import build_module
from deployment.constants import DEFAULT_TOKEN_NAME, DEFAULT_TOKEN_SYMBOL, VIVID_NFT

VIVID_NFT_KEY = "vivid_nft"


@build_module("VividNFTModule")
def vivid_nft_module(m):
    token_name = m.get_parameter("name", DEFAULT_TOKEN_NAME)
    token_symbol = m.get_parameter("symbol", DEFAULT_TOKEN_SYMBOL)

    vivid_nft = m.contract(VIVID_NFT, [token_name, token_symbol])

    return {VIVID_NFT_KEY: vivid_nft}
