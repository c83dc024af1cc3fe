from deployment.modules.faucet import FAUCET_KEY, faucet_module
from deployment.modules.vivid_nft import VIVID_NFT_KEY, vivid_nft_module

MODULES = {module.module_id: module for module in (vivid_nft_module, faucet_module)}

__all__ = ["MODULES", "FAUCET_KEY", "VIVID_NFT_KEY", "faucet_module", "vivid_nft_module"]
