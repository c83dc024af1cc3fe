from pathlib import Path

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
ARTIFACTS_DIR = DEPLOYMENT_DIR / "artifacts"

#
# Networks
#

LOCAL_BLOCKCHAIN_ENVIRONMENTS = ["local"]

#
# Contracts
#

VIVID_NFT = "VividNFT"
FAUCET = "Faucet"

DEFAULT_TOKEN_NAME = "VividNFT"
DEFAULT_TOKEN_SYMBOL = "VNFT"

# enforced by VividNFT.batchMint
MAX_BATCH_SIZE = 50

TOKEN_MINTED_EVENT = "TokenMinted"

# ERC165 interface ids
ERC721_INTERFACE_ID = "0x80ac58cd"
ERC721_METADATA_INTERFACE_ID = "0x5b5e139f"

#
# Revert reasons
#

UNAUTHORIZED_ACCOUNT = "OwnableUnauthorizedAccount"
EMPTY_TOKEN_URI = "VividNFT: tokenURI cannot be empty"
TOKEN_URI_ALREADY_USED = "VividNFT: tokenURI already used"
EMPTY_ARRAYS = "VividNFT: empty arrays"
ARRAYS_LENGTH_MISMATCH = "VividNFT: arrays length mismatch"
BATCH_TOO_LARGE = "VividNFT: batch too large"
TOKEN_DOES_NOT_EXIST = "VividNFT: token does not exist"
