from pathlib import Path

import pool_deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(pool_deployment.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"

#
# Environments
#

GOERLI = "goerli"

SUPPORTED_ENVIRONMENTS = [GOERLI]

LOCAL_NETWORK_NAME = "local"

#
# Contracts
#

MULTISIG_POOL = "MultiSigPool"
MULTISIG_POOL_SOURCE = "contracts/core/MultiSigPool.sol:MultiSigPool"

# constructor order expected by MultiSigPool
POOL_PARAMETER_NAMES = (
    "signers",
    "token",
    "aggregator",
    "exchange",
    "fact_registry",
    "asset_type",
)

#
# Explorer
#

ETHERSCAN_API_KEY_ENVVAR = "ETHERSCAN_API_KEY"

VERIFY_SCRIPT_NAME = "verify_pool"
