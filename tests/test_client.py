from collections import namedtuple

import pytest

from pool_deployment.client import (
    ApeChainClient,
    _split_qualified_source,
    _validate_constructor_abi_inputs,
)
from pool_deployment.constants import GOERLI
from pool_deployment.params import PoolParameters
from pool_deployment.utils import params_filepath_from_environment

ABIInput = namedtuple("ABIInput", ["name", "type"])

POOL_CONSTRUCTOR_INPUTS = [
    ABIInput("_signers", "address[]"),
    ABIInput("_usdc", "address"),
    ABIInput("_oneInch", "address"),
    ABIInput("_starkEx", "address"),
    ABIInput("_factRegistry", "address"),
    ABIInput("_assetType", "uint256"),
]


@pytest.fixture
def goerli_arguments():
    params = PoolParameters.from_yaml(params_filepath_from_environment(GOERLI))
    return params.constructor_arguments()


def test_goerli_arguments_match_abi(goerli_arguments):
    _validate_constructor_abi_inputs("MultiSigPool", POOL_CONSTRUCTOR_INPUTS, goerli_arguments)


def test_hex_string_asset_type_is_rejected(goerli_arguments):
    goerli_arguments[5] = hex(goerli_arguments[5])

    with pytest.raises(ValueError, match="_assetType"):
        _validate_constructor_abi_inputs("MultiSigPool", POOL_CONSTRUCTOR_INPUTS, goerli_arguments)


def test_constructor_arguments_length_mismatch(goerli_arguments):
    with pytest.raises(ValueError, match="length mismatch"):
        _validate_constructor_abi_inputs(
            "MultiSigPool", POOL_CONSTRUCTOR_INPUTS, goerli_arguments[:-1]
        )


def test_constructor_arguments_type_mismatch(goerli_arguments):
    goerli_arguments[1] = "not an address"

    with pytest.raises(ValueError, match="_usdc"):
        _validate_constructor_abi_inputs("MultiSigPool", POOL_CONSTRUCTOR_INPUTS, goerli_arguments)


def test_split_qualified_source():
    assert _split_qualified_source("contracts/core/MultiSigPool.sol:MultiSigPool") == (
        "contracts/core/MultiSigPool.sol",
        "MultiSigPool",
    )

    with pytest.raises(ValueError, match="qualified"):
        _split_qualified_source("MultiSigPool")


def test_local_signers_are_test_accounts(accounts):
    client = ApeChainClient()

    assert client.is_local
    signers = client.get_signers()
    assert signers[0].address == accounts[0].address


def test_explicit_account_is_the_only_signer(accounts):
    client = ApeChainClient(account=accounts[1])

    assert [signer.address for signer in client.get_signers()] == [accounts[1].address]
