import os
from collections import OrderedDict
from typing import NamedTuple

import pytest
from eth_utils import to_checksum_address

from pool_deployment.client import ChainClient, DeploymentRecord
from pool_deployment.params import PoolParameters

LOCAL_CHAIN_ID = 1337


class FakeSigner(NamedTuple):
    address: str


class FakeChainClient(ChainClient):
    """Records deployments and verifications instead of sending them to a chain."""

    def __init__(self, signers=None, chain_id=LOCAL_CHAIN_ID, is_local=True, error=None):
        self.signers = list(signers) if signers is not None else [FakeSigner("0xDeployer")]
        self._chain_id = chain_id
        self._is_local = is_local
        self.error = error
        self.deployments = []
        self.verifications = []

    @property
    def network_choice(self):
        return "ethereum:local:test"

    @property
    def chain_id(self):
        return self._chain_id

    @property
    def is_local(self):
        return self._is_local

    def get_signers(self):
        return list(self.signers)

    def deploy(self, contract_name, constructor_parameters, sender):
        if self.error:
            raise self.error
        self.deployments.append((contract_name, tuple(constructor_parameters.values()), sender))
        return DeploymentRecord(
            contract_name=contract_name,
            address=to_checksum_address("0x" + os.urandom(20).hex()),
            tx_hash="0x" + os.urandom(32).hex(),
            block_number=len(self.deployments),
            deployer=sender.address,
        )

    def verify(self, address, contract, constructor_arguments):
        if self.error:
            raise self.error
        self.verifications.append((address, contract, list(constructor_arguments)))


# Fixtures
@pytest.fixture
def pool_config():
    return {
        "deployment": {"name": "example", "chain_id": 5, "pool": "0xPool"},
        "constants": {"TOKEN": "T"},
        "contracts": [
            {
                "MultiSigPool": {
                    "constructor": OrderedDict(
                        signers=["A", "B", "C"],
                        token="$TOKEN",
                        aggregator="O",
                        exchange="S",
                        fact_registry="F",
                        asset_type="X",
                    )
                }
            }
        ],
    }


@pytest.fixture
def pool_params(pool_config):
    return PoolParameters.from_config(pool_config)


@pytest.fixture
def chain_client():
    return FakeChainClient()


@pytest.fixture
def make_chain_client():
    return FakeChainClient


@pytest.fixture
def make_signer():
    return FakeSigner
