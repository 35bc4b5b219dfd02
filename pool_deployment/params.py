import typing
from abc import ABC, abstractmethod
from collections import OrderedDict
from pathlib import Path
from typing import Any, List, Optional

from ape.utils import ZERO_ADDRESS

from pool_deployment.constants import MULTISIG_POOL, MULTISIG_POOL_SOURCE, POOL_PARAMETER_NAMES
from pool_deployment.utils import _load_yaml

CONTRACT_CONSTRUCTOR_PARAMETER_KEY = "constructor"
CONTRACT_SOURCE_PARAMETER_KEY = "source"


class VariableContext:
    def __init__(self, contract_name: str, constants: typing.Dict[str, Any] = None):
        self.contract_name = contract_name
        self.constants = constants or dict()


# Variables


class Variable(ABC):
    VARIABLE_PREFIX = "$"

    @abstractmethod
    def resolve(self, deployer: Optional[str] = None) -> Any:
        raise NotImplementedError

    @classmethod
    def is_variable(cls, param: Any) -> bool:
        """Returns True if the param is a variable."""
        result = isinstance(param, str) and param.startswith(cls.VARIABLE_PREFIX)
        return result


class DeployerAccount(Variable):
    DEPLOYER_INDICATOR = "deployer"

    @classmethod
    def is_deployer(cls, value: str) -> bool:
        """Returns True if the variable is a special deployer variable."""
        return value == cls.DEPLOYER_INDICATOR

    def resolve(self, deployer: Optional[str] = None) -> Any:
        if deployer is None:
            return ZERO_ADDRESS
        return deployer


class Constant(Variable):
    def __init__(self, constant_name: str, context: VariableContext):
        try:
            self.constant_value = context.constants[constant_name]
        except KeyError:
            raise PoolParameters.Invalid(
                f"Constant '{constant_name}' not found in parameters file "
                f"for {context.contract_name}."
            )

    @classmethod
    def is_constant(cls, value: str) -> bool:
        """Returns True if the variable is a deployment constant."""
        return value.isupper()

    def resolve(self, deployer: Optional[str] = None) -> Any:
        return self.constant_value


def _resolve_param(value: Any, deployer: Optional[str] = None) -> Any:
    """Resolves a single parameter value or a list of parameter values."""
    if isinstance(value, list):
        return [_resolve_param(v, deployer) for v in value]

    if isinstance(value, Variable):
        return value.resolve(deployer)

    return value  # literally a value


def _variable_from_value(variable: Any, context: VariableContext) -> Variable:
    variable = variable.strip(Variable.VARIABLE_PREFIX)
    if DeployerAccount.is_deployer(variable):
        return DeployerAccount()
    elif Constant.is_constant(variable):
        return Constant(variable, context)
    raise PoolParameters.Invalid(f"Variable ${variable} is not resolvable")


def _process_raw_value(value: Any, variable_context: VariableContext) -> Any:
    if isinstance(value, list):
        return [_process_raw_value(v, variable_context) for v in value]

    if Variable.is_variable(value):
        value = _variable_from_value(value, variable_context)

    return value


def _process_raw_values(values: typing.Dict, variable_context: VariableContext) -> OrderedDict:
    processed_parameters = OrderedDict()
    for name, value in values.items():
        processed_parameters[name] = _process_raw_value(value, variable_context)

    return processed_parameters


def _get_contract_data(config: typing.Dict, contract_name: str) -> typing.Dict:
    """Returns the configuration entry of a single contract."""
    contracts = config.get("contracts")
    if not contracts:
        raise PoolParameters.Invalid("Constructor parameters file missing 'contracts' field.")

    for contract_info in contracts:
        if isinstance(contract_info, str):
            if contract_info == contract_name:
                return dict()
        elif isinstance(contract_info, dict):
            if len(contract_info) != 1:
                raise PoolParameters.Invalid("Malformed constructor parameters YAML.")
            if contract_name in contract_info:
                return contract_info[contract_name] or dict()
        else:
            raise PoolParameters.Invalid("Malformed constructor parameters YAML.")

    raise PoolParameters.Invalid(f"No entry for {contract_name} in constructor parameters file.")


def _validate_parameter_names(contract_name: str, parameters: typing.Dict) -> None:
    """Checks that exactly the recognized constructor options are present."""
    missing = [name for name in POOL_PARAMETER_NAMES if name not in parameters]
    if missing:
        raise PoolParameters.Invalid(
            f"{contract_name} constructor parameters missing: {', '.join(missing)}."
        )

    unexpected = [name for name in parameters if name not in POOL_PARAMETER_NAMES]
    if unexpected:
        raise PoolParameters.Invalid(
            f"Unrecognized {contract_name} constructor parameters: {', '.join(unexpected)}; "
            f"expected {', '.join(POOL_PARAMETER_NAMES)}."
        )


class PoolParameters:
    """Represents the constructor parameters of a MultiSigPool for one environment."""

    class Invalid(Exception):
        """Raised when the pool parameters are invalid"""

    def __init__(
        self,
        parameters: OrderedDict,
        contract_name: str = MULTISIG_POOL,
        source: str = MULTISIG_POOL_SOURCE,
        chain_id: Optional[int] = None,
        pool_address: Optional[str] = None,
        name: Optional[str] = None,
        path: Optional[Path] = None,
    ):
        _validate_parameter_names(contract_name, parameters)
        self.parameters = parameters
        self.contract_name = contract_name
        self.source = source
        self.chain_id = chain_id
        self.pool_address = pool_address
        self.name = name
        self.path = path

    @classmethod
    def from_config(
        cls, config: typing.Dict, path: Optional[Path] = None, contract_name: str = MULTISIG_POOL
    ) -> "PoolParameters":
        """Processes the pool parameters from a loaded parameters file."""
        print("Processing pool constructor parameters...")
        if not isinstance(config, dict):
            raise cls.Invalid("Malformed constructor parameters YAML.")

        deployment = config.get("deployment")
        if not deployment:
            raise cls.Invalid("deployment is not set in params file.")

        contract_data = _get_contract_data(config, contract_name)
        raw_parameters = contract_data.get(CONTRACT_CONSTRUCTOR_PARAMETER_KEY) or dict()
        parameters = _process_raw_values(
            raw_parameters,
            VariableContext(contract_name=contract_name, constants=config.get("constants")),
        )

        chain_id = deployment.get("chain_id")
        return cls(
            parameters=parameters,
            contract_name=contract_name,
            source=contract_data.get(CONTRACT_SOURCE_PARAMETER_KEY, MULTISIG_POOL_SOURCE),
            chain_id=int(chain_id) if chain_id is not None else None,
            pool_address=deployment.get("pool"),
            name=deployment.get("name"),
            path=path,
        )

    @classmethod
    def from_yaml(cls, filepath: Path, contract_name: str = MULTISIG_POOL) -> "PoolParameters":
        config = _load_yaml(filepath)
        return cls.from_config(config, path=filepath, contract_name=contract_name)

    def resolve(self, deployer: Optional[str] = None) -> OrderedDict:
        """Resolves the constructor parameters in the order the contract expects them."""
        resolved_params = OrderedDict()
        for name in POOL_PARAMETER_NAMES:
            resolved_params[name] = _resolve_param(self.parameters[name], deployer)
        return resolved_params

    def constructor_arguments(self, deployer: Optional[str] = None) -> List[Any]:
        return list(self.resolve(deployer).values())
