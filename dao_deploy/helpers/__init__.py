"""
Building blocks shared by the deployment scripts: persisted network state,
chain assertions, batched issuance and gas accounting.
"""

from dao_deploy.helpers.assertions import (
    assert_address_equal,
    assert_equal,
    assert_not_zero_address,
)
from dao_deploy.helpers.batch_issuer import (
    MAX_HOLDERS_IN_ONE_TX,
    HolderBatch,
    issue_in_batches,
    make_batches,
)
from dao_deploy.helpers.errors import (
    BytecodeMismatchError,
    ChainAssertionError,
    DeployScriptError,
    EventNotFoundError,
    MissingStateError,
    StateNotFoundError,
    TransactionFailureError,
)
from dao_deploy.helpers.events import assert_last_event, get_events
from dao_deploy.helpers.gas_counter import GasCounter
from dao_deploy.helpers.network_state import (
    NetworkStateStore,
    assert_required_network_state,
    persist_network_state,
    read_network_state,
)

__all__ = [
    'assert_address_equal',
    'assert_equal',
    'assert_not_zero_address',
    'MAX_HOLDERS_IN_ONE_TX',
    'HolderBatch',
    'issue_in_batches',
    'make_batches',
    'BytecodeMismatchError',
    'ChainAssertionError',
    'DeployScriptError',
    'EventNotFoundError',
    'MissingStateError',
    'StateNotFoundError',
    'TransactionFailureError',
    'assert_last_event',
    'get_events',
    'GasCounter',
    'NetworkStateStore',
    'assert_required_network_state',
    'persist_network_state',
    'read_network_state',
]
