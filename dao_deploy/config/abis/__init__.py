"""
Contract ABI package for the DAO deployment scripts.

Only the fragments the scripts call are listed; full ABIs are produced by
``python -m dao_deploy extract-abi``.
"""

from .aragon import (
    ACL_ABI,
    APM_REGISTRY_ABI,
    ENS_ABI,
    ENS_SUBDOMAIN_REGISTRAR_ABI,
    ERC_PROXY_ABI,
    KERNEL_ABI,
)
from .lido import LIDO_TEMPLATE_ABI

__all__ = [
    'ACL_ABI',
    'APM_REGISTRY_ABI',
    'ENS_ABI',
    'ENS_SUBDOMAIN_REGISTRAR_ABI',
    'ERC_PROXY_ABI',
    'KERNEL_ABI',
    'LIDO_TEMPLATE_ABI',
]
