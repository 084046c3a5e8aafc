"""
Infrastructure module exports.

Configuration and bootstrap for the conversation store, backend API and engine.
"""

from .config import InfraConfig, get_config, StateBackendType, BackendModeType
from .bootstrap import InfraBootstrap, bootstrap_infrastructure, get_engine

__all__ = [
    "InfraConfig",
    "get_config",
    "StateBackendType",
    "BackendModeType",
    "InfraBootstrap",
    "bootstrap_infrastructure",
    "get_engine",
]
