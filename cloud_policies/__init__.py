"""Alias-driven loading of cloud simulation policies."""

__version__ = "0.1.0"
__author__ = "Cloud Project Team"

from loguru import logger

# Configure loguru for the entire package
logger.add(
    "logs/cloud_policies_{time:YYYY-MM-DD}.log",
    rotation="1 day",
    retention="7 days",
    level="INFO",
    format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
    delay=True,
)

from .loader import (
    CapabilityFamily,
    ConstructionError,
    ConstructorRegistry,
    PolicyLoader,
    PolicyLoaderError,
    UnknownAliasError,
    get_default_registry,
)
from .core import DatacenterConfig, HostConfig, VmConfig

__all__ = [
    "PolicyLoader",
    "ConstructorRegistry",
    "CapabilityFamily",
    "get_default_registry",
    "PolicyLoaderError",
    "UnknownAliasError",
    "ConstructionError",
    "DatacenterConfig",
    "HostConfig",
    "VmConfig",
]
