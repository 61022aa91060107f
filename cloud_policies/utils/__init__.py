"""Utility modules for the policy loader."""

from .config import LoaderSettings, load_config, save_config

__all__ = [
    "LoaderSettings",
    "load_config",
    "save_config",
]
