"""Errors raised while resolving policy aliases."""

from typing import Any, Optional


class PolicyLoaderError(Exception):
    """Base class for policy loading failures."""

    def __init__(
        self,
        message: str,
        family: Any = None,
        alias: Any = None,
        canonical_identifier: Optional[str] = None,
    ):
        super().__init__(message)
        self.family = family
        self.alias = alias
        self.canonical_identifier = canonical_identifier


class UnknownAliasError(PolicyLoaderError, LookupError):
    """No constructor is registered for the composed identifier."""
    pass


class ConstructionError(PolicyLoaderError):
    """A registered constructor failed to build a usable instance."""

    def __init__(
        self,
        message: str,
        family: Any = None,
        alias: Any = None,
        canonical_identifier: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, family, alias, canonical_identifier)
        self.cause = cause


class RegistryFrozenError(PolicyLoaderError, RuntimeError):
    """The registry no longer accepts registrations."""
    pass
