"""Constructor registry: canonical identifier -> zero-argument constructor."""

import threading
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple
from loguru import logger

from ..allocationpolicies import (
    VmAllocationPolicyBestFit,
    VmAllocationPolicyFirstFit,
    VmAllocationPolicyRoundRobin,
    VmAllocationPolicySimple,
)
from ..provisioners import PeProvisionerSimple, ResourceProvisionerSimple
from ..schedulers.cloudlet import CloudletSchedulerSpaceShared, CloudletSchedulerTimeShared
from ..schedulers.vm import VmSchedulerSpaceShared, VmSchedulerTimeShared
from ..utilizationmodels import (
    UtilizationModelDynamic,
    UtilizationModelFull,
    UtilizationModelNull,
    UtilizationModelStochastic,
)
from .errors import RegistryFrozenError
from .naming import CapabilityFamily, DEFAULT_NAMESPACE, family_package

Constructor = Callable[[], Any]


class ConstructorRegistry:
    """Per-family tables of constructors.

    Entries are added during initialization and the registry is then frozen;
    a frozen registry is read-only and safe to share between threads. Each
    family has its own table, so an identifier registered for one family is
    never visible to lookups for another.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        self.namespace = namespace
        self._tables: Dict[CapabilityFamily, Mapping[str, Constructor]] = {
            family: {} for family in CapabilityFamily
        }
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, family: CapabilityFamily, canonical_identifier: str, constructor: Constructor) -> None:
        """Add a constructor for ``canonical_identifier`` to ``family``'s table."""
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {canonical_identifier}: registry is frozen",
                family=family,
                canonical_identifier=canonical_identifier,
            )
        if not callable(constructor):
            raise ValueError(f"Constructor for {canonical_identifier} is not callable: {constructor!r}")

        table = self._tables[family]
        if canonical_identifier in table:
            raise ValueError(f"{family.stem} registry: '{canonical_identifier}' already registered")

        table[canonical_identifier] = constructor
        logger.debug(f"Registered {canonical_identifier} for {family.stem}")

    def register_type(self, family: CapabilityFamily, cls: type) -> str:
        """Register ``cls`` under ``{namespace}.{subpackage}.{cls.__name__}``."""
        identifier = f"{family_package(family, self.namespace)}.{cls.__name__}"
        self.register(family, identifier, cls)
        return identifier

    def lookup(self, family: CapabilityFamily, canonical_identifier: str) -> Optional[Constructor]:
        """Return the constructor for the identifier, or ``None`` if absent."""
        return self._tables[family].get(canonical_identifier)

    def freeze(self) -> "ConstructorRegistry":
        if not self._frozen:
            self._tables = {family: MappingProxyType(dict(table)) for family, table in self._tables.items()}
            self._frozen = True
        return self

    def identifiers(self, family: CapabilityFamily) -> Tuple[str, ...]:
        return tuple(sorted(self._tables[family]))

    def entries(self, family: CapabilityFamily) -> Iterator[Tuple[str, Constructor]]:
        for identifier in self.identifiers(family):
            yield identifier, self._tables[family][identifier]

    def extended(self, family: CapabilityFamily, entries: Mapping[str, Constructor]) -> "ConstructorRegistry":
        """Return a new frozen registry with ``entries`` added to ``family``.

        The receiver is left unchanged.
        """
        copy = ConstructorRegistry(self.namespace)
        for fam in CapabilityFamily:
            for identifier, constructor in self.entries(fam):
                copy.register(fam, identifier, constructor)
        for identifier, constructor in entries.items():
            copy.register(family, identifier, constructor)
        return copy.freeze()

    def __contains__(self, key: Tuple[CapabilityFamily, str]) -> bool:
        family, identifier = key
        return identifier in self._tables[family]

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())


def build_default_registry(namespace: str = DEFAULT_NAMESPACE) -> ConstructorRegistry:
    """Build a frozen registry holding every policy variant shipped with the package."""
    variants = {
        CapabilityFamily.VM_SCHEDULER: [VmSchedulerSpaceShared, VmSchedulerTimeShared],
        CapabilityFamily.VM_ALLOCATION_POLICY: [
            VmAllocationPolicySimple,
            VmAllocationPolicyFirstFit,
            VmAllocationPolicyBestFit,
            VmAllocationPolicyRoundRobin,
        ],
        CapabilityFamily.CLOUDLET_SCHEDULER: [CloudletSchedulerSpaceShared, CloudletSchedulerTimeShared],
        CapabilityFamily.RESOURCE_PROVISIONER: [ResourceProvisionerSimple, PeProvisionerSimple],
        CapabilityFamily.UTILIZATION_MODEL: [
            UtilizationModelFull,
            UtilizationModelNull,
            UtilizationModelDynamic,
            UtilizationModelStochastic,
        ],
    }

    registry = ConstructorRegistry(namespace)
    for family, classes in variants.items():
        for cls in classes:
            registry.register_type(family, cls)

    logger.info(f"Policy registry built with {len(registry)} constructors under '{namespace}'")
    return registry.freeze()


_default_registry: Optional[ConstructorRegistry] = None
_default_lock = threading.Lock()


def get_default_registry() -> ConstructorRegistry:
    """Return the process-wide registry, building it on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = build_default_registry()
    return _default_registry
