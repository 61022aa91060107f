"""Policy factory: resolves policy aliases into fresh policy instances."""

import threading
from typing import Any, Optional, Type
from loguru import logger

from ..allocationpolicies import VmAllocationPolicy
from ..provisioners import PeProvisioner, ResourceProvisioner
from ..schedulers.cloudlet import CloudletScheduler
from ..schedulers.vm import VmScheduler
from ..utilizationmodels import UtilizationModel
from .errors import ConstructionError, UnknownAliasError
from .naming import BANDWIDTH_KIND, PE_KIND, CapabilityFamily, canonical_identifier
from .registry import ConstructorRegistry, get_default_registry

FAMILY_INTERFACES = {
    CapabilityFamily.VM_SCHEDULER: VmScheduler,
    CapabilityFamily.VM_ALLOCATION_POLICY: VmAllocationPolicy,
    CapabilityFamily.CLOUDLET_SCHEDULER: CloudletScheduler,
    CapabilityFamily.RESOURCE_PROVISIONER: ResourceProvisioner,
    CapabilityFamily.UTILIZATION_MODEL: UtilizationModel,
}


def required_interface(family: CapabilityFamily, kind_prefix: str = "") -> Type:
    """Interface an instance of ``family`` must implement; the ``Pe`` kind needs a ``PeProvisioner``."""
    if family is CapabilityFamily.RESOURCE_PROVISIONER and kind_prefix == PE_KIND:
        return PeProvisioner
    return FAMILY_INTERFACES[family]


class PolicyLoader:
    """Creates policy instances from the aliases used in scenario configuration.

    Every call composes the canonical identifier for the alias, looks up its
    constructor in the registry and builds a new instance. Nothing is cached:
    two calls with the same alias return two independent objects.

    Example::

        loader = PolicyLoader()
        scheduler = loader.vm_scheduler("TimeShared")
        bw = loader.new_resource_provisioner(host_config)   # ResourceProvisionerSimple
        pe = loader.new_pe_provisioner(host_config)         # PeProvisionerSimple
    """

    def __init__(self, registry: Optional[ConstructorRegistry] = None):
        self.registry = registry if registry is not None else get_default_registry()

    def vm_scheduler(self, alias: str) -> VmScheduler:
        return self.load(CapabilityFamily.VM_SCHEDULER, alias)

    def new_vm_scheduler(self, host_config: Any) -> VmScheduler:
        return self.vm_scheduler(host_config.vm_scheduler_alias)

    def resource_provisioner(self, kind_prefix: str, alias: str) -> ResourceProvisioner:
        """Create a provisioner, e.g. ``("Pe", "Simple")`` -> ``PeProvisionerSimple``."""
        return self.load(CapabilityFamily.RESOURCE_PROVISIONER, alias, kind_prefix=kind_prefix)

    def new_resource_provisioner(self, host_config: Any) -> ResourceProvisioner:
        return self.resource_provisioner(BANDWIDTH_KIND, host_config.bw_provisioner_alias)

    def new_pe_provisioner(self, host_config: Any) -> PeProvisioner:
        return self.resource_provisioner(PE_KIND, host_config.pe_provisioner_alias)

    def vm_allocation_policy(self, datacenter_config: Any) -> VmAllocationPolicy:
        return self.load(CapabilityFamily.VM_ALLOCATION_POLICY, datacenter_config.allocation_policy_alias)

    def cloudlet_scheduler(self, vm_config: Any) -> CloudletScheduler:
        return self.load(CapabilityFamily.CLOUDLET_SCHEDULER, vm_config.scheduling_policy_alias)

    def utilization_model(self, alias: str) -> UtilizationModel:
        return self.load(CapabilityFamily.UTILIZATION_MODEL, alias)

    def load(
        self,
        family: CapabilityFamily,
        alias: str,
        kind_prefix: str = "",
    ) -> Any:
        """Resolve ``alias`` within ``family`` and construct a new instance.

        Raises:
            UnknownAliasError: If no constructor is registered for the alias
            ConstructionError: If the constructor fails or returns an object
                that does not implement the family interface
                (``PeProvisioner`` for the ``Pe`` provisioner kind)
        """
        if not isinstance(alias, str) or not alias:
            message = f"Invalid {family.stem} alias {alias!r}: expected a non-empty string"
            logger.error(message)
            raise UnknownAliasError(message, family=family, alias=alias)

        identifier = canonical_identifier(family, alias, self.registry.namespace, kind_prefix)
        constructor = self.registry.lookup(family, identifier)
        if constructor is None:
            message = f"Unknown {family.stem} alias '{alias}': no type registered as {identifier}"
            logger.error(message)
            raise UnknownAliasError(message, family=family, alias=alias, canonical_identifier=identifier)

        try:
            instance = constructor()
        except Exception as e:
            message = f"Failed to construct {identifier} for {family.stem} alias '{alias}': {e}"
            logger.error(message)
            raise ConstructionError(
                message, family=family, alias=alias, canonical_identifier=identifier, cause=e
            ) from e

        expected = required_interface(family, kind_prefix)
        if not isinstance(instance, expected):
            message = (f"{identifier} for {family.stem} alias '{alias}' built a "
                       f"{type(instance).__name__}, which is not a {expected.__name__}")
            logger.error(message)
            raise ConstructionError(message, family=family, alias=alias, canonical_identifier=identifier)

        logger.debug(f"Resolved {family.stem} alias '{alias}' to {identifier}")
        return instance


_default_loader: Optional[PolicyLoader] = None
_default_lock = threading.Lock()


def get_default_loader() -> PolicyLoader:
    """Return the process-wide loader over the default registry."""
    global _default_loader
    if _default_loader is None:
        with _default_lock:
            if _default_loader is None:
                _default_loader = PolicyLoader(get_default_registry())
    return _default_loader
