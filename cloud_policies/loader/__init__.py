"""Alias-based loading of simulation policies.

The module-level functions delegate to the process-wide loader returned
by :func:`get_default_loader`, which resolves against the default
registry; build a :class:`PolicyLoader` with another registry to resolve
against it instead.
"""

from typing import Any

from .errors import ConstructionError, PolicyLoaderError, RegistryFrozenError, UnknownAliasError
from .factory import FAMILY_INTERFACES, PolicyLoader, get_default_loader, required_interface
from .naming import (
    BANDWIDTH_KIND,
    DEFAULT_NAMESPACE,
    PE_KIND,
    CapabilityFamily,
    canonical_identifier,
    compose,
    family_package,
    provisioner_stem,
)
from .registry import ConstructorRegistry, build_default_registry, get_default_registry


def vm_scheduler(alias: str):
    return get_default_loader().vm_scheduler(alias)


def new_vm_scheduler(host_config: Any):
    return get_default_loader().new_vm_scheduler(host_config)


def resource_provisioner(kind_prefix: str, alias: str):
    return get_default_loader().resource_provisioner(kind_prefix, alias)


def new_resource_provisioner(host_config: Any):
    return get_default_loader().new_resource_provisioner(host_config)


def new_pe_provisioner(host_config: Any):
    return get_default_loader().new_pe_provisioner(host_config)


def vm_allocation_policy(datacenter_config: Any):
    return get_default_loader().vm_allocation_policy(datacenter_config)


def cloudlet_scheduler(vm_config: Any):
    return get_default_loader().cloudlet_scheduler(vm_config)


def utilization_model(alias: str):
    return get_default_loader().utilization_model(alias)


__all__ = [
    "PolicyLoader",
    "get_default_loader",
    "required_interface",
    "ConstructorRegistry",
    "build_default_registry",
    "get_default_registry",
    "CapabilityFamily",
    "FAMILY_INTERFACES",
    "DEFAULT_NAMESPACE",
    "BANDWIDTH_KIND",
    "PE_KIND",
    "compose",
    "provisioner_stem",
    "family_package",
    "canonical_identifier",
    "PolicyLoaderError",
    "UnknownAliasError",
    "ConstructionError",
    "RegistryFrozenError",
    "vm_scheduler",
    "new_vm_scheduler",
    "resource_provisioner",
    "new_resource_provisioner",
    "new_pe_provisioner",
    "vm_allocation_policy",
    "cloudlet_scheduler",
    "utilization_model",
]
