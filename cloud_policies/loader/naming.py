"""Canonical identifiers for policy types.

A canonical identifier is the dotted type name a policy alias stands for::

    {namespace}.{subpackage}.{stem}{alias}

e.g. ``cloud_policies.schedulers.vm.VmSchedulerTimeShared`` for the alias
``"TimeShared"`` of the VM scheduler family. Provisioners have one more
level: their stem depends on a kind prefix, so ``"Simple"`` is
``ResourceProvisionerSimple`` for the default/bandwidth kind and
``PeProvisionerSimple`` for the ``"Pe"`` kind.
"""

from enum import Enum

DEFAULT_NAMESPACE = "cloud_policies"

BANDWIDTH_KIND = ""
PE_KIND = "Pe"


class CapabilityFamily(Enum):
    """Policy families resolvable by alias; values are the type-name stems."""
    VM_SCHEDULER = "VmScheduler"
    VM_ALLOCATION_POLICY = "VmAllocationPolicy"
    CLOUDLET_SCHEDULER = "CloudletScheduler"
    RESOURCE_PROVISIONER = "ResourceProvisioner"
    UTILIZATION_MODEL = "UtilizationModel"

    @property
    def stem(self) -> str:
        return self.value

    @property
    def subpackage(self) -> str:
        return _SUBPACKAGES[self]


_SUBPACKAGES = {
    CapabilityFamily.VM_SCHEDULER: "schedulers.vm",
    CapabilityFamily.VM_ALLOCATION_POLICY: "allocationpolicies",
    CapabilityFamily.CLOUDLET_SCHEDULER: "schedulers.cloudlet",
    CapabilityFamily.RESOURCE_PROVISIONER: "provisioners",
    CapabilityFamily.UTILIZATION_MODEL: "utilizationmodels",
}


def compose(package: str, class_prefix: str, alias: str) -> str:
    """Join a package, a type-name prefix and an alias into a dotted name."""
    return f"{package}.{class_prefix}{alias}"


def provisioner_stem(kind_prefix: str) -> str:
    """Type-name stem for a provisioner kind (``""`` -> ``ResourceProvisioner``)."""
    return "ResourceProvisioner" if not kind_prefix else f"{kind_prefix}Provisioner"


def family_package(family: CapabilityFamily, namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}.{family.subpackage}"


def canonical_identifier(
    family: CapabilityFamily,
    alias: str,
    namespace: str = DEFAULT_NAMESPACE,
    kind_prefix: str = "",
) -> str:
    """Compose the canonical identifier of ``alias`` within ``family``."""
    if family is CapabilityFamily.RESOURCE_PROVISIONER:
        stem = provisioner_stem(kind_prefix)
    elif kind_prefix:
        raise ValueError(f"Kind prefix '{kind_prefix}' only applies to provisioners, not {family.stem}")
    else:
        stem = family.stem

    return compose(family_package(family, namespace), stem, alias)
