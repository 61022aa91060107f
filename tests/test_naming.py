from __future__ import annotations

import pytest

from cloud_policies.loader.naming import (
    BANDWIDTH_KIND,
    PE_KIND,
    CapabilityFamily,
    canonical_identifier,
    compose,
    family_package,
    provisioner_stem,
)


def test_compose_concatenates_without_extra_separators():
    assert compose("pkg.sub", "VmScheduler", "TimeShared") == "pkg.sub.VmSchedulerTimeShared"


def test_vm_scheduler_identifier_is_deterministic():
    first = canonical_identifier(CapabilityFamily.VM_SCHEDULER, "RoundRobin")
    second = canonical_identifier(CapabilityFamily.VM_SCHEDULER, "RoundRobin")

    assert first == second == "cloud_policies.schedulers.vm.VmSchedulerRoundRobin"


@pytest.mark.parametrize(
    "family, expected",
    [
        (CapabilityFamily.VM_ALLOCATION_POLICY, "cloud_policies.allocationpolicies.VmAllocationPolicySimple"),
        (CapabilityFamily.CLOUDLET_SCHEDULER, "cloud_policies.schedulers.cloudlet.CloudletSchedulerSimple"),
        (CapabilityFamily.UTILIZATION_MODEL, "cloud_policies.utilizationmodels.UtilizationModelSimple"),
    ],
)
def test_direct_stem_families(family, expected):
    assert canonical_identifier(family, "Simple") == expected


def test_provisioner_stem_depends_on_kind_prefix():
    assert provisioner_stem("") == "ResourceProvisioner"
    assert provisioner_stem("Pe") == "PeProvisioner"
    assert provisioner_stem("Bw") == "BwProvisioner"


def test_provisioner_identifiers_for_bandwidth_and_pe_kinds():
    bw = canonical_identifier(CapabilityFamily.RESOURCE_PROVISIONER, "Simple", kind_prefix=BANDWIDTH_KIND)
    pe = canonical_identifier(CapabilityFamily.RESOURCE_PROVISIONER, "Simple", kind_prefix=PE_KIND)

    assert bw == "cloud_policies.provisioners.ResourceProvisionerSimple"
    assert pe == "cloud_policies.provisioners.PeProvisionerSimple"
    assert bw != pe


def test_kind_prefix_is_rejected_outside_provisioners():
    with pytest.raises(ValueError, match="only applies to provisioners"):
        canonical_identifier(CapabilityFamily.VM_SCHEDULER, "TimeShared", kind_prefix="Pe")


def test_custom_namespace():
    assert family_package(CapabilityFamily.VM_SCHEDULER, "org.sim") == "org.sim.schedulers.vm"
    assert (
        canonical_identifier(CapabilityFamily.UTILIZATION_MODEL, "Full", namespace="org.sim")
        == "org.sim.utilizationmodels.UtilizationModelFull"
    )


def test_alias_is_case_sensitive():
    lower = canonical_identifier(CapabilityFamily.VM_SCHEDULER, "timeshared")
    upper = canonical_identifier(CapabilityFamily.VM_SCHEDULER, "TimeShared")
    assert lower != upper
