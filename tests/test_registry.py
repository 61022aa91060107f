from __future__ import annotations

import pytest

from cloud_policies.loader import FAMILY_INTERFACES
from cloud_policies.loader.errors import RegistryFrozenError
from cloud_policies.loader.naming import CapabilityFamily
from cloud_policies.loader.registry import ConstructorRegistry, build_default_registry, get_default_registry
from cloud_policies.schedulers.vm import VmSchedulerTimeShared


def test_default_registry_is_a_frozen_singleton():
    registry = get_default_registry()

    assert registry is get_default_registry()
    assert registry.frozen


def test_default_registry_enumerates_shipped_variants():
    registry = get_default_registry()

    assert len(registry) == 14
    assert registry.identifiers(CapabilityFamily.RESOURCE_PROVISIONER) == (
        "cloud_policies.provisioners.PeProvisionerSimple",
        "cloud_policies.provisioners.ResourceProvisionerSimple",
    )
    assert (CapabilityFamily.VM_SCHEDULER, "cloud_policies.schedulers.vm.VmSchedulerSpaceShared") in registry


def test_every_registered_constructor_builds_its_family_interface():
    registry = get_default_registry()

    for family in CapabilityFamily:
        for identifier, constructor in registry.entries(family):
            instance = constructor()
            assert isinstance(instance, FAMILY_INTERFACES[family]), identifier


def test_register_after_freeze_fails():
    registry = build_default_registry()

    with pytest.raises(RegistryFrozenError):
        registry.register(CapabilityFamily.VM_SCHEDULER, "x.schedulers.vm.VmSchedulerX", VmSchedulerTimeShared)


def test_register_rejects_duplicates_and_non_callables():
    registry = ConstructorRegistry()
    registry.register(CapabilityFamily.VM_SCHEDULER, "a.VmSchedulerA", VmSchedulerTimeShared)

    with pytest.raises(ValueError, match="already registered"):
        registry.register(CapabilityFamily.VM_SCHEDULER, "a.VmSchedulerA", VmSchedulerTimeShared)
    with pytest.raises(ValueError, match="not callable"):
        registry.register(CapabilityFamily.VM_SCHEDULER, "a.VmSchedulerB", "VmSchedulerB")


def test_lookup_missing_returns_none():
    assert get_default_registry().lookup(CapabilityFamily.VM_SCHEDULER, "nope") is None


def test_families_do_not_share_entries():
    registry = ConstructorRegistry()
    registry.register(CapabilityFamily.VM_SCHEDULER, "shared.Name", VmSchedulerTimeShared)
    registry.freeze()

    assert registry.lookup(CapabilityFamily.VM_SCHEDULER, "shared.Name") is VmSchedulerTimeShared
    assert registry.lookup(CapabilityFamily.RESOURCE_PROVISIONER, "shared.Name") is None


def test_register_type_uses_class_name():
    registry = ConstructorRegistry(namespace="org.sim")
    identifier = registry.register_type(CapabilityFamily.VM_SCHEDULER, VmSchedulerTimeShared)

    assert identifier == "org.sim.schedulers.vm.VmSchedulerTimeShared"


def test_extended_returns_new_registry_and_leaves_original_untouched():
    original = get_default_registry()
    identifier = "cloud_policies.schedulers.vm.VmSchedulerCustom"

    extended = original.extended(CapabilityFamily.VM_SCHEDULER, {identifier: VmSchedulerTimeShared})

    assert extended is not original
    assert extended.frozen
    assert (CapabilityFamily.VM_SCHEDULER, identifier) in extended
    assert (CapabilityFamily.VM_SCHEDULER, identifier) not in original
    assert len(extended) == len(original) + 1


def test_freeze_is_idempotent():
    registry = ConstructorRegistry()
    assert registry.freeze() is registry.freeze()
