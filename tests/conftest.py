from __future__ import annotations

import pytest

from cloud_policies.core import DatacenterConfig, HostConfig, ResourceSpecs, VmConfig
from cloud_policies.loader import PolicyLoader


@pytest.fixture
def loader() -> PolicyLoader:
    return PolicyLoader()


@pytest.fixture
def host_config() -> HostConfig:
    return HostConfig(
        specs=ResourceSpecs(pes=4, mips_per_pe=1000.0, ram_mb=8192, bw_mbps=1000),
        vm_scheduler_alias="SpaceShared",
        bw_provisioner_alias="Simple",
        pe_provisioner_alias="Simple",
    )


@pytest.fixture
def vm_config() -> VmConfig:
    return VmConfig(
        specs=ResourceSpecs(pes=2, mips_per_pe=500.0, ram_mb=512, bw_mbps=100),
        scheduling_policy_alias="SpaceShared",
    )


@pytest.fixture
def datacenter_config(host_config: HostConfig) -> DatacenterConfig:
    return DatacenterConfig(name="dc-1", allocation_policy_alias="BestFit", hosts=[host_config])
