"""Scenario records carrying the policy aliases read from configuration."""

from dataclasses import dataclass, field
from typing import List

from .resources import ResourceSpecs


@dataclass
class HostConfig:
    """Host entry of a scenario.

    ``bw_provisioner_alias`` selects a ``ResourceProvisioner<alias>`` and
    ``pe_provisioner_alias`` a ``PeProvisioner<alias>``.
    """
    specs: ResourceSpecs
    vm_scheduler_alias: str = "TimeShared"
    bw_provisioner_alias: str = "Simple"
    pe_provisioner_alias: str = "Simple"
    amount: int = 1


@dataclass
class DatacenterConfig:
    """Datacenter entry of a scenario."""
    name: str
    allocation_policy_alias: str = "Simple"
    hosts: List[HostConfig] = field(default_factory=list)


@dataclass
class VmConfig:
    """VM entry of a scenario."""
    specs: ResourceSpecs
    scheduling_policy_alias: str = "TimeShared"
    amount: int = 1
