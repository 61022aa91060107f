"""Core resource and scenario models."""

from .resources import Host, VirtualMachine, ResourceSpecs, ResourceUsage, ResourceState
from .scenario import HostConfig, DatacenterConfig, VmConfig

__all__ = [
    "Host",
    "VirtualMachine",
    "ResourceSpecs",
    "ResourceUsage",
    "ResourceState",
    "HostConfig",
    "DatacenterConfig",
    "VmConfig",
]
