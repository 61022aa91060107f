"""Cloud resource models: Hosts and Virtual Machines."""

from typing import Any, Dict, Optional
from dataclasses import dataclass
from enum import Enum
from loguru import logger


class ResourceState(Enum):
    """Resource state enumeration."""
    AVAILABLE = "available"
    ALLOCATED = "allocated"
    FAILED = "failed"


@dataclass
class ResourceSpecs:
    """Resource specifications."""
    pes: int
    mips_per_pe: float
    ram_mb: float
    bw_mbps: float
    storage_mb: float = 0.0

    @property
    def total_mips(self) -> float:
        return self.pes * self.mips_per_pe


@dataclass
class ResourceUsage:
    """Current resource usage."""
    cpu_utilization: float = 0.0  # 0-1
    ram_utilization: float = 0.0  # 0-1
    bw_utilization: float = 0.0  # 0-1


class Host:
    """Physical host in a datacenter.

    The host delegates PE sharing to its VM scheduler and bandwidth/PE
    accounting to its provisioners. All three are usually obtained from a
    :class:`~cloud_policies.loader.PolicyLoader`.
    """

    def __init__(
        self,
        host_id: str,
        specs: ResourceSpecs,
        vm_scheduler: Any = None,
        bw_provisioner: Any = None,
        pe_provisioner: Any = None,
    ):
        self.host_id = host_id
        self.specs = specs
        self.state = ResourceState.AVAILABLE

        self.allocated_specs = ResourceSpecs(0, specs.mips_per_pe, 0.0, 0.0)
        self.current_usage = ResourceUsage()

        self.vms: Dict[str, "VirtualMachine"] = {}

        self.vm_scheduler = vm_scheduler
        if vm_scheduler is not None:
            vm_scheduler.set_host(self)

        self.bw_provisioner = bw_provisioner
        if bw_provisioner is not None:
            bw_provisioner.set_capacity(specs.bw_mbps)

        self.pe_provisioner = pe_provisioner
        if pe_provisioner is not None:
            pe_provisioner.set_capacity(specs.total_mips)

        logger.info(f"Host {host_id} created with {specs.pes} PEs of "
                   f"{specs.mips_per_pe} MIPS, {specs.ram_mb}MB RAM")

    @property
    def free_pes(self) -> int:
        return self.specs.pes - self.allocated_specs.pes

    def can_accommodate(self, required_specs: ResourceSpecs) -> bool:
        """Check if host can accommodate the required resources."""
        if self.state != ResourceState.AVAILABLE:
            return False

        available_ram = self.specs.ram_mb - self.allocated_specs.ram_mb
        available_bw = self.specs.bw_mbps - self.allocated_specs.bw_mbps

        if available_ram < required_specs.ram_mb or available_bw < required_specs.bw_mbps:
            return False

        if self.vm_scheduler is not None:
            return self.vm_scheduler.is_suitable_for_vm(required_specs)
        return self.free_pes >= required_specs.pes

    def allocate_resources(self, specs: ResourceSpecs) -> bool:
        """Allocate resources on this host."""
        if not self.can_accommodate(specs):
            return False

        self.allocated_specs.pes += specs.pes
        self.allocated_specs.ram_mb += specs.ram_mb
        self.allocated_specs.bw_mbps += specs.bw_mbps
        self.allocated_specs.storage_mb += specs.storage_mb

        logger.debug(f"Allocated {specs.pes} PEs, {specs.ram_mb}MB "
                    f"on host {self.host_id}")
        return True

    def deallocate_resources(self, specs: ResourceSpecs) -> None:
        """Deallocate resources from this host."""
        self.allocated_specs.pes = max(0, self.allocated_specs.pes - specs.pes)
        self.allocated_specs.ram_mb = max(0.0, self.allocated_specs.ram_mb - specs.ram_mb)
        self.allocated_specs.bw_mbps = max(0.0, self.allocated_specs.bw_mbps - specs.bw_mbps)
        self.allocated_specs.storage_mb = max(0.0, self.allocated_specs.storage_mb - specs.storage_mb)

        logger.debug(f"Deallocated {specs.pes} PEs, {specs.ram_mb}MB "
                    f"from host {self.host_id}")

    def get_utilization(self) -> ResourceUsage:
        """Get current resource utilization."""
        if self.specs.pes > 0:
            self.current_usage.cpu_utilization = self.allocated_specs.pes / self.specs.pes
        if self.specs.ram_mb > 0:
            self.current_usage.ram_utilization = self.allocated_specs.ram_mb / self.specs.ram_mb
        if self.specs.bw_mbps > 0:
            self.current_usage.bw_utilization = self.allocated_specs.bw_mbps / self.specs.bw_mbps
        return self.current_usage

    def fail(self) -> None:
        """Simulate host failure."""
        self.state = ResourceState.FAILED
        logger.warning(f"Host {self.host_id} failed")

    def recover(self) -> None:
        """Simulate host recovery."""
        self.state = ResourceState.AVAILABLE
        logger.info(f"Host {self.host_id} recovered")


class VirtualMachine:
    """Virtual Machine placed on a host by a VM allocation policy."""

    def __init__(
        self,
        vm_id: str,
        specs: ResourceSpecs,
        cloudlet_scheduler: Any = None,
    ):
        self.vm_id = vm_id
        self.specs = specs
        self.host: Optional[Host] = None
        self.state = ResourceState.AVAILABLE

        self.cloudlet_scheduler = cloudlet_scheduler
        if cloudlet_scheduler is not None:
            cloudlet_scheduler.set_vm(self)

        logger.debug(f"VM {vm_id} created with {specs.pes} PEs")

    def start_on(self, host: Host) -> bool:
        """Claim resources on ``host`` and bind the VM to it."""
        if not host.allocate_resources(self.specs):
            return False

        scheduler = host.vm_scheduler
        if scheduler is not None and not scheduler.allocate_pes_for_vm(self):
            host.deallocate_resources(self.specs)
            return False

        if host.bw_provisioner is not None and not host.bw_provisioner.allocate_resource_for_vm(
            self.vm_id, self.specs.bw_mbps
        ):
            if scheduler is not None:
                scheduler.deallocate_pes_for_vm(self)
            host.deallocate_resources(self.specs)
            return False

        if host.pe_provisioner is not None and not host.pe_provisioner.allocate_resource_for_vm(
            self.vm_id, self.specs.total_mips
        ):
            if scheduler is not None:
                scheduler.deallocate_pes_for_vm(self)
            if host.bw_provisioner is not None:
                host.bw_provisioner.deallocate_resource_for_vm(self.vm_id)
            host.deallocate_resources(self.specs)
            return False

        host.vms[self.vm_id] = self
        self.host = host
        self.state = ResourceState.ALLOCATED
        logger.info(f"VM {self.vm_id} started on host {host.host_id}")
        return True

    def stop(self) -> None:
        """Release every resource the VM holds on its host."""
        host = self.host
        if host is None:
            return

        if host.vm_scheduler is not None:
            host.vm_scheduler.deallocate_pes_for_vm(self)
        if host.bw_provisioner is not None:
            host.bw_provisioner.deallocate_resource_for_vm(self.vm_id)
        if host.pe_provisioner is not None:
            host.pe_provisioner.deallocate_resource_for_vm(self.vm_id)

        host.deallocate_resources(self.specs)
        host.vms.pop(self.vm_id, None)
        self.host = None
        self.state = ResourceState.AVAILABLE
        logger.info(f"VM {self.vm_id} stopped")
