"""VM schedulers: how a host shares its PEs among the VMs placed on it."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from loguru import logger

from ..core.resources import Host, ResourceSpecs, VirtualMachine


class VmScheduler(ABC):
    """Abstract base class for VM schedulers."""

    def __init__(self):
        self.host: Optional[Host] = None
        self.allocated_mips: Dict[str, List[float]] = {}  # vm_id -> MIPS per PE

    def set_host(self, host: Host) -> None:
        if self.host is not None and self.host is not host:
            raise ValueError(f"{self.__class__.__name__} is already bound to host {self.host.host_id}")
        self.host = host

    @property
    def total_mips(self) -> float:
        return self.host.specs.total_mips if self.host else 0.0

    @property
    def available_mips(self) -> float:
        used = sum(sum(mips) for mips in self.allocated_mips.values())
        return self.total_mips - used

    def get_allocated_mips(self, vm: VirtualMachine) -> List[float]:
        return list(self.allocated_mips.get(vm.vm_id, []))

    @abstractmethod
    def is_suitable_for_vm(self, specs: ResourceSpecs) -> bool:
        """Check if the host PEs can serve a VM with the given specs."""
        pass

    def allocate_pes_for_vm(self, vm: VirtualMachine) -> bool:
        """Reserve PE capacity for the VM."""
        if self.host is None:
            raise RuntimeError(f"{self.__class__.__name__} has no host")

        if not self.is_suitable_for_vm(vm.specs):
            logger.debug(f"Host {self.host.host_id} cannot allocate PEs for VM {vm.vm_id}")
            return False

        self.allocated_mips[vm.vm_id] = [vm.specs.mips_per_pe] * vm.specs.pes
        return True

    def deallocate_pes_for_vm(self, vm: VirtualMachine) -> None:
        self.allocated_mips.pop(vm.vm_id, None)


class VmSchedulerSpaceShared(VmScheduler):
    """Space-shared scheduler - each VM gets dedicated PEs."""

    @property
    def free_pes(self) -> int:
        if self.host is None:
            return 0
        used = sum(len(mips) for mips in self.allocated_mips.values())
        return self.host.specs.pes - used

    def is_suitable_for_vm(self, specs: ResourceSpecs) -> bool:
        if self.host is None:
            return False
        return (
            specs.mips_per_pe <= self.host.specs.mips_per_pe and
            specs.pes <= self.free_pes
        )


class VmSchedulerTimeShared(VmScheduler):
    """Time-shared scheduler - VMs share PEs as long as total MIPS fit."""

    def is_suitable_for_vm(self, specs: ResourceSpecs) -> bool:
        if self.host is None:
            return False
        return (
            specs.pes <= self.host.specs.pes and
            specs.mips_per_pe <= self.host.specs.mips_per_pe and
            specs.total_mips <= self.available_mips
        )
