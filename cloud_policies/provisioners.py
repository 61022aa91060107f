"""Resource provisioners: how a host's capacity is handed out to VMs."""

from abc import ABC, abstractmethod
from typing import Dict
from loguru import logger


class ResourceProvisioner(ABC):
    """Abstract base class for resource provisioners.

    A provisioner is created without a capacity; the owning host sets it
    through :meth:`set_capacity` once the provisioner is attached.
    """

    def __init__(self):
        self.capacity: float = 0.0
        self.allocations: Dict[str, float] = {}  # vm_id -> amount

    def set_capacity(self, capacity: float) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity cannot be negative: {capacity}")
        self.capacity = float(capacity)

    @property
    def allocated_resource(self) -> float:
        return sum(self.allocations.values())

    @property
    def available_resource(self) -> float:
        return self.capacity - self.allocated_resource

    def get_allocated_resource_for_vm(self, vm_id: str) -> float:
        return self.allocations.get(vm_id, 0.0)

    @abstractmethod
    def is_suitable_for_vm(self, vm_id: str, amount: float) -> bool:
        """Check if ``amount`` can be granted to the VM."""
        pass

    @abstractmethod
    def allocate_resource_for_vm(self, vm_id: str, amount: float) -> bool:
        """Grant ``amount`` to the VM, replacing any previous grant."""
        pass

    def deallocate_resource_for_vm(self, vm_id: str) -> float:
        """Release the VM's grant and return the released amount."""
        released = self.allocations.pop(vm_id, 0.0)
        if released:
            logger.debug(f"{self.__class__.__name__} released {released} from VM {vm_id}")
        return released


class PeProvisioner(ResourceProvisioner):
    """Provisioner for processing-element capacity, measured in MIPS."""

    @property
    def utilization(self) -> float:
        if self.capacity <= 0:
            return 0.0
        return self.allocated_resource / self.capacity


class ResourceProvisionerSimple(ResourceProvisioner):
    """Best-effort provisioner: grants any request that fits the free capacity."""

    def is_suitable_for_vm(self, vm_id: str, amount: float) -> bool:
        free = self.available_resource + self.get_allocated_resource_for_vm(vm_id)
        return 0 <= amount <= free

    def allocate_resource_for_vm(self, vm_id: str, amount: float) -> bool:
        if not self.is_suitable_for_vm(vm_id, amount):
            logger.debug(f"{self.__class__.__name__} cannot grant {amount} to VM {vm_id} "
                        f"({self.available_resource} available)")
            return False

        self.allocations[vm_id] = float(amount)
        return True


class PeProvisionerSimple(ResourceProvisionerSimple, PeProvisioner):
    """Best-effort provisioner for PE capacity."""
    pass
