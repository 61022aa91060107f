"""VM allocation policies: which host a datacenter places each VM on."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from loguru import logger

from .core.resources import Host, VirtualMachine


class VmAllocationPolicy(ABC):
    """Abstract base class for VM allocation policies."""

    def __init__(self):
        self.vm_table: Dict[str, str] = {}  # vm_id -> host_id

    @abstractmethod
    def find_host_for_vm(self, vm: VirtualMachine, hosts: Dict[str, Host]) -> Optional[Host]:
        """Select a suitable host for the VM without placing it."""
        pass

    def allocate_host_for_vm(self, vm: VirtualMachine, hosts: Dict[str, Host]) -> Optional[Host]:
        """Place the VM on the host chosen by :meth:`find_host_for_vm`."""
        host = self.find_host_for_vm(vm, hosts)
        if host is None or not vm.start_on(host):
            logger.warning(f"Could not allocate VM {vm.vm_id} - no suitable hosts")
            return None

        self.vm_table[vm.vm_id] = host.host_id
        logger.info(f"VM {vm.vm_id} allocated to host {host.host_id} "
                   f"({self.__class__.__name__})")
        return host

    def deallocate_host_for_vm(self, vm: VirtualMachine) -> None:
        vm.stop()
        self.vm_table.pop(vm.vm_id, None)

    def _suitable_hosts(self, vm: VirtualMachine, hosts: Dict[str, Host]) -> List[Host]:
        # Sort hosts by ID for deterministic behavior
        return [h for h in sorted(hosts.values(), key=lambda h: h.host_id)
                if h.can_accommodate(vm.specs)]


class VmAllocationPolicySimple(VmAllocationPolicy):
    """Worst-fit policy - picks the suitable host with the most free PEs."""

    def find_host_for_vm(self, vm: VirtualMachine, hosts: Dict[str, Host]) -> Optional[Host]:
        candidates = self._suitable_hosts(vm, hosts)
        if not candidates:
            return None
        return max(candidates, key=lambda h: h.free_pes)


class VmAllocationPolicyFirstFit(VmAllocationPolicy):
    """First-fit policy - picks the first suitable host."""

    def find_host_for_vm(self, vm: VirtualMachine, hosts: Dict[str, Host]) -> Optional[Host]:
        candidates = self._suitable_hosts(vm, hosts)
        return candidates[0] if candidates else None


class VmAllocationPolicyBestFit(VmAllocationPolicy):
    """Best-fit policy - picks the suitable host with the fewest free PEs."""

    def find_host_for_vm(self, vm: VirtualMachine, hosts: Dict[str, Host]) -> Optional[Host]:
        candidates = self._suitable_hosts(vm, hosts)
        if not candidates:
            return None
        return min(candidates, key=lambda h: h.free_pes)


class VmAllocationPolicyRoundRobin(VmAllocationPolicy):
    """Round-robin policy - cycles through hosts, starting after the last one used."""

    def __init__(self):
        super().__init__()
        self.last_host_index = -1

    def find_host_for_vm(self, vm: VirtualMachine, hosts: Dict[str, Host]) -> Optional[Host]:
        ordered = sorted(hosts.values(), key=lambda h: h.host_id)
        for offset in range(1, len(ordered) + 1):
            index = (self.last_host_index + offset) % len(ordered)
            if ordered[index].can_accommodate(vm.specs):
                self.last_host_index = index
                return ordered[index]
        return None
