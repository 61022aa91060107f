"""Cloudlet schedulers: how a VM shares its PEs among submitted cloudlets."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
from dataclasses import dataclass
from enum import Enum
from loguru import logger

from ..core.resources import VirtualMachine


class CloudletStatus(Enum):
    """Cloudlet lifecycle status."""
    WAITING = "waiting"
    EXECUTING = "executing"
    FINISHED = "finished"


@dataclass
class Cloudlet:
    """An application task submitted to a VM."""
    cloudlet_id: str
    length_mi: float
    pes: int = 1
    utilization_model: Any = None  # UtilizationModel applied to CPU usage
    finished_mi: float = 0.0
    status: CloudletStatus = CloudletStatus.WAITING
    finish_time: Optional[float] = None

    @property
    def remaining_mi(self) -> float:
        return max(0.0, self.length_mi - self.finished_mi)


class CloudletScheduler(ABC):
    """Abstract base class for cloudlet schedulers."""

    def __init__(self):
        self.vm: Optional[VirtualMachine] = None
        self.waiting: List[Cloudlet] = []
        self.executing: List[Cloudlet] = []
        self.finished: List[Cloudlet] = []
        self.previous_time: float = 0.0

    def set_vm(self, vm: VirtualMachine) -> None:
        if self.vm is not None and self.vm is not vm:
            raise ValueError(f"{self.__class__.__name__} is already bound to VM {self.vm.vm_id}")
        self.vm = vm

    @property
    def used_pes(self) -> int:
        return sum(c.pes for c in self.executing)

    def submit(self, cloudlet: Cloudlet) -> None:
        """Submit a cloudlet, executing it now or queueing it."""
        if self.vm is None:
            raise RuntimeError(f"{self.__class__.__name__} has no VM")

        if self._can_execute(cloudlet):
            cloudlet.status = CloudletStatus.EXECUTING
            self.executing.append(cloudlet)
        else:
            cloudlet.status = CloudletStatus.WAITING
            self.waiting.append(cloudlet)

        logger.debug(f"Cloudlet {cloudlet.cloudlet_id} submitted to VM {self.vm.vm_id} "
                    f"({cloudlet.status.value})")

    def update_processing(self, current_time: float) -> List[Cloudlet]:
        """Advance execution up to ``current_time`` and return cloudlets finished now."""
        elapsed = current_time - self.previous_time
        if elapsed < 0:
            raise ValueError(f"Time cannot go backwards: {current_time} < {self.previous_time}")

        for cloudlet in self.executing:
            rate = self._mips_for(cloudlet)
            if cloudlet.utilization_model is not None:
                rate *= cloudlet.utilization_model.get_utilization(current_time)
            cloudlet.finished_mi += rate * elapsed

        done = [c for c in self.executing if c.remaining_mi <= 0]
        for cloudlet in done:
            self.executing.remove(cloudlet)
            cloudlet.status = CloudletStatus.FINISHED
            cloudlet.finish_time = current_time
            self.finished.append(cloudlet)

        self.previous_time = current_time
        self._move_waiting_to_exec()
        return done

    def _move_waiting_to_exec(self) -> None:
        for cloudlet in list(self.waiting):
            if self._can_execute(cloudlet):
                self.waiting.remove(cloudlet)
                cloudlet.status = CloudletStatus.EXECUTING
                self.executing.append(cloudlet)

    @abstractmethod
    def _can_execute(self, cloudlet: Cloudlet) -> bool:
        pass

    @abstractmethod
    def _mips_for(self, cloudlet: Cloudlet) -> float:
        """MIPS currently granted to an executing cloudlet."""
        pass


class CloudletSchedulerSpaceShared(CloudletScheduler):
    """Space-shared scheduler - cloudlets get dedicated PEs, the rest wait."""

    def _can_execute(self, cloudlet: Cloudlet) -> bool:
        return self.used_pes + cloudlet.pes <= self.vm.specs.pes

    def _mips_for(self, cloudlet: Cloudlet) -> float:
        return cloudlet.pes * self.vm.specs.mips_per_pe


class CloudletSchedulerTimeShared(CloudletScheduler):
    """Time-shared scheduler - every cloudlet runs, sharing the VM PEs."""

    def _can_execute(self, cloudlet: Cloudlet) -> bool:
        return True

    def _mips_for(self, cloudlet: Cloudlet) -> float:
        share = min(1.0, self.vm.specs.pes / max(1, self.used_pes))
        return cloudlet.pes * self.vm.specs.mips_per_pe * share
