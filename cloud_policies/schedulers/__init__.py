"""VM and cloudlet scheduling policies."""

from .vm import VmScheduler, VmSchedulerSpaceShared, VmSchedulerTimeShared
from .cloudlet import (
    Cloudlet,
    CloudletStatus,
    CloudletScheduler,
    CloudletSchedulerSpaceShared,
    CloudletSchedulerTimeShared,
)

__all__ = [
    "VmScheduler",
    "VmSchedulerSpaceShared",
    "VmSchedulerTimeShared",
    "Cloudlet",
    "CloudletStatus",
    "CloudletScheduler",
    "CloudletSchedulerSpaceShared",
    "CloudletSchedulerTimeShared",
]
