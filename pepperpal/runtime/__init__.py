"""Background runtime helpers."""

from pepperpal.runtime.maintenance import MaintenanceScheduler, SweepJob

__all__ = ["MaintenanceScheduler", "SweepJob"]
