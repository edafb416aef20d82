class SchedulerError(Exception):
    """Base class for errors raised by schedsim."""


class WorkloadError(SchedulerError, ValueError):
    """A workload file is missing, unreadable or malformed."""


class InvalidProcessError(SchedulerError, ValueError):
    """A process table cannot be scheduled (bad burst, arrival or id)."""
