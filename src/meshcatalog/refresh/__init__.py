"""Background registration: the refresh schedule and its supervised tasks."""

from meshcatalog.refresh.scheduler import REFRESH_INTERVAL, RefreshScheduler
from meshcatalog.refresh.supervisor import supervise
from meshcatalog.refresh.tasks import BackgroundTasks, registration_cycle, start_registration

__all__ = [
    "REFRESH_INTERVAL",
    "RefreshScheduler",
    "supervise",
    "BackgroundTasks",
    "registration_cycle",
    "start_registration",
]
