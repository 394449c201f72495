"""Supervised background threads."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)


def supervise(name: str, target: Callable[..., Any], *args: Any) -> threading.Thread:
    """
    Run ``target`` on a daemon thread that logs instead of dying loudly.

    The thread is started and returned; callers are not expected to join it.
    """

    def guarded() -> None:
        try:
            target(*args)
        except Exception:
            logger.exception("Background task %s failed", name)

    thread = threading.Thread(target=guarded, name=name, daemon=True)
    thread.start()
    return thread
