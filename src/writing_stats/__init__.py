"""
writing_stats package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .analyzer import analyze
from .config import StatisticsConfig, config_from_dict, config_from_yaml, load_config
from .coordinator import StatisticsCoordinator
from .models import (
    ActivityState,
    DisplayScope,
    DocumentSnapshot,
    LixBand,
    Metrics,
    SessionStats,
)
from .notifications import Notification, NotificationBus
from .scheduling import AsyncioScheduler, ManualScheduler
from .session import SessionTracker

__all__ = [
    "ActivityState",
    "AsyncioScheduler",
    "DisplayScope",
    "DocumentSnapshot",
    "LixBand",
    "ManualScheduler",
    "Metrics",
    "Notification",
    "NotificationBus",
    "SessionStats",
    "SessionTracker",
    "StatisticsConfig",
    "StatisticsCoordinator",
    "analyze",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
]

__version__ = "0.1.0"
