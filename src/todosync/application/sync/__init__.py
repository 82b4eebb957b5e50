"""
Sync - Keeps the sender and receiver sides of shared todos consistent.
"""

from .audit import AuditTrailRecorder
from .orchestrator import UNKNOWN_USER_NAME, ListSyncOrchestrator
from .results import TransitionResult

__all__ = [
    "AuditTrailRecorder",
    "ListSyncOrchestrator",
    "TransitionResult",
    "UNKNOWN_USER_NAME",
]
