"""Refresh cycle status model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class RefreshStatus:
    """Monitoring view of the refresh coordinator."""

    is_running: bool = False
    last_run_at: Optional[datetime] = None
    next_run_at: Optional[datetime] = None
    last_error: Optional[str] = None
