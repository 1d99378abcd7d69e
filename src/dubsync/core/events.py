"""Change notifications from the pipeline orchestrator.

Every visible transition of the active run produces one ``PipelineEvent``.
Listeners (a CLI spinner, a UI) render from the attached snapshot and keep no
pipeline state of their own. Superseded runs never produce events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from dubsync.core.models import RunSnapshot


@dataclass
class PipelineEvent:
    stage: str  # Stage value the active run just entered
    message: str  # status line for display
    snapshot: RunSnapshot
    data: dict[str, Any] | None = None


EventCallback = Callable[[PipelineEvent], None]
