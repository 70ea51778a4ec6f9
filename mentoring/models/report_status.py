from __future__ import annotations

import enum

from ..exceptions.reports import InvalidTransitionError


class ReportStatus(enum.Enum):
    """Status of the report of a mentoring log."""

    READY = "ready"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def editable(self) -> bool:
        """Whether the fields of the report may still be changed."""

        return self in EDITABLE

    def can_transition(self, target: ReportStatus) -> bool:
        return target in TRANSITIONS[self]

    def transition(self, target: ReportStatus) -> ReportStatus:
        if not self.can_transition(target):
            raise InvalidTransitionError(self.value, target.value)
        return target


TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.READY: frozenset({ReportStatus.IN_PROGRESS}),
    ReportStatus.IN_PROGRESS: frozenset({ReportStatus.COMPLETED}),
    ReportStatus.COMPLETED: frozenset(),
}

EDITABLE: frozenset[ReportStatus] = frozenset({ReportStatus.READY, ReportStatus.IN_PROGRESS})
