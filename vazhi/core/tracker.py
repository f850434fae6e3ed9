"""Per-section topic progress and step unlocking."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from vazhi.core.roadmap import Section

logger = logging.getLogger(__name__)


class TopicStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    def next(self) -> "TopicStatus":
        """Return the status a click moves to: not-started -> in-progress -> completed -> not-started."""
        return _CYCLE[self]


_CYCLE = {
    TopicStatus.NOT_STARTED: TopicStatus.IN_PROGRESS,
    TopicStatus.IN_PROGRESS: TopicStatus.COMPLETED,
    TopicStatus.COMPLETED: TopicStatus.NOT_STARTED,
}


@dataclass(frozen=True)
class ProgressBreakdown:
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0

    @property
    def total(self) -> int:
        return self.completed + self.in_progress + self.not_started


class TopicProgressTracker:
    """Tracks topic statuses for one section and gates its steps.

    Step 0 starts unlocked; step ``i + 1`` unlocks once every topic of step
    ``i`` is completed. Unlocking is one-way: reverting a topic later never
    locks a step again. Nothing here is persisted, the state lives as long
    as the tracker does.
    """

    def __init__(self, section: Section) -> None:
        self._section = section
        self._statuses: Dict[Tuple[int, int], TopicStatus] = {}
        self._unlocked: List[bool] = []
        self.initialize(section)

    @property
    def section(self) -> Section:
        return self._section

    @property
    def step_count(self) -> int:
        return len(self._section.steps)

    @property
    def total_topics(self) -> int:
        return sum(len(step.topics) for step in self._section.steps)

    @property
    def completed_topics(self) -> int:
        return self.progress_breakdown().completed

    @property
    def unlocked_steps(self) -> List[bool]:
        """Copy of the per-step unlock flags."""
        return list(self._unlocked)

    def initialize(self, section: Section) -> None:
        """Reset to *section*: only the first step unlocked, every topic not started."""
        self._section = section
        self._statuses = {}
        self._unlocked = [idx == 0 for idx in range(len(section.steps))]
        if self._unlocked:
            self._cascade_empty_steps(0)

    def get_topic_status(self, step_index: int, topic_index: int) -> TopicStatus:
        return self._statuses.get((step_index, topic_index), TopicStatus.NOT_STARTED)

    def is_step_unlocked(self, step_index: int) -> bool:
        if 0 <= step_index < len(self._unlocked):
            return self._unlocked[step_index]
        return False

    def is_step_completed(self, step_index: int) -> bool:
        """True when every topic of the step is completed (vacuously true for an empty step)."""
        if not 0 <= step_index < self.step_count:
            return False
        topics = self._section.steps[step_index].topics
        return all(
            self.get_topic_status(step_index, idx) is TopicStatus.COMPLETED
            for idx in range(len(topics))
        )

    def cycle_topic_status(self, step_index: int, topic_index: int) -> TopicStatus:
        """Advance one topic to its next status and return the topic's status afterwards.

        Clicks on a locked step, or on indices outside the section, change nothing.
        """
        if not self.is_step_unlocked(step_index):
            logger.debug("Ignoring click on locked step %d", step_index)
            return self.get_topic_status(step_index, topic_index)
        if not 0 <= topic_index < len(self._section.steps[step_index].topics):
            logger.debug("Ignoring click on unknown topic %d in step %d", topic_index, step_index)
            return self.get_topic_status(step_index, topic_index)

        new_status = self.get_topic_status(step_index, topic_index).next()
        self._statuses[(step_index, topic_index)] = new_status

        if new_status is TopicStatus.COMPLETED and self.is_step_completed(step_index):
            self._unlock_next(step_index)
        return new_status

    def completion_percentage(self) -> int:
        """Completed topics as a whole percentage (halves round up), 0 for a section without topics."""
        total = self.total_topics
        if total == 0:
            return 0
        completed = self.completed_topics
        return (200 * completed + total) // (2 * total)

    def progress_breakdown(self) -> ProgressBreakdown:
        completed = 0
        in_progress = 0
        not_started = 0
        for step_index, step in enumerate(self._section.steps):
            for topic_index in range(len(step.topics)):
                status = self.get_topic_status(step_index, topic_index)
                if status is TopicStatus.COMPLETED:
                    completed += 1
                elif status is TopicStatus.IN_PROGRESS:
                    in_progress += 1
                else:
                    not_started += 1
        return ProgressBreakdown(completed=completed, in_progress=in_progress, not_started=not_started)

    def _unlock_next(self, step_index: int) -> None:
        nxt = step_index + 1
        if nxt >= len(self._unlocked) or self._unlocked[nxt]:
            return
        self._unlocked[nxt] = True
        logger.info("Unlocked step %d of section %r", nxt, self._section.title)
        self._cascade_empty_steps(nxt)

    def _cascade_empty_steps(self, step_index: int) -> None:
        # an unlocked step without topics is already complete
        if not self._section.steps[step_index].topics:
            self._unlock_next(step_index)
