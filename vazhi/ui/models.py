"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from vazhi.core.roadmap import Step
from vazhi.core.tracker import ProgressBreakdown, TopicProgressTracker, TopicStatus
from vazhi.ui.colors import RoadmapColors


@dataclass
class TopicState:
    text: str
    status: TopicStatus
    interactive: bool


@dataclass
class StepState:
    """UI state for a single step: unlock status and the status of each topic."""

    step: Step
    index: int
    unlocked: bool
    topics: List[TopicState] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return all(t.status is TopicStatus.COMPLETED for t in self.topics)


def build_step_states(tracker: TopicProgressTracker) -> List[StepState]:
    """Snapshot the tracker into one StepState per step, in section order."""
    states: List[StepState] = []
    for step_index, step in enumerate(tracker.section.steps):
        unlocked = tracker.is_step_unlocked(step_index)
        topics = [
            TopicState(
                text=text,
                status=tracker.get_topic_status(step_index, topic_index),
                interactive=unlocked,
            )
            for topic_index, text in enumerate(step.topics)
        ]
        states.append(StepState(step=step, index=step_index, unlocked=unlocked, topics=topics))
    return states


def chart_slices(breakdown: ProgressBreakdown) -> List[Tuple[str, int, str]]:
    """(label, value, color) for the breakdown chart, skipping empty slices."""
    slices = [
        ("Completed", breakdown.completed, RoadmapColors.COMPLETED),
        ("In Progress", breakdown.in_progress, RoadmapColors.IN_PROGRESS),
        ("Not Started", breakdown.not_started, RoadmapColors.NOT_STARTED),
    ]
    return [s for s in slices if s[1] > 0]
