"""Roadmap section UI: SectionCard, StepCard, TopicRow and the progress visuals."""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QColor, QLinearGradient, QPainter, QPen
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from vazhi.core.roadmap import Section, section_level
from vazhi.core.tracker import TopicProgressTracker, TopicStatus
from vazhi.ui.colors import LEVEL_COLORS, RoadmapColors, blend_hex
from vazhi.ui.models import StepState, TopicState, build_step_states, chart_slices

_STATUS_COLORS = {
    TopicStatus.COMPLETED: RoadmapColors.COMPLETED,
    TopicStatus.IN_PROGRESS: RoadmapColors.IN_PROGRESS,
    TopicStatus.NOT_STARTED: RoadmapColors.NOT_STARTED,
}


class SectionProgressBar(QWidget):
    """Rounded completion bar filled with the section's tier color."""

    def __init__(self, parent: Optional[QWidget] = None, *, height: int = 10) -> None:
        super().__init__(parent)
        self._percent = 0
        self._color = RoadmapColors.COMPLETED
        self.setFixedHeight(height)
        self.setMinimumWidth(100)

    def set_progress(self, percent: int, color: Optional[str] = None) -> None:
        self._percent = max(0, min(100, int(percent)))
        if color:
            self._color = color
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        radius = min(6, self.height() // 2)

        painter.setBrush(QColor(RoadmapColors.PROGRESS_TRACK))
        painter.drawRoundedRect(0, 0, self.width(), self.height(), radius, radius)

        fill = int(self.width() * self._percent / 100)
        if fill > 0:
            gradient = QLinearGradient(0, 0, fill, 0)
            gradient.setColorAt(0, QColor(blend_hex(self._color, "#FFFFFF", 0.25)))
            gradient.setColorAt(1, QColor(self._color))
            painter.setBrush(gradient)
            painter.drawRoundedRect(0, 0, fill, self.height(), radius, radius)


class BreakdownChart(QWidget):
    """Donut of completed / in-progress / not-started topics with a legend."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._slices: List[Tuple[str, int, str]] = []
        self.setFixedHeight(140)

    def set_slices(self, slices: List[Tuple[str, int, str]]) -> None:
        self._slices = list(slices)
        tips = [f"{label}: {value} topics" for label, value, _ in self._slices]
        self.setToolTip("\n".join(tips))
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        size = min(110, self.height() - 20)
        ring = QRectF(20, (self.height() - size) / 2, size, size)
        total = sum(value for _, value, _ in self._slices)
        pen_width = max(8, int(size * 0.18))

        if total <= 0:
            pen = QPen(QColor(RoadmapColors.NOT_STARTED), pen_width)
            painter.setPen(pen)
            painter.drawArc(ring, 0, 360 * 16)
        else:
            start = 90 * 16
            for _, value, color in self._slices:
                span = -int(round(360 * 16 * value / total))
                pen = QPen(QColor(color), pen_width)
                pen.setCapStyle(Qt.FlatCap)
                painter.setPen(pen)
                painter.drawArc(ring, start, span)
                start += span

        # legend
        font = painter.font()
        font.setPointSize(10)
        painter.setFont(font)
        x = int(ring.right()) + 36
        y = int(ring.top()) + 18
        for label, color in (
            ("Completed", RoadmapColors.COMPLETED),
            ("In Progress", RoadmapColors.IN_PROGRESS),
            ("Not Started", RoadmapColors.NOT_STARTED),
        ):
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(color))
            painter.drawEllipse(x, y - 10, 12, 12)
            painter.setPen(QColor(RoadmapColors.TEXT_SECONDARY))
            painter.drawText(x + 20, y, label)
            y += 26


class TopicRow(QWidget):
    """One clickable topic with a painted status marker."""

    def __init__(
        self,
        *,
        step_index: int,
        topic_index: int,
        on_click: Callable[[int, int], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._step_index = step_index
        self._topic_index = topic_index
        self._on_click = on_click
        self._status = TopicStatus.NOT_STARTED
        self._interactive = False

        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self._label = QLabel("")
        self._label.setWordWrap(True)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(32, 6, 8, 6)
        layout.addWidget(self._label, 1)

    def set_state(self, state: TopicState) -> None:
        self._status = state.status
        self._interactive = state.interactive
        self._label.setText(state.text)
        weight = 600 if state.status is TopicStatus.COMPLETED else 400
        color = RoadmapColors.TEXT_PRIMARY if state.status is not TopicStatus.NOT_STARTED else RoadmapColors.TEXT_MUTED
        self._label.setStyleSheet(f"color: {color}; font-weight: {weight}; font-size: 13px;")
        self.setCursor(Qt.PointingHandCursor if state.interactive else Qt.ArrowCursor)
        self.setToolTip(state.status.value)
        self.update()

    def mousePressEvent(self, event) -> None:
        if self._interactive:
            self._on_click(self._step_index, self._topic_index)
        super().mousePressEvent(event)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        box = QRectF(8, (self.height() - 16) / 2, 16, 16)
        color = QColor(_STATUS_COLORS[self._status])

        if self._status is TopicStatus.NOT_STARTED:
            painter.setPen(QPen(color.darker(130), 2))
            painter.setBrush(Qt.NoBrush)
            painter.drawRoundedRect(box, 3, 3)
        elif self._status is TopicStatus.IN_PROGRESS:
            painter.setPen(Qt.NoPen)
            painter.setBrush(color)
            painter.drawRoundedRect(box, 3, 3)
        else:
            painter.setPen(QPen(color, 2))
            painter.setBrush(Qt.NoBrush)
            painter.drawRoundedRect(box, 3, 3)
            check = QPen(color, 2)
            check.setCapStyle(Qt.RoundCap)
            painter.setPen(check)
            painter.drawLine(int(box.left() + 4), int(box.center().y()), int(box.center().x() - 1), int(box.bottom() - 4))
            painter.drawLine(int(box.center().x() - 1), int(box.bottom() - 4), int(box.right() - 3), int(box.top() + 4))


class StepCard(QFrame):
    """A numbered step with its topics, greyed out while locked."""

    def __init__(
        self,
        *,
        step_index: int,
        topic_count: int,
        badge_colors: Tuple[str, str],
        on_topic_click: Callable[[int, int], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("stepCard")
        badge_bg, badge_fg = badge_colors

        header = QHBoxLayout()
        header.setSpacing(8)
        number = QLabel(str(step_index + 1))
        number.setAlignment(Qt.AlignCenter)
        number.setFixedSize(24, 24)
        number.setStyleSheet(
            f"background: {badge_bg}; color: {badge_fg}; border-radius: 12px; font-size: 11px; font-weight: 700;"
        )
        self._title = QLabel("")
        self._title.setStyleSheet(f"color: {RoadmapColors.TEXT_PRIMARY}; font-weight: 600; font-size: 14px;")
        self._lock_label = QLabel("🔒 Complete previous step")
        self._lock_label.setStyleSheet(f"color: {RoadmapColors.TEXT_MUTED}; font-size: 11px;")
        header.addWidget(number)
        header.addWidget(self._title, 1)
        header.addWidget(self._lock_label, 0, Qt.AlignRight)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 12, 14, 12)
        layout.setSpacing(4)
        layout.addLayout(header)

        self._rows: List[TopicRow] = []
        for topic_index in range(topic_count):
            row = TopicRow(step_index=step_index, topic_index=topic_index, on_click=on_topic_click, parent=self)
            self._rows.append(row)
            layout.addWidget(row)

    def set_state(self, state: StepState) -> None:
        self._title.setText(state.step.title)
        self._lock_label.setVisible(not state.unlocked)
        bg = RoadmapColors.STEP_BG_UNLOCKED if state.unlocked else RoadmapColors.STEP_BG_LOCKED
        self.setStyleSheet(f"QFrame#stepCard {{ background: {bg}; border-radius: 10px; }}")
        for row, topic in zip(self._rows, state.topics):
            row.set_state(topic)


class SectionCard(QFrame):
    """One roadmap section. Owns the section's TopicProgressTracker."""

    def __init__(self, section: Section, section_index: int, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._tracker = TopicProgressTracker(section)
        self._level = section_level(section.title, section_index)
        self._accent, badge_bg, badge_fg = LEVEL_COLORS[self._level]

        self.setObjectName("sectionCard")
        self.setStyleSheet(
            f"""
            QFrame#sectionCard {{
                background: {RoadmapColors.CARD_BG};
                border: 1px solid {RoadmapColors.CARD_BORDER};
                border-radius: 12px;
            }}
            QPushButton {{
                background: transparent;
                border: 1px solid {RoadmapColors.CARD_BORDER};
                border-radius: 8px;
                padding: 4px 10px;
                color: {RoadmapColors.TEXT_SECONDARY};
            }}
            QPushButton:checked {{
                background: {RoadmapColors.STEP_BG_LOCKED};
            }}
            """
        )
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(18)
        shadow.setOffset(0, 4)
        shadow.setColor(QColor(15, 23, 42, 40))
        self.setGraphicsEffect(shadow)

        title = QLabel(section.title)
        title.setStyleSheet(f"color: {RoadmapColors.TEXT_PRIMARY}; font-size: 18px; font-weight: 700;")
        self._percent_label = QLabel("0%")
        self._percent_label.setStyleSheet(f"color: {RoadmapColors.TEXT_SECONDARY}; font-weight: 600;")
        self._progress_bar = SectionProgressBar()
        level_caption = QLabel(f"{self._level.value} level content")
        level_caption.setStyleSheet(f"color: {RoadmapColors.TEXT_MUTED}; font-size: 12px;")

        self._chart_button = QPushButton("Chart")
        self._chart_button.setCheckable(True)
        self._chart_button.toggled.connect(self._on_chart_toggled)
        self._expand_button = QPushButton("Collapse")
        self._expand_button.setCheckable(True)
        self._expand_button.toggled.connect(self._on_collapse_toggled)

        title_row = QHBoxLayout()
        title_row.addWidget(title, 1)
        title_row.addWidget(self._percent_label)
        title_row.addWidget(self._chart_button)
        title_row.addWidget(self._expand_button)

        self._chart = BreakdownChart()
        self._chart.setVisible(False)

        self._steps_container = QWidget()
        steps_layout = QVBoxLayout(self._steps_container)
        steps_layout.setContentsMargins(0, 8, 0, 0)
        steps_layout.setSpacing(12)
        self._step_cards: List[StepCard] = []
        for step_index, step in enumerate(section.steps):
            card = StepCard(
                step_index=step_index,
                topic_count=len(step.topics),
                badge_colors=(badge_bg, badge_fg),
                on_topic_click=self._on_topic_clicked,
            )
            self._step_cards.append(card)
            steps_layout.addWidget(card)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 14, 18, 16)
        layout.setSpacing(8)
        layout.addLayout(title_row)
        layout.addWidget(self._progress_bar)
        layout.addWidget(level_caption)
        layout.addWidget(self._chart)
        layout.addWidget(self._steps_container)

        self.refresh()

    @property
    def tracker(self) -> TopicProgressTracker:
        return self._tracker

    def refresh(self) -> None:
        """Re-read every derived value from the tracker."""
        percent = self._tracker.completion_percentage()
        self._percent_label.setText(f"{percent}%")
        self._progress_bar.set_progress(percent, self._accent)
        self._chart.set_slices(chart_slices(self._tracker.progress_breakdown()))
        for card, state in zip(self._step_cards, build_step_states(self._tracker)):
            card.set_state(state)

    def _on_topic_clicked(self, step_index: int, topic_index: int) -> None:
        self._tracker.cycle_topic_status(step_index, topic_index)
        self.refresh()

    def _on_chart_toggled(self, checked: bool) -> None:
        self._chart.setVisible(checked)

    def _on_collapse_toggled(self, collapsed: bool) -> None:
        self._steps_container.setVisible(not collapsed)
        self._expand_button.setText("Expand" if collapsed else "Collapse")
