from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QLinearGradient, QPainter
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from vazhi.core.roadmap import Roadmap, RoadmapRepository
from vazhi.ui.colors import RoadmapColors
from vazhi.ui.section_widgets import SectionCard

logger = logging.getLogger(__name__)


class GradientBackground(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        gradient = QLinearGradient(0, 0, 0, self.height())
        gradient.setColorAt(0.0, QColor(RoadmapColors.BG_TOP))
        gradient.setColorAt(1.0, QColor(RoadmapColors.BG_BOTTOM))
        painter.fillRect(self.rect(), gradient)


class MainWindow(QMainWindow):
    """Roadmap picker on top, one SectionCard per section below.

    Section cards (and the progress they track) are rebuilt whenever another
    roadmap is selected; nothing carries over between roadmaps.
    """

    def __init__(self, roadmaps: RoadmapRepository) -> None:
        super().__init__()
        self._roadmaps_repo = roadmaps
        self._current: Optional[Roadmap] = None
        self._section_cards: List[SectionCard] = []

        self._picker: Optional[QComboBox] = None
        self._title_label: Optional[QLabel] = None
        self._sections_layout: Optional[QVBoxLayout] = None

        self._build_ui()
        keys = self._roadmaps_repo.keys()
        if keys:
            self._show_roadmap(keys[0])

    @property
    def section_cards(self) -> List[SectionCard]:
        return list(self._section_cards)

    def _build_ui(self) -> None:
        self.setWindowTitle("Vazhi - Learning Roadmaps")
        self.setMinimumSize(900, 700)

        background = GradientBackground()
        self.setCentralWidget(background)
        root = QVBoxLayout(background)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        header = QHBoxLayout()
        self._title_label = QLabel("")
        self._title_label.setStyleSheet(f"color: {RoadmapColors.TEXT_PRIMARY}; font-size: 26px; font-weight: 800;")
        self._picker = QComboBox()
        for roadmap in self._roadmaps_repo.all():
            self._picker.addItem(roadmap.display_title, roadmap.key)
        self._picker.currentIndexChanged.connect(self._on_picker_changed)
        header.addWidget(self._title_label, 1)
        header.addWidget(self._picker, 0, Qt.AlignRight)
        root.addLayout(header)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        scroll.setStyleSheet("QScrollArea { background: transparent; }")
        container = QWidget()
        container.setStyleSheet("background: transparent;")
        self._sections_layout = QVBoxLayout(container)
        self._sections_layout.setContentsMargins(4, 4, 4, 4)
        self._sections_layout.setSpacing(20)
        scroll.setWidget(container)
        root.addWidget(scroll, 1)

    def _on_picker_changed(self, index: int) -> None:
        if self._picker is None or index < 0:
            return
        self._show_roadmap(self._picker.itemData(index))

    def _show_roadmap(self, key: str) -> None:
        """Replace the section cards with fresh ones for the roadmap *key*."""
        roadmap = self._roadmaps_repo.get(key)
        self._current = roadmap
        if self._title_label is not None:
            self._title_label.setText(roadmap.display_title)

        if self._sections_layout is not None:
            while self._sections_layout.count():
                item = self._sections_layout.takeAt(0)
                w = item.widget()
                if w is not None:
                    w.setParent(None)
                    w.deleteLater()

            self._section_cards = []
            for idx, section in enumerate(roadmap.sections):
                card = SectionCard(section, idx)
                self._section_cards.append(card)
                self._sections_layout.addWidget(card)
            self._sections_layout.addStretch(1)

        logger.info("Showing roadmap %s with %d sections", key, len(roadmap.sections))
