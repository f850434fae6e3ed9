from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

LEVELS = ("Basic", "Intermediate", "Advanced")
ROADMAP_SUFFIXES = (".yaml", ".yml", ".json")


@dataclass(frozen=True)
class Step:
    title: str
    topics: Tuple[str, ...]


@dataclass(frozen=True)
class Section:
    title: str
    steps: Tuple[Step, ...]


@dataclass(frozen=True)
class Roadmap:
    key: str
    field_of_study: str
    level: str
    sections: Tuple[Section, ...]

    @property
    def display_title(self) -> str:
        return f"{self.field_of_study} - {self.level}"


class SectionLevel(str, Enum):
    BASIC = "Basic"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


def section_level(title: str, index: int) -> SectionLevel:
    """Guess the difficulty tier of a section from its title, falling back to its position."""
    lowered = title.lower()
    if any(word in lowered for word in ("fundamental", "basic", "introduction")) or index == 0:
        return SectionLevel.BASIC
    if any(word in lowered for word in ("intermediate", "building")) or index == 1:
        return SectionLevel.INTERMEDIATE
    return SectionLevel.ADVANCED


def default_roadmaps_dir() -> Path:
    override = os.environ.get("VAZHI_ROADMAPS_DIR")
    if override:
        return Path(override).expanduser()
    return Path(__file__).resolve().parent.parent / "data" / "roadmaps"


def _require_title(raw: Any, where: str) -> str:
    if not isinstance(raw, dict):
        raise ValueError(f"{where}: expected a mapping with 'title'")
    title = raw.get("title")
    if not title or not isinstance(title, str) or not title.strip():
        raise ValueError(f"{where}: missing or invalid 'title'")
    return title.strip()


def _parse_step(raw: Any, where: str) -> Step:
    title = _require_title(raw, where)
    topics = raw.get("topics")
    if not isinstance(topics, list):
        raise ValueError(f"{where}: 'topics' must be a list")
    cleaned = tuple(str(item).strip() for item in topics if item is not None and str(item).strip())
    return Step(title=title, topics=cleaned)


def _parse_section(raw: Any, where: str) -> Section:
    title = _require_title(raw, where)
    steps = raw.get("steps")
    if not isinstance(steps, list) or not steps:
        raise ValueError(f"{where}: 'steps' must be a non-empty list")
    return Section(
        title=title,
        steps=tuple(_parse_step(step, f"{where} step {idx + 1}") for idx, step in enumerate(steps)),
    )


def parse_roadmap(key: str, raw: Any, source: str) -> Roadmap:
    """Validate one generated roadmap document and build a :class:`Roadmap`.

    *source* names the document in error messages.
    """
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{source}: expected a mapping with 'fieldOfStudy', 'level' and 'roadmap'")
    field = raw.get("fieldOfStudy")
    if not field or not isinstance(field, str) or not field.strip():
        raise ValueError(f"{source}: missing or invalid 'fieldOfStudy'")
    level = raw.get("level")
    if level not in LEVELS:
        raise ValueError(f"{source}: 'level' must be one of {', '.join(LEVELS)}")
    sections = raw.get("roadmap")
    if not isinstance(sections, list) or not sections:
        raise ValueError(f"{source}: 'roadmap' must be a non-empty list of sections")
    return Roadmap(
        key=key,
        field_of_study=field.strip(),
        level=level,
        sections=tuple(
            _parse_section(section, f"{source} section {idx + 1}") for idx, section in enumerate(sections)
        ),
    )


class RoadmapRepository:
    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else default_roadmaps_dir()
        self._roadmaps = self._load_roadmaps()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def all(self) -> List[Roadmap]:
        return list(self._roadmaps.values())

    def keys(self) -> List[str]:
        return list(self._roadmaps)

    def get(self, key: str) -> Roadmap:
        return self._roadmaps[key]

    def _load_roadmaps(self) -> Dict[str, Roadmap]:
        if not self._base_dir.is_dir():
            raise FileNotFoundError(f"Roadmaps directory not found: {self._base_dir}")

        roadmaps: Dict[str, Roadmap] = {}
        paths = sorted(p for p in self._base_dir.iterdir() if p.is_file() and p.suffix.lower() in ROADMAP_SUFFIXES)
        for path in paths:
            key = path.stem
            if key in roadmaps:
                raise ValueError(f"{path.name}: duplicate roadmap key '{key}'")
            try:
                # JSON documents load fine as YAML
                raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            except yaml.YAMLError as e:
                raise ValueError(f"{path.name}: could not parse document: {e}") from e
            roadmaps[key] = parse_roadmap(key, raw, path.name)
            logger.info("Loaded roadmap %s (%d sections)", key, len(roadmaps[key].sections))

        if not roadmaps:
            raise ValueError(f"No roadmap files ({', '.join('*' + s for s in ROADMAP_SUFFIXES)}) found in {self._base_dir}")
        return roadmaps
