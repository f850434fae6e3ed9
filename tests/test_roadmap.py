"""Tests for vazhi.core.roadmap – roadmap documents and their loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from vazhi.core.roadmap import (
    Roadmap,
    RoadmapRepository,
    Section,
    SectionLevel,
    Step,
    default_roadmaps_dir,
    parse_roadmap,
    section_level,
)


def _document(**overrides) -> dict:
    doc = {
        "fieldOfStudy": "Python",
        "level": "Basic",
        "roadmap": [
            {
                "title": "Fundamental Concepts",
                "steps": [
                    {"title": "Setup", "topics": ["Install", "Shell"]},
                    {"title": "Syntax", "topics": ["Types"]},
                ],
            }
        ],
    }
    doc.update(overrides)
    return doc


def _write_yaml(path: Path, data: dict) -> None:
    path.write_text(yaml.dump(data, allow_unicode=True, default_flow_style=False), encoding="utf-8")


@pytest.fixture()
def roadmaps_dir(tmp_path: Path) -> Path:
    d = tmp_path / "roadmaps"
    d.mkdir()
    return d


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

class TestDataclasses:
    def test_step_frozen(self):
        step = Step(title="S", topics=("a",))
        with pytest.raises(AttributeError):
            step.title = "other"  # type: ignore[misc]

    def test_section_equality(self):
        a = Section(title="X", steps=(Step(title="S", topics=("a",)),))
        b = Section(title="X", steps=(Step(title="S", topics=("a",)),))
        assert a == b

    def test_display_title(self):
        rm = Roadmap(key="k", field_of_study="Rust", level="Advanced", sections=())
        assert rm.display_title == "Rust - Advanced"


# ---------------------------------------------------------------------------
# section_level
# ---------------------------------------------------------------------------

class TestSectionLevel:
    @pytest.mark.parametrize("title", ["Fundamental Concepts", "Basic Tools", "Introduction to X"])
    def test_basic_keywords(self, title: str):
        assert section_level(title, 3) is SectionLevel.BASIC

    def test_first_section_is_basic(self):
        assert section_level("Deep Dive", 0) is SectionLevel.BASIC

    @pytest.mark.parametrize("title", ["Intermediate Patterns", "Building Skills"])
    def test_intermediate_keywords(self, title: str):
        assert section_level(title, 4) is SectionLevel.INTERMEDIATE

    def test_second_section_is_intermediate(self):
        assert section_level("Deep Dive", 1) is SectionLevel.INTERMEDIATE

    def test_otherwise_advanced(self):
        assert section_level("Expert Techniques", 2) is SectionLevel.ADVANCED

    def test_case_insensitive(self):
        assert section_level("BASICS", 5) is SectionLevel.BASIC


# ---------------------------------------------------------------------------
# parse_roadmap
# ---------------------------------------------------------------------------

class TestParseRoadmap:
    def test_happy_path(self):
        rm = parse_roadmap("py", _document(), "py.yaml")
        assert rm.key == "py"
        assert rm.field_of_study == "Python"
        assert rm.level == "Basic"
        assert len(rm.sections) == 1
        assert rm.sections[0].steps[0] == Step(title="Setup", topics=("Install", "Shell"))

    def test_strips_text(self):
        doc = _document(fieldOfStudy="  Python  ")
        doc["roadmap"][0]["title"] = "  Spaced  "
        doc["roadmap"][0]["steps"][0]["topics"] = ["  a  ", "", "   ", "b"]
        rm = parse_roadmap("py", doc, "py.yaml")
        assert rm.field_of_study == "Python"
        assert rm.sections[0].title == "Spaced"
        assert rm.sections[0].steps[0].topics == ("a", "b")

    def test_empty_topics_allowed(self):
        doc = _document()
        doc["roadmap"][0]["steps"][0]["topics"] = []
        rm = parse_roadmap("py", doc, "py.yaml")
        assert rm.sections[0].steps[0].topics == ()

    def test_non_string_topics_converted(self):
        doc = _document()
        doc["roadmap"][0]["steps"][0]["topics"] = [1, None, 2.5]
        rm = parse_roadmap("py", doc, "py.yaml")
        assert rm.sections[0].steps[0].topics == ("1", "2.5")

    @pytest.mark.parametrize("raw", [None, [], "text", {}])
    def test_not_a_mapping(self, raw):
        with pytest.raises(ValueError, match="expected a mapping"):
            parse_roadmap("x", raw, "x.yaml")

    def test_missing_field(self):
        doc = _document()
        del doc["fieldOfStudy"]
        with pytest.raises(ValueError, match="fieldOfStudy"):
            parse_roadmap("x", doc, "x.yaml")

    def test_bad_level(self):
        with pytest.raises(ValueError, match="'level' must be one of"):
            parse_roadmap("x", _document(level="Expert"), "x.yaml")

    def test_empty_roadmap(self):
        with pytest.raises(ValueError, match="non-empty list of sections"):
            parse_roadmap("x", _document(roadmap=[]), "x.yaml")

    def test_section_without_title(self):
        with pytest.raises(ValueError, match="section 1: missing or invalid 'title'"):
            parse_roadmap("x", _document(roadmap=[{"steps": [{"title": "s", "topics": []}]}]), "x.yaml")

    def test_section_without_steps(self):
        with pytest.raises(ValueError, match="'steps' must be a non-empty list"):
            parse_roadmap("x", _document(roadmap=[{"title": "T", "steps": []}]), "x.yaml")

    def test_step_not_mapping(self):
        with pytest.raises(ValueError, match="step 1: expected a mapping"):
            parse_roadmap("x", _document(roadmap=[{"title": "T", "steps": ["oops"]}]), "x.yaml")

    def test_topics_not_list(self):
        doc = _document(roadmap=[{"title": "T", "steps": [{"title": "S", "topics": "a, b"}]}])
        with pytest.raises(ValueError, match="'topics' must be a list"):
            parse_roadmap("x", doc, "x.yaml")

    def test_error_names_source(self):
        with pytest.raises(ValueError, match=r"^broken\.json:"):
            parse_roadmap("broken", _document(level=None), "broken.json")


# ---------------------------------------------------------------------------
# RoadmapRepository
# ---------------------------------------------------------------------------

class TestRoadmapRepository:
    def test_loads_yaml(self, roadmaps_dir: Path):
        _write_yaml(roadmaps_dir / "python.yaml", _document())
        repo = RoadmapRepository(roadmaps_dir)
        assert repo.keys() == ["python"]
        assert repo.get("python").field_of_study == "Python"

    def test_loads_json(self, roadmaps_dir: Path):
        (roadmaps_dir / "web.json").write_text(json.dumps(_document(fieldOfStudy="Web")), encoding="utf-8")
        repo = RoadmapRepository(roadmaps_dir)
        assert repo.get("web").field_of_study == "Web"

    def test_sorted_by_file_name(self, roadmaps_dir: Path):
        _write_yaml(roadmaps_dir / "c.yaml", _document(fieldOfStudy="C"))
        _write_yaml(roadmaps_dir / "a.yml", _document(fieldOfStudy="A"))
        (roadmaps_dir / "b.json").write_text(json.dumps(_document(fieldOfStudy="B")), encoding="utf-8")
        repo = RoadmapRepository(roadmaps_dir)
        assert [rm.field_of_study for rm in repo.all()] == ["A", "B", "C"]

    def test_ignores_other_files(self, roadmaps_dir: Path):
        _write_yaml(roadmaps_dir / "python.yaml", _document())
        (roadmaps_dir / "README.md").write_text("notes", encoding="utf-8")
        assert RoadmapRepository(roadmaps_dir).keys() == ["python"]

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            RoadmapRepository(tmp_path / "nope")

    def test_no_documents(self, roadmaps_dir: Path):
        with pytest.raises(ValueError, match="No roadmap files"):
            RoadmapRepository(roadmaps_dir)

    def test_invalid_document(self, roadmaps_dir: Path):
        _write_yaml(roadmaps_dir / "bad.yaml", _document(level="Guru"))
        with pytest.raises(ValueError, match=r"bad\.yaml"):
            RoadmapRepository(roadmaps_dir)

    def test_unparseable_document(self, roadmaps_dir: Path):
        (roadmaps_dir / "bad.json").write_text('{"fieldOfStudy": [', encoding="utf-8")
        with pytest.raises(ValueError, match="could not parse"):
            RoadmapRepository(roadmaps_dir)

    def test_duplicate_key(self, roadmaps_dir: Path):
        _write_yaml(roadmaps_dir / "python.yaml", _document())
        (roadmaps_dir / "python.json").write_text(json.dumps(_document()), encoding="utf-8")
        with pytest.raises(ValueError, match="duplicate roadmap key"):
            RoadmapRepository(roadmaps_dir)

    def test_get_missing_key(self, roadmaps_dir: Path):
        _write_yaml(roadmaps_dir / "python.yaml", _document())
        with pytest.raises(KeyError):
            RoadmapRepository(roadmaps_dir).get("rust")

    def test_env_override(self, roadmaps_dir: Path, monkeypatch: pytest.MonkeyPatch):
        _write_yaml(roadmaps_dir / "python.yaml", _document())
        monkeypatch.setenv("VAZHI_ROADMAPS_DIR", str(roadmaps_dir))
        assert default_roadmaps_dir() == roadmaps_dir
        assert RoadmapRepository().keys() == ["python"]

    def test_bundled_roadmaps_load(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("VAZHI_ROADMAPS_DIR", raising=False)
        repo = RoadmapRepository()
        assert len(repo.all()) >= 1
        for rm in repo.all():
            assert rm.level in ("Basic", "Intermediate", "Advanced")
