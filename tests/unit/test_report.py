"""Tests for scene_mapper/services/report.py — Report content."""

from scene_mapper.models.scene import SceneGraph
from scene_mapper.services.confidence import ConfidenceBand, ConfidenceScore, ConfidenceSource
from scene_mapper.services.report import (
    DEFAULT_REPORT_TITLE,
    REPORT_HEADING,
    REPORT_SUBHEADING,
    build_report,
)


class TestBuildReport:

    def test_headings(self, sample_scene):
        report = build_report(sample_scene)
        assert report.heading == REPORT_HEADING
        assert report.subheading == REPORT_SUBHEADING
        assert report.title == "Crime Scene Analyzed"

    def test_element_lines(self, sample_scene):
        report = build_report(sample_scene)
        assert report.element_lines[0] == "Body - body (120, 140)"
        assert len(report.element_lines) == 4

    def test_connection_lines(self, sample_scene):
        report = build_report(sample_scene)
        assert report.connection_lines[0] == (
            "Body → Weapon: spatial relation between Body and Weapon"
        )

    def test_confidence_line(self, sample_scene):
        score = ConfidenceScore(0.912, ConfidenceBand.HIGH, ConfidenceSource.ESTIMATED)
        report = build_report(sample_scene, score)
        assert report.confidence_line == "Confidence: 91% (high)"

    def test_no_confidence(self, sample_scene):
        assert build_report(sample_scene).confidence_line == ""

    def test_blank_title_falls_back(self):
        report = build_report(SceneGraph(title=""))
        assert report.title == DEFAULT_REPORT_TITLE

    def test_degenerate_graph(self, degenerate_scene):
        report = build_report(degenerate_scene)
        assert "Body → Ghost: dangling" in report.connection_lines


class TestReportText:

    def test_sections(self, sample_scene):
        text = build_report(sample_scene).to_text()
        assert text.startswith(REPORT_HEADING)
        assert "Forensic Narrative:" in text
        assert "- Blood - blood (320, 260)" in text
        assert "Connections:" in text

    def test_empty_scene(self):
        text = build_report(SceneGraph()).to_text()
        assert "- None identified" in text
        assert "Connections:" not in text

    def test_to_dict(self, sample_scene):
        data = build_report(sample_scene).to_dict()
        assert data["title"] == "Crime Scene Analyzed"
        assert len(data["elements"]) == 4
        assert len(data["connections"]) == 3
