"""
Report data for scene export.

Collects the title, narrative, element and connection lines an external
PDF exporter lays out next to the diagram snapshot.
"""

from dataclasses import dataclass, field
from typing import Any

from scene_mapper.models.scene import SceneGraph
from scene_mapper.services.confidence import ConfidenceScore

REPORT_HEADING = "Automated Forensic Reconstruction"
REPORT_SUBHEADING = "Generated by Scene Mapper"
DEFAULT_REPORT_TITLE = "Scene Report"


@dataclass
class SceneReport:
    """Plain report content for one scene snapshot."""
    heading: str
    title: str
    subheading: str
    narrative: str
    element_lines: list[str] = field(default_factory=list)
    connection_lines: list[str] = field(default_factory=list)
    confidence_line: str = ""

    def to_text(self) -> str:
        lines = [self.heading, self.title, self.subheading, ""]
        if self.confidence_line:
            lines.extend([self.confidence_line, ""])
        lines.extend(["Forensic Narrative:", self.narrative, "", "Elements:"])
        lines.extend(f"- {line}" for line in self.element_lines)
        if not self.element_lines:
            lines.append("- None identified")
        if self.connection_lines:
            lines.extend(["", "Connections:"])
            lines.extend(f"- {line}" for line in self.connection_lines)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "heading": self.heading,
            "title": self.title,
            "subheading": self.subheading,
            "narrative": self.narrative,
            "elements": self.element_lines,
            "connections": self.connection_lines,
            "confidence": self.confidence_line,
        }


def build_report(graph: SceneGraph, confidence: ConfidenceScore | None = None) -> SceneReport:
    """Build the report content for a graph (degenerate graphs included)."""
    element_lines = []
    for element in graph.elements:
        x, y = element.position.rounded()
        element_lines.append(f"{element.name} - {element.category.value} ({x}, {y})")

    connection_lines = [
        f"{c.source} → {c.target}: {c.description}" for c in graph.connections
    ]

    confidence_line = ""
    if confidence is not None:
        confidence_line = f"Confidence: {confidence.percent}% ({confidence.band.value})"

    return SceneReport(
        heading=REPORT_HEADING,
        title=graph.title or DEFAULT_REPORT_TITLE,
        subheading=REPORT_SUBHEADING,
        narrative=graph.narrative,
        element_lines=element_lines,
        connection_lines=connection_lines,
        confidence_line=confidence_line,
    )
