"""
Confidence estimation for generated scenes.

The score is attached to a graph snapshot and only gates presentation:
consumers map it to a fixed three-tier band.
"""

import random
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

import structlog

from scene_mapper.config import Settings, get_settings
from scene_mapper.models.scene import SceneGraph

logger = structlog.get_logger(__name__)


class ConfidenceBand(str, Enum):
    """Presentation tiers for a confidence score."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ConfidenceSource(str, Enum):
    """Where a score came from."""
    SUPPLIED = "supplied"     # Reported by an image-analysis collaborator
    ESTIMATED = "estimated"   # Sampled by the estimator


@dataclass(frozen=True)
class ConfidenceScore:
    """Scalar confidence in [0, 1] for one scene snapshot."""
    value: float
    band: ConfidenceBand
    source: ConfidenceSource

    @property
    def percent(self) -> int:
        return round(self.value * 100)

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "band": self.band.value,
            "source": self.source.value,
        }


def classify(
    value: float,
    high_threshold: float = 0.8,
    medium_threshold: float = 0.6,
) -> ConfidenceBand:
    """Map a score to its band (>= high, >= medium, else low)."""
    if value >= high_threshold:
        return ConfidenceBand.HIGH
    if value >= medium_threshold:
        return ConfidenceBand.MEDIUM
    return ConfidenceBand.LOW


class ConfidenceEstimator:
    """
    Produces confidence scores for scene graphs.

    A caller-supplied value wins; otherwise a value is sampled from the
    configured high range for graphs with elements, and empty graphs
    score zero.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.rng = rng or random.Random(self.settings.random_seed)

    def classify(self, value: float) -> ConfidenceBand:
        return classify(
            value,
            high_threshold=self.settings.confidence_high_threshold,
            medium_threshold=self.settings.confidence_medium_threshold,
        )

    def estimate(
        self,
        graph: SceneGraph,
        supplied: float | None = None,
    ) -> ConfidenceScore:
        """
        Estimate confidence for a graph.

        Args:
            graph: The generated scene graph
            supplied: Optional confidence from an external analysis channel

        Returns:
            ConfidenceScore with value, band and source
        """
        if supplied is not None:
            value = min(1.0, max(0.0, float(supplied)))
            source = ConfidenceSource.SUPPLIED
        elif graph.is_inconclusive:
            value = 0.0
            source = ConfidenceSource.ESTIMATED
        else:
            value = self.rng.uniform(
                self.settings.estimated_confidence_min,
                self.settings.estimated_confidence_max,
            )
            source = ConfidenceSource.ESTIMATED

        score = ConfidenceScore(value=value, band=self.classify(value), source=source)

        logger.debug(
            "confidence_estimated",
            value=round(value, 3),
            band=score.band.value,
            source=source.value,
        )
        return score


@lru_cache()
def get_confidence_estimator() -> ConfidenceEstimator:
    """Get cached confidence estimator instance."""
    return ConfidenceEstimator()
