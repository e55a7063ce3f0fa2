"""
Simulated Classifiers — Stand-ins for a Real Damage Model

CRITICAL: These do NOT look at the photos. RandomDamageClassifier picks a
damage type and severity at random for demos; FixedDamageClassifier always
returns the same answer for tests.
"""

import logging
import random
from typing import List, Optional, Union

from damage_aid.catalog import DamageType, Severity
from .base import DamageAnalysis, DamageClassifier, format_confidence


logger = logging.getLogger(__name__)


# Damage types the simulation can "detect"
SIMULATED_DAMAGE_TYPES = [
    DamageType.WATER,
    DamageType.FIRE,
    DamageType.STRUCTURAL,
    DamageType.ROOF,
    DamageType.ELECTRICAL,
]

SIMULATED_SEVERITIES = [Severity.MINOR, Severity.MODERATE, Severity.SEVERE]

# Confidence is drawn uniformly from [CONFIDENCE_MIN, CONFIDENCE_MIN + CONFIDENCE_SPAN]
CONFIDENCE_MIN = 85.0
CONFIDENCE_SPAN = 15.0


class RandomDamageClassifier(DamageClassifier):
    """
    Uniform random damage classification.

    Usage:
        classifier = RandomDamageClassifier(seed=42)
        analysis = classifier.classify(photos)
    """

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Random seed for deterministic output (None for random)
        """
        self.seed = seed
        self._rng = random.Random(seed)

    def classify(self, photos: List[str]) -> DamageAnalysis:
        damage_type = self._rng.choice(SIMULATED_DAMAGE_TYPES)
        severity = self._rng.choice(SIMULATED_SEVERITIES)
        confidence = CONFIDENCE_MIN + self._rng.random() * CONFIDENCE_SPAN

        analysis = DamageAnalysis(
            type=damage_type.value,
            severity=severity.value,
            confidence=format_confidence(confidence),
        )
        logger.debug(
            f"[RandomDamageClassifier] {len(photos)} photo(s) -> "
            f"{analysis.type}/{analysis.severity} @ {analysis.confidence}"
        )
        return analysis


class FixedDamageClassifier(DamageClassifier):
    """Always returns the configured classification."""

    name = "fixed"

    def __init__(
        self,
        damage_type: Union[DamageType, str] = DamageType.WATER,
        severity: Union[Severity, str] = Severity.MODERATE,
        confidence: float = 95.0,
    ):
        self.analysis = DamageAnalysis(
            type=getattr(damage_type, "value", damage_type),
            severity=getattr(severity, "value", severity),
            confidence=format_confidence(confidence),
        )
        self.calls: List[List[str]] = []

    def classify(self, photos: List[str]) -> DamageAnalysis:
        self.calls.append(list(photos))
        return self.analysis.model_copy()


def build_classifier(seed: Optional[int] = None) -> DamageClassifier:
    """Default classifier for the application."""
    return RandomDamageClassifier(seed=seed)
