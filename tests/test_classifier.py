"""
Classifier Tests

Tests verify:
- Random classifier stays inside the simulated label space
- Confidence is formatted 'NN.N%' within [85, 100]
- Seeded classifiers are reproducible
- Fixed classifier returns its configured answer and records calls
"""

import pytest
from pydantic import ValidationError

from damage_aid.catalog import DamageType, Severity
from damage_aid.classifier import (
    SIMULATED_DAMAGE_TYPES,
    SIMULATED_SEVERITIES,
    DamageAnalysis,
    FixedDamageClassifier,
    RandomDamageClassifier,
    build_classifier,
    format_confidence,
)


PHOTOS = ["data:image/jpeg;base64,/9j/AAAA"]


class TestRandomDamageClassifier:
    """Test the simulated classifier."""

    def test_labels_in_simulated_space(self):
        classifier = RandomDamageClassifier(seed=7)
        types = {t.value for t in SIMULATED_DAMAGE_TYPES}
        severities = {s.value for s in SIMULATED_SEVERITIES}

        for _ in range(200):
            analysis = classifier.classify(PHOTOS)
            assert analysis.type in types
            assert analysis.severity in severities

    def test_confidence_range(self):
        classifier = RandomDamageClassifier(seed=11)

        for _ in range(200):
            value = classifier.classify(PHOTOS).confidence_percentage
            assert 85.0 <= value <= 100.0

    def test_seed_is_reproducible(self):
        first = RandomDamageClassifier(seed=42)
        second = RandomDamageClassifier(seed=42)

        assert [first.classify(PHOTOS) for _ in range(5)] == [
            second.classify(PHOTOS) for _ in range(5)
        ]

    def test_covers_every_simulated_type(self):
        classifier = RandomDamageClassifier(seed=3)

        seen = {classifier.classify(PHOTOS).type for _ in range(300)}

        assert seen == {t.value for t in SIMULATED_DAMAGE_TYPES}

    def test_build_classifier(self):
        classifier = build_classifier(seed=1)

        assert isinstance(classifier, RandomDamageClassifier)
        assert classifier.seed == 1


class TestFixedDamageClassifier:
    """Test the deterministic stand-in."""

    def test_returns_configured_analysis(self):
        classifier = FixedDamageClassifier(DamageType.FIRE, Severity.SEVERE, 92.44)

        analysis = classifier.classify(PHOTOS)

        assert analysis.type == "Fire Damage"
        assert analysis.severity == "Severe"
        assert analysis.confidence == "92.4%"

    def test_records_calls(self):
        classifier = FixedDamageClassifier()

        classifier.classify(PHOTOS)
        classifier.classify(PHOTOS + PHOTOS)

        assert classifier.calls == [PHOTOS, PHOTOS + PHOTOS]

    def test_accepts_plain_strings(self):
        classifier = FixedDamageClassifier("Flooding", "Minor")

        assert classifier.classify(PHOTOS).type == "Flooding"


class TestDamageAnalysis:
    """Test the analysis record."""

    def test_format_confidence(self):
        assert format_confidence(85.0) == "85.0%"
        assert format_confidence(99.96) == "100.0%"

    def test_confidence_percentage(self):
        analysis = DamageAnalysis(type="Water Damage", severity="Minor", confidence="92.4%")

        assert analysis.confidence_percentage == pytest.approx(92.4)

    @pytest.mark.parametrize("confidence", ["high", "92%", "92.45%", ""])
    def test_malformed_confidence_rejected(self, confidence):
        with pytest.raises(ValidationError):
            DamageAnalysis(type="Water Damage", severity="Minor", confidence=confidence)

    def test_serializes_to_storage_shape(self):
        analysis = DamageAnalysis(type="Roof Damage", severity="Moderate", confidence="88.0%")

        assert analysis.model_dump() == {
            "type": "Roof Damage",
            "severity": "Moderate",
            "confidence": "88.0%",
        }
