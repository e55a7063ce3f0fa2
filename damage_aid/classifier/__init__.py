"""
Classifier Module — Pluggable Damage Classification

Public API:
- DamageClassifier: Abstract classify(photos) interface
- DamageAnalysis: {type, severity, confidence} result
- RandomDamageClassifier: Demo simulation (uniform random)
- FixedDamageClassifier: Deterministic test double
- build_classifier: Default classifier factory
"""

from .base import DamageAnalysis, DamageClassifier, format_confidence
from .simulated import (
    FixedDamageClassifier,
    RandomDamageClassifier,
    SIMULATED_DAMAGE_TYPES,
    SIMULATED_SEVERITIES,
    build_classifier,
)

__all__ = [
    "DamageAnalysis",
    "DamageClassifier",
    "format_confidence",
    "FixedDamageClassifier",
    "RandomDamageClassifier",
    "SIMULATED_DAMAGE_TYPES",
    "SIMULATED_SEVERITIES",
    "build_classifier",
]
