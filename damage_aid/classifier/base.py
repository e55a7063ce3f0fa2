"""
Damage Classifier Interface

A classifier looks at uploaded photos and names the damage. The rest of
the system only depends on this contract, so a real model can replace the
simulation without touching the estimation rules.
"""

import re
from abc import ABC, abstractmethod
from typing import List

from pydantic import BaseModel, Field, field_validator


_CONFIDENCE_PATTERN = re.compile(r"^\d{1,3}\.\d%$")


def format_confidence(percentage: float) -> str:
    """Render a confidence percentage as 'NN.N%'."""
    return f"{percentage:.1f}%"


class DamageAnalysis(BaseModel):
    """
    Classifier output, persisted under the 'analysis' key.

    Field names match the persisted JSON: {type, severity, confidence}.
    """
    type: str = Field(..., min_length=1, description="Damage type label")
    severity: str = Field(..., min_length=1, description="Severity label")
    confidence: str = Field(..., description="Confidence formatted as 'NN.N%'")

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: str) -> str:
        if not _CONFIDENCE_PATTERN.match(v):
            raise ValueError(f"confidence must look like '92.4%', got '{v}'")
        return v

    @property
    def confidence_percentage(self) -> float:
        return float(self.confidence.rstrip("%"))


class DamageClassifier(ABC):
    """Pluggable photo classifier."""

    name: str = "classifier"

    @abstractmethod
    def classify(self, photos: List[str]) -> DamageAnalysis:
        """
        Classify damage visible in the photos.

        Args:
            photos: Image data URIs, in upload order

        Returns:
            DamageAnalysis
        """
