"""
Catalog Schemas — Pydantic Models for the Rule Tables

Enumerations and record types shared by the estimation engine, the
wizard flow, and the API layer.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, model_validator


class DamageType(str, Enum):
    """Damage categories known to the catalog."""
    WATER = "Water Damage"
    FIRE = "Fire Damage"
    STRUCTURAL = "Structural Damage"
    ROOF = "Roof Damage"
    ELECTRICAL = "Electrical Damage"
    FLOODING = "Flooding"
    WIND = "Wind Damage"
    PLUMBING = "Plumbing Damage"
    FOUNDATION = "Foundation Damage"
    OTHER = "Other"


class Severity(str, Enum):
    """Ordinal damage intensity. Declaration order is the ordering."""
    MINOR = "Minor"
    MODERATE = "Moderate"
    SEVERE = "Severe"


class RiskLevel(str, Enum):
    """Health hazard level. Declaration order is the ordering."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
}


class ContractorTier(str, Enum):
    """Cost-threshold buckets for contractor suggestions."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class CostBand(BaseModel):
    """Repair cost per severity tier, in whole currency units."""
    low: int = Field(..., ge=0)
    medium: int = Field(..., ge=0)
    high: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_monotonic(self):
        if not self.low <= self.medium <= self.high:
            raise ValueError(
                f"cost band must satisfy low <= medium <= high, "
                f"got ({self.low}, {self.medium}, {self.high})"
            )
        return self

    model_config = {"frozen": True}


class HealthRisk(BaseModel):
    """A health hazard associated with a damage type."""
    type: str = Field(..., min_length=1, description="Risk label")
    level: RiskLevel
    description: str
    recommendations: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class Contractor(BaseModel):
    """A suggested service provider."""
    name: str
    phone: str
    specialty: str
    rating: float = Field(..., ge=0.0, le=5.0)

    model_config = {"frozen": True}


class EmergencyContact(BaseModel):
    """A phone line shown alongside every result."""
    name: str
    phone: str

    model_config = {"frozen": True}


class EducationTopic(BaseModel):
    """Reference material for a class of post-disaster hazards."""
    id: str
    title: str
    description: str
    risks: List[str]
    prevention: List[str]
    signs: List[str]
    action: List[str]

    model_config = {"frozen": True}
