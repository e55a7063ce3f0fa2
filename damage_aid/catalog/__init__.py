"""
Catalog Module — Canonical Versioned Rule Tables

Public API:
- DamageType, Severity, RiskLevel, ContractorTier: Enumerations
- CostBand, HealthRisk, Contractor, EmergencyContact, EducationTopic: Records
- COST_BANDS, HEALTH_RISKS, CONTRACTOR_TIERS: Rule tables
- CATALOG_VERSION: Version stamped onto assessments
"""

from .schemas import (
    DamageType,
    Severity,
    RiskLevel,
    ContractorTier,
    CostBand,
    HealthRisk,
    Contractor,
    EmergencyContact,
    EducationTopic,
)
from .tables import (
    CATALOG_VERSION,
    DAMAGE_TYPE_ALIASES,
    DEFAULT_DAMAGE_TYPE,
    COST_BANDS,
    HEALTH_RISKS,
    CONTRACTOR_TIERS,
    TIER_MEDIUM_MIN_COST,
    TIER_LARGE_MIN_COST,
    EMERGENCY_CONTACTS,
)
from .education import EDUCATION_TOPICS, get_topic

__all__ = [
    "DamageType",
    "Severity",
    "RiskLevel",
    "ContractorTier",
    "CostBand",
    "HealthRisk",
    "Contractor",
    "EmergencyContact",
    "EducationTopic",
    "CATALOG_VERSION",
    "DAMAGE_TYPE_ALIASES",
    "DEFAULT_DAMAGE_TYPE",
    "COST_BANDS",
    "HEALTH_RISKS",
    "CONTRACTOR_TIERS",
    "TIER_MEDIUM_MIN_COST",
    "TIER_LARGE_MIN_COST",
    "EMERGENCY_CONTACTS",
    "EDUCATION_TOPICS",
    "get_topic",
]
