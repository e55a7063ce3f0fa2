"""
Catalog Tables — Cost Bands, Health Risks, Contractors

The single source of truth for every rule table used by the estimation
engine. Bump CATALOG_VERSION whenever an entry changes; the version is
stamped onto every assessment.

Reconciliation notes:
- "Flood Damage" is kept only as an alias of DamageType.FLOODING.
- Health risks follow the results-page catalog (3 water risks, 4 flooding
  risks, 1 structural risk, 1 roof risk).
"""

from typing import Dict, List

from .schemas import (
    Contractor,
    ContractorTier,
    CostBand,
    DamageType,
    EmergencyContact,
    HealthRisk,
    RiskLevel,
)


CATALOG_VERSION = "2.0.0"


# =============================================================================
# LABEL ALIASES
# =============================================================================

DAMAGE_TYPE_ALIASES: Dict[str, DamageType] = {
    "Flood Damage": DamageType.FLOODING,
}


# =============================================================================
# COST BANDS (currency units)
# =============================================================================

DEFAULT_DAMAGE_TYPE = DamageType.OTHER

COST_BANDS: Dict[DamageType, CostBand] = {
    DamageType.WATER: CostBand(low=2500, medium=7500, high=15000),
    DamageType.FLOODING: CostBand(low=8000, medium=25000, high=85000),
    DamageType.FIRE: CostBand(low=5000, medium=25000, high=75000),
    DamageType.STRUCTURAL: CostBand(low=10000, medium=35000, high=100000),
    DamageType.ROOF: CostBand(low=3000, medium=12000, high=30000),
    DamageType.ELECTRICAL: CostBand(low=1500, medium=8000, high=20000),
    DamageType.WIND: CostBand(low=2000, medium=10000, high=25000),
    DamageType.PLUMBING: CostBand(low=1000, medium=5000, high=15000),
    DamageType.FOUNDATION: CostBand(low=8000, medium=25000, high=60000),
    DamageType.OTHER: CostBand(low=1000, medium=5000, high=15000),
}


# =============================================================================
# HEALTH RISKS (display order is significant)
# =============================================================================

HEALTH_RISKS: Dict[DamageType, List[HealthRisk]] = {
    DamageType.WATER: [
        HealthRisk(
            type="Hidden Mold Growth",
            level=RiskLevel.HIGH,
            description=(
                "AI detected potential mold growth in wall cavities and hidden "
                "areas, even if not visible in photos"
            ),
            recommendations=[
                "Immediate water extraction",
                "Professional mold inspection with thermal imaging",
                "Use dehumidifiers",
            ],
        ),
        HealthRisk(
            type="Compromised Water Quality",
            level=RiskLevel.HIGH,
            description="Water contamination likely affecting drinking water supply",
            recommendations=[
                "Test water immediately",
                "Use bottled water only",
                "Professional water system inspection",
            ],
        ),
        HealthRisk(
            type="Bacterial Contamination",
            level=RiskLevel.MEDIUM,
            description="Potential bacterial growth in standing water",
            recommendations=[
                "Avoid direct contact",
                "Use protective equipment",
                "Professional testing",
            ],
        ),
    ],
    DamageType.FLOODING: [
        HealthRisk(
            type="Contaminated Floodwater",
            level=RiskLevel.HIGH,
            description=(
                "Floodwater contains dangerous bacteria, chemicals, and sewage "
                "that pose immediate health risks"
            ),
            recommendations=[
                "Evacuate if water is rising",
                "Never walk through moving water",
                "Avoid all contact with floodwater",
                "Seek tetanus shot if exposed",
            ],
        ),
        HealthRisk(
            type="Hidden Structural Damage",
            level=RiskLevel.HIGH,
            description=(
                "Flooding can weaken foundations and structural supports not "
                "visible from surface inspection"
            ),
            recommendations=[
                "Professional structural assessment",
                "Avoid entering flooded buildings",
                "Check foundation integrity",
            ],
        ),
        HealthRisk(
            type="Electrical Hazards",
            level=RiskLevel.HIGH,
            description=(
                "Standing water combined with electrical systems creates "
                "electrocution risk"
            ),
            recommendations=[
                "Turn off power at main breaker if safe to do so",
                "Never enter flooded areas with electricity on",
                "Professional electrical inspection required",
            ],
        ),
        HealthRisk(
            type="Mold and Air Quality",
            level=RiskLevel.HIGH,
            description=(
                "Rapid mold growth occurs within 24-48 hours after flooding, "
                "even in hidden areas"
            ),
            recommendations=[
                "Document all damage immediately",
                "Begin water removal within 24 hours",
                "Professional mold remediation",
                "Use N95 masks",
            ],
        ),
    ],
    DamageType.FIRE: [
        HealthRisk(
            type="Smoke Inhalation",
            level=RiskLevel.HIGH,
            description="Dangerous smoke particles and chemical residue",
            recommendations=[
                "Ventilate immediately",
                "Wear N95 masks",
                "Air quality testing",
            ],
        ),
        HealthRisk(
            type="Toxic Chemicals",
            level=RiskLevel.HIGH,
            description="Burned materials may release harmful compounds",
            recommendations=[
                "Professional hazmat assessment",
                "Evacuate if necessary",
                "Use proper PPE",
            ],
        ),
    ],
    DamageType.STRUCTURAL: [
        HealthRisk(
            type="Collapse Risk",
            level=RiskLevel.HIGH,
            description="Immediate physical danger from structural instability",
            recommendations=[
                "Evacuate immediately",
                "Professional inspection",
                "Secure perimeter",
            ],
        ),
    ],
    DamageType.ROOF: [
        HealthRisk(
            type="Water Intrusion",
            level=RiskLevel.MEDIUM,
            description="Ongoing water damage risk",
            recommendations=[
                "Temporary weatherproofing",
                "Monitor for leaks",
                "Professional repair",
            ],
        ),
    ],
    DamageType.ELECTRICAL: [
        HealthRisk(
            type="Electrocution Risk",
            level=RiskLevel.HIGH,
            description="Exposed electrical systems pose immediate danger",
            recommendations=[
                "Turn off main power",
                "Professional electrical inspection",
                "Avoid water contact",
            ],
        ),
    ],
}


# =============================================================================
# CONTRACTOR TIERS
# =============================================================================

# Lower cost bounds (inclusive) for the medium and large tiers
TIER_MEDIUM_MIN_COST = 5000
TIER_LARGE_MIN_COST = 25000

CONTRACTOR_TIERS: Dict[ContractorTier, List[Contractor]] = {
    ContractorTier.SMALL: [
        Contractor(name="Quick Fix Repairs", phone="(555) 123-4567",
                   specialty="Minor repairs", rating=4.5),
        Contractor(name="Local Handyman Co", phone="(555) 234-5678",
                   specialty="Small projects", rating=4.3),
    ],
    ContractorTier.MEDIUM: [
        Contractor(name="Mid-Range Restoration", phone="(555) 345-6789",
                   specialty="Medium repairs", rating=4.7),
        Contractor(name="Professional Repair Group", phone="(555) 456-7890",
                   specialty="Insurance work", rating=4.6),
    ],
    ContractorTier.LARGE: [
        Contractor(name="Premium Restoration Co", phone="(555) 567-8901",
                   specialty="Major disasters", rating=4.9),
        Contractor(name="Elite Construction Services", phone="(555) 678-9012",
                   specialty="Full reconstruction", rating=4.8),
    ],
}


# =============================================================================
# EMERGENCY CONTACTS
# =============================================================================

EMERGENCY_CONTACTS: List[EmergencyContact] = [
    EmergencyContact(name="Emergency Services", phone="911"),
    EmergencyContact(name="Poison Control", phone="1-800-222-1222"),
    EmergencyContact(name="Gas Emergency", phone="1-800-427-2200"),
    EmergencyContact(name="Electric Emergency", phone="1-800-611-1911"),
    EmergencyContact(name="DFS Disaster Hotline", phone="1-800-339-1759"),
]
