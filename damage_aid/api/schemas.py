"""
Pydantic Schemas — API Request/Response Models

Constraints:
- photos: Must be base64 image data URIs
- budget: Free-form string, parsed later by the budget matcher
"""

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from damage_aid.catalog import CostBand, EducationTopic, EmergencyContact
from damage_aid.flow import is_image_data_uri


class ProfileRequest(BaseModel):
    """Profile form submission. Required-field checks happen in the session."""
    name: str = ""
    address: str = ""
    budget: str = Field(default="", description="e.g., $10,000 - $50,000")
    consent: bool = False


class PhotoUploadRequest(BaseModel):
    """One or more photos as data URIs."""
    photos: List[str] = Field(..., description="Image data URIs, in upload order")

    @field_validator('photos')
    @classmethod
    def validate_data_uris(cls, v: List[str]) -> List[str]:
        for index, photo in enumerate(v):
            if not is_image_data_uri(photo):
                raise ValueError(
                    f"photos[{index}] must be an image data URI like "
                    "'data:image/jpeg;base64,...'"
                )
        return v


class PhotosResponse(BaseModel):
    """Current upload set."""
    count: int
    photos: List[str]
    stage: str


class AssessmentRequest(BaseModel):
    """Manual damage assessment form."""
    damage_type: str = ""
    severity: str = ""
    location: str = ""
    description: str = ""
    photos: List[str] = Field(default_factory=list)


class CatalogResponse(BaseModel):
    """Catalog contents for building forms."""
    version: str
    damage_types: List[str]
    severities: List[str]
    cost_bands: Dict[str, CostBand]


class EducationResponse(BaseModel):
    """Education page payload."""
    topics: List[EducationTopic]
    emergency_contacts: List[EmergencyContact]


class SessionResponse(BaseModel):
    """Session status."""
    stage: str
    analysis_in_progress: bool
    message: str = ""


class ErrorResponse(BaseModel):
    """User-facing error."""
    title: str
    message: str
