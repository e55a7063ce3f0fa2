"""
Flow Module — Wizard Session State Machine

Public API:
- AssessmentSession: Profile -> photos -> analysis -> results
- FlowStage: Wizard stages
- ResultsView: Results page payload
- CancellationToken: Guards analysis writes
- read_photos: Ordered concurrent photo ingestion
"""

from .photos import encode_data_uri, is_image_data_uri, read_photo, read_photos
from .session import (
    DEFAULT_ANALYSIS_DELAY,
    AssessmentSession,
    CancellationToken,
    FlowStage,
    ResultsView,
)

__all__ = [
    "encode_data_uri",
    "is_image_data_uri",
    "read_photo",
    "read_photos",
    "DEFAULT_ANALYSIS_DELAY",
    "AssessmentSession",
    "CancellationToken",
    "FlowStage",
    "ResultsView",
]
