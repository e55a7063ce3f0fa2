"""
API Routes — Wizard Endpoint Definitions

Mirrors the wizard pages: /profile, /upload, /results, /education.
All handlers are async. One AssessmentSession serves the whole app; there
is no per-user state.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from damage_aid.catalog import (
    CATALOG_VERSION,
    COST_BANDS,
    EDUCATION_TOPICS,
    EMERGENCY_CONTACTS,
    DamageType,
    Severity,
)
from damage_aid.classifier import DamageAnalysis, build_classifier
from damage_aid.config import settings
from damage_aid.errors import AnalysisCancelledError, DamageAidError, FlowStageError
from damage_aid.flow import AssessmentSession, ResultsView
from damage_aid.reports import generate_filename, generate_pdf_report
from damage_aid.rules import Assessment, DamageAssessor, Profile
from damage_aid.storage import StorageError, build_store

from .schemas import (
    AssessmentRequest,
    CatalogResponse,
    EducationResponse,
    ErrorResponse,
    PhotosResponse,
    PhotoUploadRequest,
    ProfileRequest,
    SessionResponse,
)


logger = logging.getLogger(__name__)

router = APIRouter()

_session: Optional[AssessmentSession] = None

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Rejected user input"},
    409: {"model": ErrorResponse, "description": "Step attempted out of order"},
}


def get_session() -> AssessmentSession:
    """
    Dependency that provides the application's assessment session.

    Built lazily from settings on first use.
    """
    global _session
    if _session is None:
        _session = AssessmentSession(
            store=build_store(settings.STORAGE_BACKEND, settings.STORAGE_PATH),
            classifier=build_classifier(settings.CLASSIFIER_SEED),
            assessor=DamageAssessor(
                within_ratio=settings.BUDGET_WITHIN_RATIO,
                close_ratio=settings.BUDGET_CLOSE_RATIO,
            ),
            analysis_delay=settings.ANALYSIS_DELAY_SECONDS,
        )
    return _session


def _http_error(error: DamageAidError) -> HTTPException:
    if isinstance(error, (FlowStageError, AnalysisCancelledError)):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=error.to_dict())


def _storage_error(error: StorageError) -> HTTPException:
    logger.error(f"Storage failure: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"title": "Storage Error", "message": str(error)},
    )


def _photos_response(session: AssessmentSession, photos: List[str]) -> PhotosResponse:
    return PhotosResponse(count=len(photos), photos=photos, stage=session.stage.value)


# =============================================================================
# PROFILE
# =============================================================================

@router.get(
    "/profile",
    response_model=Profile,
    responses={404: {"description": "No profile yet"}},
    summary="Current profile",
)
async def read_profile(session: AssessmentSession = Depends(get_session)) -> Profile:
    try:
        profile = session.profile
    except StorageError as e:
        raise _storage_error(e)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No profile created")
    return profile


@router.post(
    "/profile",
    response_model=Profile,
    responses=ERROR_RESPONSES,
    summary="Create or replace the profile",
)
async def create_profile(
    request: ProfileRequest,
    session: AssessmentSession = Depends(get_session),
) -> Profile:
    """
    Save the profile.

    - All of name, address and budget are required
    - Consent must be given
    """
    try:
        return session.create_profile(
            name=request.name,
            address=request.address,
            budget=request.budget,
            consent=request.consent,
        )
    except DamageAidError as e:
        raise _http_error(e)
    except StorageError as e:
        raise _storage_error(e)


# =============================================================================
# UPLOAD & ANALYSIS
# =============================================================================

@router.get("/upload", response_model=PhotosResponse, summary="Uploaded photos")
async def list_photos(session: AssessmentSession = Depends(get_session)) -> PhotosResponse:
    try:
        photos = session.photos
    except StorageError as e:
        raise _storage_error(e)
    return _photos_response(session, photos)


@router.post(
    "/upload",
    response_model=PhotosResponse,
    responses=ERROR_RESPONSES,
    summary="Add photos",
    description="Appends photos. Any stored analysis is discarded.",
)
async def upload_photos(
    request: PhotoUploadRequest,
    session: AssessmentSession = Depends(get_session),
) -> PhotosResponse:
    try:
        photos = session.upload_photos(request.photos)
    except DamageAidError as e:
        raise _http_error(e)
    except StorageError as e:
        raise _storage_error(e)
    return _photos_response(session, photos)


@router.delete(
    "/upload/{index}",
    response_model=PhotosResponse,
    responses={**ERROR_RESPONSES, 404: {"description": "No photo at index"}},
    summary="Remove a photo",
)
async def remove_photo(
    index: int,
    session: AssessmentSession = Depends(get_session),
) -> PhotosResponse:
    try:
        photos = session.remove_photo(index)
    except DamageAidError as e:
        raise _http_error(e)
    except IndexError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError as e:
        raise _storage_error(e)
    return _photos_response(session, photos)


@router.post(
    "/upload/analyze",
    response_model=DamageAnalysis,
    responses=ERROR_RESPONSES,
    summary="Analyze uploaded photos",
    description="Runs the damage classifier after a fixed delay and stores the result.",
)
async def analyze_photos(session: AssessmentSession = Depends(get_session)) -> DamageAnalysis:
    try:
        return await session.analyze()
    except DamageAidError as e:
        raise _http_error(e)
    except StorageError as e:
        raise _storage_error(e)


# =============================================================================
# RESULTS
# =============================================================================

@router.get(
    "/results",
    response_model=ResultsView,
    responses=ERROR_RESPONSES,
    summary="Assessment results",
)
async def read_results(session: AssessmentSession = Depends(get_session)) -> ResultsView:
    try:
        return session.results()
    except DamageAidError as e:
        raise _http_error(e)
    except StorageError as e:
        raise _storage_error(e)


@router.get(
    "/results/report",
    responses={**ERROR_RESPONSES, 200: {"content": {"application/pdf": {}}}},
    summary="Assessment results as PDF",
)
async def download_report(session: AssessmentSession = Depends(get_session)) -> Response:
    try:
        view = session.results()
    except DamageAidError as e:
        raise _http_error(e)
    except StorageError as e:
        raise _storage_error(e)

    pdf_bytes = generate_pdf_report(view)
    address = view.profile.address if view.profile else None
    filename = generate_filename(address, view.generated_at)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =============================================================================
# MANUAL ASSESSMENTS
# =============================================================================

@router.get("/assessments", response_model=List[Assessment], summary="Assessment log, newest first")
async def list_assessments(session: AssessmentSession = Depends(get_session)) -> List[Assessment]:
    return session.assessments


@router.post(
    "/assessments",
    response_model=Assessment,
    responses=ERROR_RESPONSES,
    summary="Record a manual assessment",
)
async def submit_assessment(
    request: AssessmentRequest,
    session: AssessmentSession = Depends(get_session),
) -> Assessment:
    try:
        return session.submit_assessment(
            damage_type=request.damage_type,
            severity=request.severity,
            location=request.location,
            description=request.description,
            photos=request.photos,
        )
    except DamageAidError as e:
        raise _http_error(e)


# =============================================================================
# REFERENCE DATA
# =============================================================================

@router.get("/education", response_model=EducationResponse, summary="Health education topics")
async def read_education() -> EducationResponse:
    return EducationResponse(
        topics=EDUCATION_TOPICS,
        emergency_contacts=EMERGENCY_CONTACTS,
    )


@router.get("/catalog", response_model=CatalogResponse, summary="Damage catalog")
async def read_catalog() -> CatalogResponse:
    return CatalogResponse(
        version=CATALOG_VERSION,
        damage_types=[damage_type.value for damage_type in DamageType],
        severities=[severity.value for severity in Severity],
        cost_bands={damage_type.value: band for damage_type, band in COST_BANDS.items()},
    )


# =============================================================================
# SESSION
# =============================================================================

@router.get("/session", response_model=SessionResponse, summary="Wizard stage")
async def read_session(session: AssessmentSession = Depends(get_session)) -> SessionResponse:
    return SessionResponse(
        stage=session.stage.value,
        analysis_in_progress=session.analysis_in_progress,
    )


@router.delete("/session", response_model=SessionResponse, summary="Clear all session data")
async def clear_session(session: AssessmentSession = Depends(get_session)) -> SessionResponse:
    try:
        session.clear()
    except StorageError as e:
        raise _storage_error(e)
    return SessionResponse(
        stage=session.stage.value,
        analysis_in_progress=False,
        message="Session cleared",
    )
