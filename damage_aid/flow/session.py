"""
Assessment Session — The Wizard as an Explicit State Machine

Stages advance linearly:

    EMPTY -> PROFILE_CREATED -> PHOTOS_UPLOADED -> ANALYSIS_COMPLETE -> RESULTS_VIEWED

Rules:
- Re-submitting the profile replaces it and keeps later state
- Any change to the photo set drops the stored analysis and cancels an
  in-flight analysis; the stage falls back to PHOTOS_UPLOADED
- An analysis run only writes its result if its cancellation token is
  still live when the classifier returns
- All persisted state goes through the injected KeyValueStore
"""

import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from damage_aid.catalog import EMERGENCY_CONTACTS, EmergencyContact
from damage_aid.classifier import DamageAnalysis, DamageClassifier, RandomDamageClassifier
from damage_aid.errors import (
    AnalysisCancelledError,
    ConsentRequiredError,
    FlowStageError,
    NoAnalysisError,
    NoPhotosError,
    ProfileValidationError,
)
from damage_aid.rules import Assessment, DamageAssessor, DamageEstimate, Profile
from damage_aid.storage import (
    ANALYSIS_KEY,
    PHOTOS_KEY,
    PROFILE_KEY,
    InMemoryStore,
    KeyValueStore,
    StorageError,
)


logger = logging.getLogger(__name__)


# Simulated analysis latency (seconds)
DEFAULT_ANALYSIS_DELAY = 3.0


class FlowStage(str, Enum):
    """Wizard stages in the order they are reached."""
    EMPTY = "empty"
    PROFILE_CREATED = "profile_created"
    PHOTOS_UPLOADED = "photos_uploaded"
    ANALYSIS_COMPLETE = "analysis_complete"
    RESULTS_VIEWED = "results_viewed"

    @property
    def order(self) -> int:
        return list(FlowStage).index(self)


class CancellationToken:
    """Flag shared between an analysis run and whoever may abandon it."""
    __slots__ = ("_cancelled",)

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ResultsView(BaseModel):
    """Everything the results page shows."""
    profile: Optional[Profile] = None
    photos: List[str] = Field(default_factory=list)
    analysis: DamageAnalysis
    estimate: DamageEstimate
    emergency_contacts: List[EmergencyContact] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AssessmentSession:
    """
    One person's pass through the wizard.

    Usage:
        session = AssessmentSession(store=InMemoryStore())
        session.create_profile("Ada", "1 Main St", "$10,000", consent=True)
        session.upload_photos([data_uri])
        await session.analyze()
        view = session.results()
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        classifier: Optional[DamageClassifier] = None,
        assessor: Optional[DamageAssessor] = None,
        analysis_delay: float = DEFAULT_ANALYSIS_DELAY,
    ):
        """
        Args:
            store: Persistence port (in-memory if omitted)
            classifier: Damage classifier (random simulation if omitted)
            assessor: Estimation engine
            analysis_delay: Seconds to wait before classifying
        """
        self.store = store if store is not None else InMemoryStore()
        self.classifier = classifier or RandomDamageClassifier()
        self.assessor = assessor or DamageAssessor()
        self.analysis_delay = analysis_delay

        self.assessments: List[Assessment] = []
        self._token: Optional[CancellationToken] = None
        self._stage = self._restore_stage()

        logger.info(f"[Session] Initialized at stage {self._stage.value}")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def stage(self) -> FlowStage:
        return self._stage

    @property
    def profile(self) -> Optional[Profile]:
        data = self.store.get_json(PROFILE_KEY)
        if data is None:
            return None
        try:
            return Profile.model_validate(data)
        except ValidationError as e:
            raise StorageError(f"Stored profile is invalid: {e}") from e

    @property
    def photos(self) -> List[str]:
        return list(self.store.get_json(PHOTOS_KEY) or [])

    @property
    def analysis(self) -> Optional[DamageAnalysis]:
        data = self.store.get_json(ANALYSIS_KEY)
        if data is None:
            return None
        try:
            return DamageAnalysis.model_validate(data)
        except ValidationError as e:
            raise StorageError(f"Stored analysis is invalid: {e}") from e

    @property
    def analysis_in_progress(self) -> bool:
        return self._token is not None and not self._token.cancelled

    def _restore_stage(self) -> FlowStage:
        """Derive the stage from whatever an earlier session persisted."""
        has_profile = self.store.get(PROFILE_KEY) is not None
        has_photos = bool(self.store.get_json(PHOTOS_KEY))
        has_analysis = self.store.get(ANALYSIS_KEY) is not None

        if has_profile and has_photos and has_analysis:
            return FlowStage.ANALYSIS_COMPLETE
        if has_profile and has_photos:
            return FlowStage.PHOTOS_UPLOADED
        if has_profile:
            return FlowStage.PROFILE_CREATED
        return FlowStage.EMPTY

    def _set_stage(self, stage: FlowStage) -> None:
        if stage != self._stage:
            logger.info(f"[Session] {self._stage.value} -> {stage.value}")
        self._stage = stage

    def _require_profile(self) -> None:
        if self._stage.order < FlowStage.PROFILE_CREATED.order:
            raise FlowStageError("Please create your profile before uploading photos")

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def create_profile(
        self,
        name: str,
        address: str,
        budget: str,
        consent: bool,
    ) -> Profile:
        """
        Validate and persist the profile.

        Raises:
            ProfileValidationError: name, address or budget blank
            ConsentRequiredError: consent not given
        """
        if not (name or "").strip() or not (address or "").strip() or not (budget or "").strip():
            logger.warning("[Session] Profile rejected: missing required fields")
            raise ProfileValidationError()
        if not consent:
            logger.warning("[Session] Profile rejected: consent not given")
            raise ConsentRequiredError()

        profile = Profile(name=name.strip(), address=address.strip(), budget=budget.strip(), consent=True)
        self.store.set_json(PROFILE_KEY, profile.model_dump())

        if self._stage == FlowStage.EMPTY:
            self._set_stage(FlowStage.PROFILE_CREATED)
        return profile

    # ------------------------------------------------------------------
    # Photos
    # ------------------------------------------------------------------

    def upload_photos(self, photos: List[str]) -> List[str]:
        """
        Append photos to the upload set.

        Returns:
            The full photo list after the upload

        Raises:
            FlowStageError: No profile yet
        """
        self._require_profile()
        if not photos:
            return self.photos

        current = self.photos + list(photos)
        self.store.set_json(PHOTOS_KEY, current)
        self._invalidate_analysis()
        self._set_stage(FlowStage.PHOTOS_UPLOADED)

        logger.info(f"[Session] {len(photos)} photo(s) added, {len(current)} total")
        return current

    def remove_photo(self, index: int) -> List[str]:
        """
        Remove the photo at index.

        Raises:
            FlowStageError: No profile yet
            IndexError: No photo at index
        """
        self._require_profile()
        current = self.photos
        if not 0 <= index < len(current):
            raise IndexError(f"No photo at index {index} ({len(current)} uploaded)")

        del current[index]
        self.store.set_json(PHOTOS_KEY, current)
        self._invalidate_analysis()
        self._set_stage(FlowStage.PHOTOS_UPLOADED if current else FlowStage.PROFILE_CREATED)
        return current

    def _invalidate_analysis(self) -> None:
        self.cancel_analysis()
        if self.store.get(ANALYSIS_KEY) is not None:
            self.store.delete(ANALYSIS_KEY)
            logger.info("[Session] Stale analysis discarded after photo change")

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def cancel_analysis(self) -> bool:
        """
        Cancel the in-flight analysis, if any.

        Returns:
            True if a run was cancelled
        """
        if self._token is None or self._token.cancelled:
            return False
        self._token.cancel()
        logger.warning("[Session] In-flight analysis cancelled")
        return True

    async def analyze(self) -> DamageAnalysis:
        """
        Classify the uploaded photos after the simulated latency.

        A newer run supersedes an older one; the older run raises
        AnalysisCancelledError instead of writing.

        Raises:
            NoPhotosError: Nothing uploaded
            AnalysisCancelledError: Run cancelled before completion
        """
        photos = self.photos
        if not photos:
            raise NoPhotosError()

        self.cancel_analysis()
        token = CancellationToken()
        self._token = token
        logger.info(f"[Session] Analyzing {len(photos)} photo(s) with {self.classifier.name} classifier")

        try:
            await asyncio.sleep(self.analysis_delay)
            if token.cancelled:
                raise AnalysisCancelledError()

            analysis = self.classifier.classify(photos)
            if token.cancelled:
                raise AnalysisCancelledError()

            self.store.set_json(ANALYSIS_KEY, analysis.model_dump())
            self._set_stage(FlowStage.ANALYSIS_COMPLETE)
            logger.info(
                f"[Session] Detected {analysis.type} ({analysis.severity}) "
                f"with {analysis.confidence} confidence"
            )
            return analysis
        finally:
            if self._token is token:
                self._token = None

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def results(self) -> ResultsView:
        """
        Build the results view from the stored analysis.

        Raises:
            NoAnalysisError: Nothing analyzed yet
        """
        analysis = self.analysis
        if analysis is None:
            raise NoAnalysisError()

        profile = self.profile
        estimate = self.assessor.estimate(analysis.type, analysis.severity, profile)
        view = ResultsView(
            profile=profile,
            photos=self.photos,
            analysis=analysis,
            estimate=estimate,
            emergency_contacts=list(EMERGENCY_CONTACTS),
        )
        self._set_stage(FlowStage.RESULTS_VIEWED)
        return view

    # ------------------------------------------------------------------
    # Manual assessments
    # ------------------------------------------------------------------

    def submit_assessment(
        self,
        damage_type: str,
        severity: str,
        location: str,
        description: str = "",
        photos: Optional[List[str]] = None,
    ) -> Assessment:
        """Record a manual assessment; newest first in self.assessments."""
        assessment = self.assessor.assess(damage_type, severity, location, description, photos)
        self.assessments.insert(0, assessment)
        return assessment

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop all session data and start over."""
        self.cancel_analysis()
        self.store.clear()
        self.assessments.clear()
        self._set_stage(FlowStage.EMPTY)
