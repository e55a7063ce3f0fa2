"""
User-Facing Errors

Every error carries a short title and a message suitable for showing to
the person filling in the wizard.
"""


class DamageAidError(Exception):
    """Base class for rejected user actions."""

    title = "Error"
    message = "Something went wrong"

    def __init__(self, message: str = None, title: str = None):
        self.message = message or self.message
        self.title = title or self.title
        super().__init__(f"{self.title}: {self.message}")

    def to_dict(self) -> dict:
        return {"title": self.title, "message": self.message}


class ProfileValidationError(DamageAidError):
    title = "Missing Information"
    message = "Please fill in all required fields"


class ConsentRequiredError(DamageAidError):
    title = "Consent Required"
    message = "Please agree to the terms and conditions to continue"


class AssessmentValidationError(DamageAidError):
    title = "Missing Information"
    message = "Please fill in all required fields"


class NoPhotosError(DamageAidError):
    title = "No Photos"
    message = "Please upload at least one photo to analyze"


class NoAnalysisError(DamageAidError):
    title = "No Analysis"
    message = "No analysis data found. Please upload photos first."


class FlowStageError(DamageAidError):
    """An action was attempted before the step it depends on."""
    title = "Out of Order"
    message = "Please complete the previous step first"


class AnalysisCancelledError(DamageAidError):
    title = "Analysis Cancelled"
    message = "The analysis was cancelled before it completed"
