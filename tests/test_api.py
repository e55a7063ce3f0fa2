"""
API Tests — Wizard Endpoint Tests

Tests cover:
- Welcome and heartbeat endpoints
- Profile validation (400) and consent
- Upload ordering rules (409) and data URI validation (422)
- Full profile -> upload -> analyze -> results flow
- PDF download
- Manual assessments, catalog and education data
- Session reset
- Corrupt storage surfaces as a structured 500

The app's session dependency is replaced with an in-memory session using
a fixed classifier and no analysis delay.
"""

import pytest
from fastapi.testclient import TestClient

from damage_aid.api import app, get_session
from damage_aid.catalog import CATALOG_VERSION, DamageType, Severity
from damage_aid.classifier import FixedDamageClassifier
from damage_aid.flow import AssessmentSession
from damage_aid.storage import ANALYSIS_KEY, PHOTOS_KEY, InMemoryStore


# Test client
client = TestClient(app)

PHOTO = "data:image/png;base64,iVBORw0KGgo="


@pytest.fixture(autouse=True)
def session():
    """Fresh session per test, injected into every route."""
    test_session = AssessmentSession(
        store=InMemoryStore(),
        classifier=FixedDamageClassifier(DamageType.WATER, Severity.SEVERE, 92.5),
        analysis_delay=0,
    )
    app.dependency_overrides[get_session] = lambda: test_session
    yield test_session
    app.dependency_overrides.clear()


def get_valid_profile() -> dict:
    """Generate a valid profile payload."""
    return {
        "name": "Ada Lovelace",
        "address": "12 Harbor Rd",
        "budget": "$20,000",
        "consent": True,
    }


def complete_analysis():
    """Drive the wizard through analysis."""
    assert client.post("/profile", json=get_valid_profile()).status_code == 200
    assert client.post("/upload", json={"photos": [PHOTO]}).status_code == 200
    assert client.post("/upload/analyze").status_code == 200


class TestWelcome:
    """Test static endpoints."""

    def test_root(self):
        response = client.get("/")

        assert response.status_code == 200
        assert len(response.json()["features"]) == 4
        assert response.json()["start"] == "/profile"

    def test_ping(self):
        assert client.get("/ping").json() == {"status": "ok"}


class TestProfileEndpoint:
    """Test /profile."""

    def test_create_profile(self):
        response = client.post("/profile", json=get_valid_profile())

        assert response.status_code == 200
        assert response.json()["name"] == "Ada Lovelace"
        assert client.get("/profile").json()["budget"] == "$20,000"

    def test_no_profile_yet(self):
        assert client.get("/profile").status_code == 404

    def test_missing_fields(self):
        payload = get_valid_profile()
        payload["address"] = ""

        response = client.post("/profile", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"]["title"] == "Missing Information"
        assert client.get("/profile").status_code == 404

    def test_consent_required(self):
        payload = get_valid_profile()
        payload["consent"] = False

        response = client.post("/profile", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == {
            "title": "Consent Required",
            "message": "Please agree to the terms and conditions to continue",
        }


class TestUploadEndpoint:
    """Test /upload."""

    def test_upload_before_profile(self):
        response = client.post("/upload", json={"photos": [PHOTO]})

        assert response.status_code == 409
        assert response.json()["detail"]["title"] == "Out of Order"

    def test_rejects_non_image(self):
        client.post("/profile", json=get_valid_profile())

        response = client.post("/upload", json={"photos": ["data:text/plain;base64,YWJj"]})

        assert response.status_code == 422

    def test_upload_and_list(self):
        client.post("/profile", json=get_valid_profile())

        response = client.post("/upload", json={"photos": [PHOTO, PHOTO]})

        assert response.status_code == 200
        assert response.json()["count"] == 2
        assert response.json()["stage"] == "photos_uploaded"
        assert client.get("/upload").json()["count"] == 2

    def test_remove_photo(self):
        client.post("/profile", json=get_valid_profile())
        client.post("/upload", json={"photos": [PHOTO]})

        response = client.delete("/upload/0")

        assert response.status_code == 200
        assert response.json()["count"] == 0
        assert response.json()["stage"] == "profile_created"

    def test_remove_missing_photo(self):
        client.post("/profile", json=get_valid_profile())

        assert client.delete("/upload/5").status_code == 404

    def test_analyze_without_photos(self):
        client.post("/profile", json=get_valid_profile())

        response = client.post("/upload/analyze")

        assert response.status_code == 400
        assert response.json()["detail"]["title"] == "No Photos"


class TestResultsEndpoint:
    """Test /results and the report download."""

    def test_results_before_analysis(self):
        response = client.get("/results")

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == (
            "No analysis data found. Please upload photos first."
        )

    def test_full_flow(self):
        client.post("/profile", json=get_valid_profile())
        client.post("/upload", json={"photos": [PHOTO]})

        analysis = client.post("/upload/analyze").json()
        assert analysis == {"type": "Water Damage", "severity": "Severe", "confidence": "92.5%"}

        results = client.get("/results").json()
        estimate = results["estimate"]
        assert estimate["estimated_cost"] == 15000
        assert estimate["risk_level"] == "high"
        assert "Immediate water extraction" in estimate["recommendations"]
        assert estimate["budget_match"] == "Within Budget"
        assert len(estimate["contractors"]) == 2
        assert len(results["emergency_contacts"]) == 5
        assert client.get("/session").json()["stage"] == "results_viewed"

    def test_new_upload_invalidates_results(self):
        complete_analysis()

        client.post("/upload", json={"photos": [PHOTO]})

        assert client.get("/results").status_code == 400

    def test_pdf_report(self):
        complete_analysis()

        response = client.get("/results/report")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "DamageReport_12_Harbor_Rd_" in response.headers["content-disposition"]
        assert response.content[:5] == b'%PDF-'

    def test_pdf_report_before_analysis(self):
        assert client.get("/results/report").status_code == 400

    @pytest.mark.parametrize("path", ["/results", "/results/report"])
    def test_corrupt_analysis_is_storage_error(self, session, path):
        complete_analysis()
        session.store.set(ANALYSIS_KEY, "{not json")

        response = client.get(path)

        assert response.status_code == 500
        assert response.json()["detail"]["title"] == "Storage Error"


class TestStorageFailures:
    """Corrupt stored values surface as structured 500s."""

    def test_corrupt_photos_on_list(self, session):
        client.post("/profile", json=get_valid_profile())
        session.store.set(PHOTOS_KEY, "{not json")

        response = client.get("/upload")

        assert response.status_code == 500
        assert response.json()["detail"]["title"] == "Storage Error"

    def test_corrupt_photos_on_upload(self, session):
        client.post("/profile", json=get_valid_profile())
        session.store.set(PHOTOS_KEY, "{not json")

        response = client.post("/upload", json={"photos": [PHOTO]})

        assert response.status_code == 500
        assert response.json()["detail"]["title"] == "Storage Error"

    def test_corrupt_photos_on_analyze(self, session):
        client.post("/profile", json=get_valid_profile())
        session.store.set(PHOTOS_KEY, "{not json")

        assert client.post("/upload/analyze").status_code == 500


class TestAssessmentsEndpoint:
    """Test /assessments."""

    def test_submit_and_list(self):
        first = client.post("/assessments", json={
            "damage_type": "Fire Damage",
            "severity": "Moderate",
            "location": "Garage",
        })
        second = client.post("/assessments", json={
            "damage_type": "Roof Damage",
            "severity": "Minor",
            "location": "Attic",
            "description": "Missing shingles",
        })

        assert first.status_code == 200
        assert first.json()["estimated_cost"] == 25000
        assert first.json()["health_risks"] == ["Smoke Inhalation", "Toxic Chemicals"]

        listed = client.get("/assessments").json()
        assert [a["id"] for a in listed] == [second.json()["id"], first.json()["id"]]

    def test_missing_location(self):
        response = client.post("/assessments", json={
            "damage_type": "Fire Damage",
            "severity": "Moderate",
        })

        assert response.status_code == 400


class TestReferenceData:
    """Test /catalog and /education."""

    def test_catalog(self):
        data = client.get("/catalog").json()

        assert data["version"] == CATALOG_VERSION
        assert len(data["damage_types"]) == 10
        assert data["severities"] == ["Minor", "Moderate", "Severe"]
        assert data["cost_bands"]["Flooding"] == {"low": 8000, "medium": 25000, "high": 85000}

    def test_education(self):
        data = client.get("/education").json()

        assert len(data["topics"]) == 6
        assert len(data["emergency_contacts"]) == 5


class TestSessionEndpoint:
    """Test /session."""

    def test_initial_state(self):
        assert client.get("/session").json() == {
            "stage": "empty",
            "analysis_in_progress": False,
            "message": "",
        }

    def test_clear(self):
        complete_analysis()

        response = client.delete("/session")

        assert response.json()["stage"] == "empty"
        assert client.get("/profile").status_code == 404
        assert client.get("/upload").json()["count"] == 0
