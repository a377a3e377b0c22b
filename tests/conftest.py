"""Shared test fixtures for HealthBridge tests."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HB_PLATFORM", "ios")
    monkeypatch.setenv("HB_LOG_LEVEL", "info")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from healthbridge.domains.health.connectors.in_memory import InMemoryHealthAdapter  # noqa: E402
from healthbridge.domains.health.taxonomy.data_types import Platform  # noqa: E402

# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

@pytest.fixture
def ios_adapter() -> InMemoryHealthAdapter:
    """In-memory iOS adapter that grants whatever is requested."""
    return InMemoryHealthAdapter(Platform.IOS)


@pytest.fixture
def android_adapter() -> InMemoryHealthAdapter:
    return InMemoryHealthAdapter(Platform.ANDROID)


# ---------------------------------------------------------------------------
# FHIR documents
# ---------------------------------------------------------------------------

IMMUNIZATION: dict[str, Any] = {
    "resourceType": "Immunization",
    "id": "imm-1",
    "status": "completed",
    "vaccineCode": {
        "coding": [{"system": "http://hl7.org/fhir/sid/cvx", "code": "140",
                    "display": "Influenza, seasonal, injectable"}],
        "text": "Flu vaccine",
    },
    "patient": {"reference": "Patient/example"},
    "occurrenceDateTime": "2023-10-12T09:00:00Z",
    "primarySource": True,
    "lotNumber": "AAJN11K",
    "doseQuantity": {"value": "0.5", "unit": "mL", "system": "http://unitsofmeasure.org",
                     "code": "mL"},
    "protocolApplied": [{"doseNumberPositiveInt": 1}],
    "futureExtensionField": {"anything": "goes"},
}

CONDITION: dict[str, Any] = {
    "resourceType": "Condition",
    "id": "cond-1",
    "clinicalStatus": {"coding": [{
        "system": "http://terminology.hl7.org/CodeSystem/condition-clinical",
        "code": "resolved",
    }]},
    "code": {"coding": [{"system": "http://snomed.info/sct", "code": "39065001",
                         "display": "Burn of ear"}]},
    "subject": {"reference": "Patient/example"},
    "onsetDateTime": "2012-05-24",
}

OBSERVATION: dict[str, Any] = {
    "resourceType": "Observation",
    "id": "obs-1",
    "status": "final",
    "category": [{"coding": [{"code": "vital-signs"}]}],
    "code": {"coding": [{"system": "http://loinc.org", "code": "8867-4",
                         "display": "Heart rate"}]},
    "subject": {"reference": "Patient/example"},
    "effectiveDateTime": "2024-05-01T07:30:00Z",
    "valueQuantity": {"value": 72, "unit": "beats/minute",
                      "system": "http://unitsofmeasure.org", "code": "/min"},
}


@pytest.fixture
def immunization_doc() -> dict[str, Any]:
    return json.loads(json.dumps(IMMUNIZATION))


@pytest.fixture
def condition_doc() -> dict[str, Any]:
    return json.loads(json.dumps(CONDITION))


@pytest.fixture
def observation_doc() -> dict[str, Any]:
    return json.loads(json.dumps(OBSERVATION))
