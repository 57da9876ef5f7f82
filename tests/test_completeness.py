"""Tests for completeness scoring and missing information."""

from adaptive_interview.engine.completeness import (
    body_system_coverage,
    identify_missing_information,
    requires_location,
    score_completeness,
)
from adaptive_interview.models.evidence import BodySystem, Evidence, Onset


class TestScoreCompleteness:
    """Tests for the point-additive score."""

    def test_no_primary_record_scores_zero(self):
        assert score_completeness([Evidence(name="fever", severity=5)], "headache") == 0

    def test_severity_only_with_location_required(self):
        assert score_completeness([Evidence(name="headache", severity=7)], "headache") == 10

    def test_location_points_when_not_required(self):
        assert score_completeness([Evidence(name="fatigue", severity=4)], "fatigue") == 20

    def test_fully_described_symptom_is_capped(self):
        evidence = [
            Evidence(
                name="headache",
                severity=7,
                duration="A few days",
                location="forehead",
                frequency="daily",
                triggers=["screens"],
                associated_symptoms=["nausea"],
                onset=Onset.GRADUAL,
                pattern="worse in the evening",
            ),
            Evidence(name="nausea", severity=5),
        ]

        assert score_completeness(evidence, "headache") == 100

    def test_partial_record_without_required_location(self):
        evidence = [
            Evidence(
                name="fatigue",
                severity=5,
                duration="2 days",
                associated_symptoms=["dizziness"],
                onset=Onset.SUDDEN,
            )
        ]

        # severity, duration, location not required, associated symptoms, onset
        assert score_completeness(evidence, "fatigue") == 50

    def test_additional_symptoms_add_points(self):
        evidence = [Evidence(name="headache", severity=7), Evidence(name="fever", severity=5)]
        assert score_completeness(evidence, "headache") == 30


class TestMissingInformation:
    def test_without_primary_record(self):
        assert identify_missing_information([], "headache") == [
            "Primary symptom details",
            "Associated symptoms",
        ]

    def test_partial_primary_record(self):
        missing = identify_missing_information(
            [Evidence(name="headache", severity=6)], "headache"
        )
        assert missing == [
            "Duration of primary symptom",
            "Location of primary symptom",
            "Frequency of primary symptom",
            "Associated symptoms",
        ]

    def test_associated_symptoms_present(self):
        missing = identify_missing_information(
            [Evidence(name="fatigue", severity=6, associated_symptoms=["dizzy"])],
            "fatigue",
        )
        assert "Associated symptoms" not in missing
        assert "Location of primary symptom" not in missing


class TestBodySystemCoverage:
    def test_unique_in_first_seen_order(self):
        evidence = [
            Evidence(name="headache", body_systems=[BodySystem.NEUROLOGICAL]),
            Evidence(name="fever", body_systems=[BodySystem.GENERAL]),
            Evidence(name="dizziness", body_systems=[BodySystem.NEUROLOGICAL]),
        ]
        assert body_system_coverage(evidence) == [
            BodySystem.NEUROLOGICAL,
            BodySystem.GENERAL,
        ]


def test_requires_location():
    assert requires_location("abdominal_pain")
    assert requires_location("headache")
    assert not requires_location("fever")
