"""
Tests for student/university match scoring.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from admissions_match.constants import SCORE_WEIGHTS
from admissions_match.scoring import (
    MatchBreakdown,
    ProgramSnapshot,
    ScholarshipSnapshot,
    StudentSnapshot,
    UniversitySnapshot,
    calculate_criteria_overlap,
    calculate_field_match,
    calculate_gpa_score,
    calculate_language_match,
    calculate_location_match,
    calculate_match_score,
    calculate_overlap,
    calculate_scholarship_fit,
    get_match_breakdown,
    weighted_score,
)


def _programs(*languages, field="Engineering"):
    return tuple(ProgramSnapshot(field=field, language=lang) for lang in languages)


class TestCalculateFieldMatch:
    """Tests for program breadth scoring."""

    def test_no_programs_is_neutral(self):
        assert calculate_field_match(()) == 0.5

    def test_one_program(self):
        assert calculate_field_match(_programs("English")) == pytest.approx(0.5 + 0.5 / 3)

    def test_saturates_at_three_programs(self):
        """Three or more programs all score the maximum."""
        assert calculate_field_match(_programs("a", "b", "c")) == 1.0
        assert calculate_field_match(_programs("a", "b", "c", "d", "e")) == 1.0


class TestCalculateGpaScore:
    """Tests for GPA normalization."""

    def test_missing_gpa_is_neutral(self):
        assert calculate_gpa_score(None) == 0.5

    def test_nan_gpa_is_neutral(self):
        """A NaN read from a float column counts as missing."""
        assert calculate_gpa_score(float("nan")) == 0.5

    def test_scale(self):
        assert calculate_gpa_score(3.0) == pytest.approx(0.75)
        assert calculate_gpa_score(4.0) == 1.0

    def test_clamped(self):
        """Out-of-range GPAs clamp to the [0, 1] interval."""
        assert calculate_gpa_score(0) == 0.0
        assert calculate_gpa_score(-1.5) == 0.0
        assert calculate_gpa_score(5.0) == 1.0


class TestCalculateLanguageMatch:
    """Tests for the free-text language check."""

    @pytest.mark.parametrize("level", ["C1", "b2", "Fluent English", "ENG certificate"])
    def test_english_program_matches_english_levels(self, level):
        assert calculate_language_match(level, _programs("English")) == 1.0

    def test_english_program_with_other_level(self):
        assert calculate_language_match("A1 French", _programs("English")) == 0.5

    def test_program_language_is_case_insensitive(self):
        assert calculate_language_match("C1", _programs("ENGLISH")) == 1.0

    def test_russian_program_accepts_any_stated_level(self):
        assert calculate_language_match("A2", _programs("Russian")) == pytest.approx(0.8)

    def test_russian_program_without_level(self):
        assert calculate_language_match("", _programs("Russian")) == 0.5
        assert calculate_language_match(None, _programs("Russian")) == 0.5

    def test_english_match_takes_priority(self):
        programs = _programs("Russian", "English")
        assert calculate_language_match("B2", programs) == 1.0
        assert calculate_language_match("A1", programs) == pytest.approx(0.8)

    def test_no_programs(self):
        assert calculate_language_match("C1", ()) == 0.5


class TestCalculateScholarshipFit:
    """Tests for scholarship availability."""

    def test_no_scholarships(self):
        assert calculate_scholarship_fit(0) == pytest.approx(0.3)

    def test_one_scholarship(self):
        assert calculate_scholarship_fit(1) == pytest.approx(0.75)

    def test_saturates_at_two(self):
        assert calculate_scholarship_fit(2) == 1.0
        assert calculate_scholarship_fit(7) == 1.0


class TestCalculateLocationMatch:
    """Tests for country matching."""

    def test_same_country(self):
        assert calculate_location_match("US", "US") == 1.0

    def test_different_country(self):
        assert calculate_location_match("US", "KZ") == 0.5

    def test_comparison_is_exact(self):
        assert calculate_location_match("us", "US") == 0.5

    def test_missing_country(self):
        assert calculate_location_match(None, "US") == 0.5
        assert calculate_location_match("", "") == 0.5


class TestCalculateOverlap:
    """Tests for tag-set overlap."""

    def test_empty_side_is_neutral(self):
        assert calculate_overlap(frozenset(), frozenset({"math"})) == 0.5
        assert calculate_overlap(frozenset({"math"}), frozenset()) == 0.5

    def test_identical_sets(self):
        assert calculate_overlap(frozenset({"math", "art"}), frozenset({"art", "math"})) == 1.0

    def test_disjoint_sets_score_the_floor(self):
        assert calculate_overlap(frozenset({"math"}), frozenset({"art"})) == pytest.approx(0.3)

    def test_partial_overlap_uses_larger_set(self):
        score = calculate_overlap(frozenset({"a", "b"}), frozenset({"a", "c", "d"}))
        assert score == pytest.approx(0.3 + 0.7 / 3)


class TestCriteriaOverlap:
    """Tests for choosing the skills pool and the interests pool."""

    def test_skills_compared_with_program_fields(self):
        student = StudentSnapshot(skills=["Engineering"])
        university = UniversitySnapshot(
            programs=_programs("English", field="engineering"),
            preferred_skills=["painting"],
        )
        overlap = calculate_criteria_overlap(student, university)
        assert overlap.skills == 1.0

    def test_skills_fall_back_to_preferred_skills(self):
        student = StudentSnapshot(skills=["painting"])
        university = UniversitySnapshot(preferred_skills=["Painting", "Drawing"])
        overlap = calculate_criteria_overlap(student, university)
        assert overlap.skills == pytest.approx(0.3 + 0.7 / 2)

    def test_hobbies_share_preferred_interests(self):
        student = StudentSnapshot(interests=["robotics"], hobbies=["chess"])
        university = UniversitySnapshot(preferred_interests=["chess"])
        overlap = calculate_criteria_overlap(student, university)
        assert overlap.interests == pytest.approx(0.3)
        assert overlap.hobbies == 1.0


class TestSnapshots:
    """Tests for snapshot normalization."""

    def test_tags_are_normalized(self):
        student = StudentSnapshot(skills=[" Python ", "python", "", "SQL"])
        assert student.skills == frozenset({"python", "sql"})

    def test_missing_tag_lists(self):
        student = StudentSnapshot(skills=None)
        assert student.skills == frozenset()

    def test_snapshots_are_frozen(self):
        student = StudentSnapshot(gpa=3.0)
        with pytest.raises(ValidationError):
            student.gpa = 4.0


class TestCalculateMatchScore:
    """Tests for the combined score."""

    def test_single_english_engineering_program(self):
        """Perfect GPA, C1 English, one program, no scholarships, same country."""
        student = StudentSnapshot(
            gpa=4.0,
            language_level="C1",
            country="US",
            skills=["Engineering"],
        )
        university = UniversitySnapshot(
            country="US",
            verified=True,
            programs=(ProgramSnapshot(field="Engineering", language="English", tuition_fee=Decimal("1000")),),
        )

        result = calculate_match_score(student, university)
        breakdown = result.breakdown

        assert breakdown.field_match == pytest.approx(0.5 + 0.5 / 3)
        assert breakdown.gpa == 1.0
        assert breakdown.language == 1.0
        assert breakdown.tuition_fit == pytest.approx(0.7)
        assert breakdown.scholarship_fit == pytest.approx(0.3)
        assert breakdown.location == 1.0
        assert breakdown.criteria_overlap.skills == 1.0
        assert breakdown.criteria_match == pytest.approx(2 / 3)
        assert result.score == pytest.approx(0.485 + 0.8 / 3)

    def test_missing_gpa_is_neutral(self):
        result = calculate_match_score(StudentSnapshot(gpa=None), UniversitySnapshot())
        assert result.breakdown.gpa == 0.5

    def test_nan_gpa_never_raises(self):
        result = calculate_match_score(StudentSnapshot(gpa=float("nan")), UniversitySnapshot())

        assert result.breakdown.gpa == 0.5
        assert 0.0 <= result.score <= 1.0

    def test_scenario_with_free_text_language_fields(self):
        """A "C1 English" student against an "English, Taught" engineering program."""
        student = StudentSnapshot(
            gpa=4.0, country="US", language_level="C1 English", skills=["Engineering"]
        )
        university = UniversitySnapshot(
            verified=True,
            country="US",
            programs=(ProgramSnapshot(field="Engineering", language="English, Taught"),),
        )

        result = calculate_match_score(student, university)

        assert result.breakdown.language == 1.0
        assert result.breakdown.criteria_overlap.skills == 1.0
        assert result.score == pytest.approx(0.485 + 0.8 / 3)

    def test_empty_inputs_never_raise(self):
        result = calculate_match_score(StudentSnapshot(), UniversitySnapshot())
        assert 0.0 <= result.score <= 1.0

    def test_deterministic(self):
        student = StudentSnapshot(gpa=3.2, language_level="B2", skills=["math"], hobbies=["chess"])
        university = UniversitySnapshot(
            programs=_programs("English", "Russian"),
            scholarships=(ScholarshipSnapshot(),),
            preferred_interests=["chess"],
        )
        assert calculate_match_score(student, university) == calculate_match_score(student, university)

    @pytest.mark.parametrize(
        "student,university",
        [
            (StudentSnapshot(gpa=0.0), UniversitySnapshot()),
            (
                StudentSnapshot(gpa=4.0, country="KZ", language_level="C1", skills=["it"], interests=["ai"]),
                UniversitySnapshot(
                    country="KZ",
                    programs=_programs("English", "English", "English", field="IT"),
                    scholarships=(ScholarshipSnapshot(), ScholarshipSnapshot()),
                    preferred_interests=["ai"],
                ),
            ),
            (
                StudentSnapshot(gpa=2.1, language_level="A1", skills=["law"]),
                UniversitySnapshot(programs=_programs("Russian", field="Medicine")),
            ),
        ],
    )
    def test_score_is_weighted_sum_of_breakdown(self, student, university):
        result = calculate_match_score(student, university)
        expected = sum(w * getattr(result.breakdown, name) for name, w in SCORE_WEIGHTS.items())

        assert 0.0 <= result.score <= 1.0
        assert result.score == pytest.approx(expected)

    def test_weights_sum_to_one(self):
        assert sum(SCORE_WEIGHTS.values()) == pytest.approx(1.0)

    def test_weighted_score_of_breakdown(self):
        breakdown = get_match_breakdown(StudentSnapshot(), UniversitySnapshot())
        assert isinstance(breakdown, MatchBreakdown)
        assert weighted_score(breakdown) == calculate_match_score(StudentSnapshot(), UniversitySnapshot()).score
