# Match scoring module for student/university compatibility

import math
from collections.abc import Iterable, Set

from admissions_match.constants import (
    ENGLISH_LEVEL_MARKERS,
    ENGLISH_MATCH_SCORE,
    ENGLISH_PROGRAM_MARKER,
    GPA_SCALE_MAX,
    LOCATION_MATCH_SCORE,
    NEUTRAL_SCORE,
    NO_SCHOLARSHIP_SCORE,
    OVERLAP_FLOOR,
    OVERLAP_RANGE,
    PROGRAM_SATURATION_COUNT,
    RUSSIAN_MATCH_SCORE,
    RUSSIAN_PROGRAM_MARKER,
    SCHOLARSHIP_SATURATION_COUNT,
    SCORE_WEIGHTS,
    TUITION_FIT_SCORE,
)

from .snapshots import (
    CriteriaOverlap,
    MatchBreakdown,
    MatchResult,
    ProgramSnapshot,
    StudentSnapshot,
    UniversitySnapshot,
)


def _saturating(count: int, saturation: int) -> float:
    """Scale a count into 0.5-1.0, reaching 1.0 at the saturation count."""
    return 0.5 + 0.5 * min(1.0, count / saturation)


def calculate_field_match(programs: Iterable[ProgramSnapshot]) -> float:
    """
    Reward breadth of offered programs.

    Args:
        programs: Programs offered by the university.

    Returns:
        0.5 when there are no programs, rising to 1.0 at three programs.
    """
    program_count = len(tuple(programs))
    if not program_count:
        return NEUTRAL_SCORE
    return _saturating(program_count, PROGRAM_SATURATION_COUNT)


def calculate_gpa_score(gpa: float | None) -> float:
    """
    Normalize a GPA on the 0-4 scale.

    Args:
        gpa: Student GPA, or None when unknown.

    Returns:
        Score from 0-1; 0.5 when the GPA is missing or NaN.
    """
    if gpa is None:
        return NEUTRAL_SCORE
    value = float(gpa)
    if math.isnan(value):
        return NEUTRAL_SCORE
    if value <= 0:
        return 0.0
    if value >= GPA_SCALE_MAX:
        return 1.0
    return value / GPA_SCALE_MAX


def calculate_language_match(language_level: str | None, programs: Iterable[ProgramSnapshot]) -> float:
    """
    Loose free-text check of the student's language level against program languages.

    English-taught programs match levels mentioning "eng", "b2" or "c1".
    Russian-taught programs match any stated level.

    Args:
        language_level: Student language level text.
        programs: Programs offered by the university.

    Returns:
        1.0 for an English match, 0.8 for a Russian match, otherwise 0.5.
    """
    level = (language_level or "").lower()
    program_languages = [(p.language or "").lower() for p in programs]

    has_english = any(ENGLISH_PROGRAM_MARKER in lang for lang in program_languages)
    if has_english and any(marker in level for marker in ENGLISH_LEVEL_MARKERS):
        return ENGLISH_MATCH_SCORE

    has_russian = any(RUSSIAN_PROGRAM_MARKER in lang for lang in program_languages)
    if has_russian and level:
        return RUSSIAN_MATCH_SCORE

    return NEUTRAL_SCORE


def calculate_tuition_fit(student: StudentSnapshot, university: UniversitySnapshot) -> float:
    """
    Tuition-to-budget fit.

    Student profiles carry no budget yet, so this is a fixed placeholder.
    """
    return TUITION_FIT_SCORE


def calculate_scholarship_fit(scholarship_count: int) -> float:
    """
    Score scholarship availability.

    Returns:
        0.3 with no scholarships, otherwise 0.75 for one and 1.0 from two up.
    """
    if not scholarship_count:
        return NO_SCHOLARSHIP_SCORE
    return _saturating(scholarship_count, SCHOLARSHIP_SATURATION_COUNT)


def calculate_location_match(student_country: str | None, university_country: str | None) -> float:
    """Exact, case-sensitive country comparison; 1.0 on match, else 0.5."""
    if student_country and university_country and student_country == university_country:
        return LOCATION_MATCH_SCORE
    return NEUTRAL_SCORE


def calculate_overlap(a: Set[str], b: Set[str]) -> float:
    """
    Overlap between two tag sets.

    Args:
        a: First tag set.
        b: Second tag set.

    Returns:
        0.5 if either set is empty, otherwise
        min(1, 0.3 + 0.7 * |a & b| / max(|a|, |b|)).
    """
    if not a or not b:
        return NEUTRAL_SCORE
    matches = len(a & b)
    return min(1.0, OVERLAP_FLOOR + OVERLAP_RANGE * matches / max(len(a), len(b)))


def calculate_criteria_overlap(student: StudentSnapshot, university: UniversitySnapshot) -> CriteriaOverlap:
    """
    Compute the skills, interests and hobbies overlaps.

    Skills are compared with the program fields when the university has
    programs, otherwise with its preferred skills. Interests and hobbies
    share the preferred-interests pool.
    """
    skills_pool = university.program_fields if university.programs else university.preferred_skills
    return CriteriaOverlap(
        skills=calculate_overlap(student.skills, skills_pool),
        interests=calculate_overlap(student.interests, university.preferred_interests),
        hobbies=calculate_overlap(student.hobbies, university.preferred_interests),
    )


def get_match_breakdown(student: StudentSnapshot, university: UniversitySnapshot) -> MatchBreakdown:
    """
    Compute every sub-score for a student against a university.

    Args:
        student: Student snapshot.
        university: University snapshot with programs and scholarships resolved.

    Returns:
        MatchBreakdown with each component normalized to [0, 1].
    """
    overlap = calculate_criteria_overlap(student, university)
    criteria_match = (overlap.skills + overlap.interests + overlap.hobbies) / 3

    return MatchBreakdown(
        field_match=calculate_field_match(university.programs),
        gpa=calculate_gpa_score(student.gpa),
        language=calculate_language_match(student.language_level, university.programs),
        tuition_fit=calculate_tuition_fit(student, university),
        scholarship_fit=calculate_scholarship_fit(len(university.scholarships)),
        location=calculate_location_match(student.country, university.country),
        criteria_match=criteria_match,
        criteria_overlap=overlap,
    )


def weighted_score(breakdown: MatchBreakdown) -> float:
    """Weighted sum of the breakdown components, clamped to [0, 1]."""
    total = sum(weight * getattr(breakdown, name) for name, weight in SCORE_WEIGHTS.items())
    return max(0.0, min(1.0, total))


def calculate_match_score(student: StudentSnapshot, university: UniversitySnapshot) -> MatchResult:
    """
    Score a student against a single university.

    Pure and deterministic; every input is optional and never raises.

    Args:
        student: Student snapshot.
        university: University snapshot.

    Returns:
        MatchResult with the final score and its breakdown.
    """
    breakdown = get_match_breakdown(student, university)
    return MatchResult(score=weighted_score(breakdown), breakdown=breakdown)
