"""
Pytest fixtures for Admissions Match tests.

Each test gets a fresh in-memory SQLite database behind the ``db`` singleton,
so code that opens its own ``db.session()`` (worker, CLI) sees the same data.
"""

import pytest

from admissions_match.config import get_settings
from admissions_match.db import db
from admissions_match.models import Program, Scholarship, StudentProfile, UniversityProfile


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so monkeypatched environment variables take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_db():
    """Initialize the db singleton on a fresh in-memory database."""
    db.reset()
    db.initialize("sqlite://")
    db.create_all_tables()
    yield db
    db.drop_all_tables()
    db.reset()


@pytest.fixture
def test_session(test_db):
    """Get a session on the test database."""
    session = test_db.get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def sample_student():
    """Student profile fields matching the English-taught engineering scenario."""
    return {
        "first_name": "Ada",
        "country": "US",
        "gpa": 4.0,
        "language_level": "C1 English",
        "skills": ["Engineering"],
        "interests": [],
        "hobbies": [],
    }


@pytest.fixture
def make_student(test_db):
    """Factory: insert a student and return its id."""

    def _make(**fields) -> int:
        fields.setdefault("needs_recalculation", True)
        with test_db.session() as session:
            student = StudentProfile(**fields)
            session.add(student)
            session.flush()
            return student.id

    return _make


@pytest.fixture
def make_university(test_db):
    """
    Factory: insert a university with programs and scholarships, return its id.

    ``programs`` is a list of dicts with field/language/tuition_fee keys;
    ``scholarships`` is the number of scholarships to attach.
    """

    def _make(programs=None, scholarships: int = 0, **fields) -> int:
        fields.setdefault("university_name", "Test University")
        fields.setdefault("verified", True)
        with test_db.session() as session:
            university = UniversityProfile(**fields)
            for i, program in enumerate(programs or []):
                program = dict(program)
                program.setdefault("name", f"Program {i + 1}")
                program.setdefault("field", "General Studies")
                university.programs.append(Program(**program))
            for i in range(scholarships):
                university.scholarships.append(Scholarship(name=f"Scholarship {i + 1}"))
            session.add(university)
            session.flush()
            return university.id

    return _make

