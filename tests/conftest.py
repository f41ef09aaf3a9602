"""Pytest fixtures for feedrank tests."""
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from feedrank.config.ranking import RankingConfig
from feedrank.models import Experience, Job, Post, Profile

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# TIME / CONFIG
# =============================================================================


@pytest.fixture
def now():
    """Fixed reference time used by every scoring call in the tests."""
    return NOW


@pytest.fixture
def config():
    return RankingConfig()


# =============================================================================
# DOMAIN FIXTURES
# =============================================================================


@pytest.fixture
def profile():
    """Senior Python developer in Sao Paulo (5 years of experience)."""
    return Profile(
        skills=["Python", "Django", "PostgreSQL"],
        location="Sao Paulo, SP",
        sector="Tecnologia",
        headline="Senior Python Developer",
        experience=[
            Experience(
                title="Python Developer",
                company="Acme",
                start_date=NOW - timedelta(days=365 * 4),
                current=True,
            ),
            Experience(
                title="Intern",
                company="Beta",
                start_date=NOW - timedelta(days=365 * 6),
                end_date=NOW - timedelta(days=365 * 5),
            ),
        ],
    )


@pytest.fixture
def make_job():
    """Factory for jobs that match the default profile well."""
    def _make(**overrides) -> Job:
        fields = dict(
            id="job-1",
            title="Python Developer",
            description="Build APIs with Django",
            skills=["python", "django"],
            location="Sao Paulo, SP",
            remote=False,
            level="senior",
            category="Tecnologia",
            created_at=NOW,
        )
        fields.update(overrides)
        return Job(**fields)
    return _make


@pytest.fixture
def make_post():
    """Factory for posts with no engagement."""
    def _make(**overrides) -> Post:
        fields = dict(
            id="post-1",
            content="Hello network",
            author_id="user-1",
            created_at=NOW,
        )
        fields.update(overrides)
        return Post(**fields)
    return _make
