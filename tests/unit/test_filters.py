"""Tests for tracked application listing filters."""

import pytest
from sqlalchemy.dialects import sqlite

from jobtrack.core.exceptions import ValidationError
from jobtrack.models import ApplicationStatus
from jobtrack.utils.filters import TrackedApplicationFilter


def compile_clause(clause) -> str:
    return str(
        clause.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True})
    )


class TestTrackedApplicationFilter:
    """Tests for TrackedApplicationFilter."""

    def test_user_only(self):
        """Test that the user condition is always present."""
        filter_ = TrackedApplicationFilter(user_id="user-1")
        clauses = filter_.conditions()

        assert len(clauses) == 1
        assert "tracked_applications.user_id = 'user-1'" in compile_clause(clauses[0])
        assert filter_.needs_job_join is False

    def test_status_and_favorite(self):
        """Test status and favorite conditions."""
        filter_ = TrackedApplicationFilter(
            user_id="user-1", status=ApplicationStatus.OFFER, favorite=True
        )
        compiled = [compile_clause(c) for c in filter_.conditions()]

        assert len(compiled) == 3
        assert "tracked_applications.status = 'offer'" in compiled[1]
        assert "tracked_applications.is_favorite IS" in compiled[2]

    def test_search_requires_job_join(self):
        """Test that search matches job fields."""
        filter_ = TrackedApplicationFilter(user_id="user-1", search="  acme  ")
        compiled = compile_clause(filter_.conditions()[-1])

        assert filter_.needs_job_join is True
        assert "jobs.title" in compiled
        assert "jobs.company" in compiled
        assert "jobs.location" in compiled
        assert "%acme%" in compiled

    def test_blank_search_ignored(self):
        """Test that whitespace-only search adds no condition."""
        filter_ = TrackedApplicationFilter(user_id="user-1", search="   ")

        assert filter_.needs_job_join is False
        assert len(filter_.conditions()) == 1

    @pytest.mark.parametrize(
        "sort, expected",
        [
            ("-created_at", "tracked_applications.created_at DESC"),
            ("created_at", "tracked_applications.created_at ASC"),
            ("+status", "tracked_applications.status ASC"),
            ("-reminder_date", "tracked_applications.reminder_date DESC"),
        ],
    )
    def test_ordering(self, sort, expected):
        """Test sort parsing with an id tiebreak."""
        primary, tiebreak = TrackedApplicationFilter(
            user_id="user-1", sort=sort
        ).ordering()

        assert compile_clause(primary) == expected
        assert compile_clause(tiebreak).startswith("tracked_applications.id")

    def test_unknown_sort_rejected(self):
        """Test that unsupported sort fields are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            TrackedApplicationFilter(user_id="user-1", sort="salary").ordering()

        assert exc_info.value.field == "sort"
