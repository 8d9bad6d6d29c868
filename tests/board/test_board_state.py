"""Tests for BoardState."""

from datetime import datetime

from jobtrack.board import BoardState, Card, MarkerState
from jobtrack.models import ApplicationStatus


def card(job_id, status, **kwargs):
    return Card(
        job_id=job_id,
        title=f"Job {job_id}",
        company="Acme",
        status=ApplicationStatus(status),
        **kwargs,
    )


class TestBoardState:
    """Tests for the local board state."""

    def test_every_status_has_a_column(self):
        """Test that empty columns exist for all statuses."""
        state = BoardState()

        assert list(state.columns) == list(ApplicationStatus)
        assert state.column_ids() == {}

    def test_from_cards_groups_in_order(self):
        """Test grouping keeps input order within a column."""
        state = BoardState.from_cards(
            [card(1, "pending"), card(2, "applied"), card(3, "pending")]
        )

        assert state.column_ids() == {"pending": [1, 3], "applied": [2]}

    def test_snapshot_is_independent(self):
        """Test that changes after a snapshot do not leak into it."""
        state = BoardState.from_cards([card(1, "pending"), card(2, "pending")])
        snapshot = state.snapshot()

        moved = state.columns[ApplicationStatus.PENDING].pop(0)
        moved.status = ApplicationStatus.APPLIED
        state.columns[ApplicationStatus.APPLIED].append(moved)

        assert snapshot.column_ids() == {"pending": [1, 2]}

        state.restore(snapshot)
        assert state.column_ids() == {"pending": [1, 2]}
        assert state.find(1)[1].status == ApplicationStatus.PENDING

    def test_restore_can_be_repeated(self):
        """Test that restoring does not share objects with the snapshot."""
        state = BoardState.from_cards([card(1, "pending")])
        snapshot = state.snapshot()

        state.restore(snapshot)
        state.find(1)[1].status = ApplicationStatus.OFFER

        assert snapshot.find(1)[1].status == ApplicationStatus.PENDING

    def test_interviewing_card_without_dates_gets_placeholder(self):
        """Test the placeholder marker."""
        state = BoardState.from_cards([card(1, "interviewing")])

        markers = state.markers_for(1)
        assert len(markers) == 1
        assert markers[0].is_placeholder
        assert markers[0].round == 1

    def test_one_marker_per_round(self):
        """Test markers for each scheduled round."""
        dates = [datetime(2026, 3, 1, 10, 0), datetime(2026, 3, 9, 16, 0)]
        state = BoardState.from_cards(
            [card(1, "interviewing", interview_dates=dates)]
        )

        markers = state.markers_for(1)
        assert [m.round for m in markers] == [1, 2]
        assert [m.scheduled_at for m in markers] == dates
        assert {m.state for m in markers} == {MarkerState.CONFIRMED}

    def test_card_outside_interviewing_without_dates_has_no_markers(self):
        """Test that ordinary cards carry no markers."""
        state = BoardState.from_cards([card(1, "applied")])

        assert state.interviews == []

    def test_placeholder_becomes_pending_when_card_leaves(self):
        """Test that the placeholder stays but turns pending."""
        state = BoardState.from_cards([card(1, "interviewing")])
        _, moved = state.find(1)
        moved.status = ApplicationStatus.REJECTED

        state.sync_interview_markers(moved)

        markers = state.markers_for(1)
        assert len(markers) == 1
        assert markers[0].state == MarkerState.PENDING
