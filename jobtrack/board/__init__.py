"""Client-side board: status columns with optimistic moves."""

from jobtrack.board.client import TrackerAPIError, TrackerClient
from jobtrack.board.reconciler import BoardReconciler, MoveInProgressError, MoveResult
from jobtrack.board.state import BoardState, Card, InterviewMarker, MarkerState

__all__ = [
    "BoardReconciler",
    "BoardState",
    "Card",
    "InterviewMarker",
    "MarkerState",
    "MoveInProgressError",
    "MoveResult",
    "TrackerAPIError",
    "TrackerClient",
]
