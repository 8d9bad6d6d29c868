"""Local board state: cards grouped into status columns, plus interview markers."""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from jobtrack.models.tracked_application import ApplicationStatus
from jobtrack.schemas.tracking import TrackedApplicationResponse

PLACEHOLDER_LABEL = "Interview to be scheduled"


class MarkerState(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"


@dataclass
class Card:
    """A tracked application as shown on the board."""

    job_id: int
    title: str
    company: str
    status: ApplicationStatus
    application_id: int | None = None
    location: str = ""
    updated_at: datetime | None = None
    next_steps: list[str] = field(default_factory=list)
    interview_dates: list[datetime] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Card":
        record = TrackedApplicationResponse.model_validate(data)
        job = record.job
        return cls(
            job_id=record.job_id,
            title=job.title if job else "",
            company=job.company if job else "",
            location=job.location if job else "",
            status=record.status,
            application_id=record.id,
            updated_at=record.updated_at,
            next_steps=list(record.next_steps),
            interview_dates=list(record.interview_dates),
        )

    def merge_server(self, data: dict[str, Any]) -> None:
        """Take the fields the server owns from an API response."""
        record = TrackedApplicationResponse.model_validate(data)
        self.application_id = record.id
        self.status = record.status
        self.updated_at = record.updated_at
        self.next_steps = list(record.next_steps)
        self.interview_dates = list(record.interview_dates)


@dataclass
class InterviewMarker:
    """One interview round of a card; round numbers start at 1."""

    job_id: int
    company: str
    position: str
    round: int
    scheduled_at: datetime | None = None
    state: MarkerState = MarkerState.CONFIRMED

    @property
    def is_placeholder(self) -> bool:
        return self.scheduled_at is None

    @property
    def label(self) -> str:
        if self.scheduled_at is None:
            return PLACEHOLDER_LABEL
        return f"Round {self.round}: {self.scheduled_at:%Y-%m-%d %H:%M}"


def _empty_columns() -> dict[ApplicationStatus, list[Card]]:
    return {status: [] for status in ApplicationStatus}


@dataclass
class BoardState:
    columns: dict[ApplicationStatus, list[Card]] = field(default_factory=_empty_columns)
    interviews: list[InterviewMarker] = field(default_factory=list)

    @classmethod
    def from_cards(cls, cards: list[Card]) -> "BoardState":
        state = cls()
        for card in cards:
            state.columns[card.status].append(card)
            state.sync_interview_markers(card)
        return state

    def snapshot(self) -> "BoardState":
        return copy.deepcopy(self)

    def restore(self, snapshot: "BoardState") -> None:
        """Replace the whole state with a copy of ``snapshot``."""
        restored = copy.deepcopy(snapshot)
        self.columns = restored.columns
        self.interviews = restored.interviews

    def find(self, job_id: int) -> tuple[ApplicationStatus, Card] | None:
        for status, cards in self.columns.items():
            for card in cards:
                if card.job_id == job_id:
                    return status, card
        return None

    def markers_for(self, job_id: int) -> list[InterviewMarker]:
        return [m for m in self.interviews if m.job_id == job_id]

    def sync_interview_markers(self, card: Card) -> None:
        """Rebuild a card's markers from its interview dates and status.

        Markers are confirmed while the card sits in the interviewing column
        and pending otherwise. An interviewing card without dates gets a
        placeholder; a placeholder survives moving out of the column.
        """
        state = (
            MarkerState.CONFIRMED
            if card.status == ApplicationStatus.INTERVIEWING
            else MarkerState.PENDING
        )
        existing = self.markers_for(card.job_id)

        if card.interview_dates:
            markers = [
                InterviewMarker(
                    job_id=card.job_id,
                    company=card.company,
                    position=card.title,
                    round=index + 1,
                    scheduled_at=when,
                    state=state,
                )
                for index, when in enumerate(card.interview_dates)
            ]
        elif existing or card.status == ApplicationStatus.INTERVIEWING:
            markers = [
                InterviewMarker(
                    job_id=card.job_id,
                    company=card.company,
                    position=card.title,
                    round=1,
                    state=state,
                )
            ]
        else:
            markers = []

        self.interviews = [
            m for m in self.interviews if m.job_id != card.job_id
        ] + markers

    def column_ids(self) -> dict[str, list[int]]:
        """Job ids per non-empty column, in display order."""
        return {
            status.value: [card.job_id for card in cards]
            for status, cards in self.columns.items()
            if cards
        }
