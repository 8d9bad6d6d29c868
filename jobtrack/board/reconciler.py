"""Board reconciler: optimistic drag-and-drop moves with rollback."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import httpx

from jobtrack.board.client import TrackerAPIError, TrackerClient
from jobtrack.board.state import BoardState, Card
from jobtrack.core.config import settings
from jobtrack.core.exceptions import ApplicationError, OperationTimeoutError
from jobtrack.models.tracked_application import ApplicationStatus

logger = logging.getLogger(__name__)

# Failures that revert the optimistic change instead of propagating
REMOTE_FAILURES = (TrackerAPIError, ApplicationError, httpx.HTTPError)


class MoveInProgressError(Exception):
    """Raised when a card already has a remote call in flight."""

    def __init__(self, job_id: int):
        self.job_id = job_id
        super().__init__(f"Card for job {job_id} has an update in flight")


@dataclass
class MoveResult:
    """Outcome of a drop."""

    job_id: int
    source: ApplicationStatus
    target: ApplicationStatus
    applied: bool
    error: str | None = None


class BoardReconciler:
    """Keeps the local board in step with the tracking API.

    Every change is applied locally first. The full board is snapshotted
    before the change and restored wholesale if the remote call fails or
    exceeds ``timeout``.
    """

    def __init__(
        self,
        client: TrackerClient,
        state: BoardState | None = None,
        timeout: float | None = None,
    ):
        self.client = client
        self.state = state or BoardState()
        self.timeout = timeout or settings.status_update_timeout
        self.error: str | None = None
        self._in_flight: set[int] = set()

    async def load(self, page_size: int = 100) -> BoardState:
        """Build the board from every tracked application of the user."""
        cards = []
        page = 1
        while True:
            data = await self.client.list_applications(page=page, limit=page_size)
            cards.extend(Card.from_api(item) for item in data["items"])
            if page >= data["pages"]:
                break
            page += 1

        self.state = BoardState.from_cards(cards)
        logger.info(f"Loaded {len(cards)} card(s) onto the board")
        return self.state

    def is_busy(self, job_id: int) -> bool:
        return job_id in self._in_flight

    async def move(
        self,
        job_id: int,
        target: ApplicationStatus | str,
        note: str | None = None,
    ) -> MoveResult:
        """Drop a card into the ``target`` column."""
        target = ApplicationStatus(target)
        source, card = self._require_card(job_id)

        if source == target:
            return MoveResult(job_id, source, target, applied=False)
        if self.is_busy(job_id):
            raise MoveInProgressError(job_id)

        snapshot = self.state.snapshot()
        self.state.columns[source].remove(card)
        card.status = target
        self.state.columns[target].append(card)
        self.state.sync_interview_markers(card)

        data = await self._send(
            job_id,
            snapshot,
            lambda: self.client.set_status(job_id, target, note),
            f"move {source.value} -> {target.value}",
        )
        if data is None:
            return MoveResult(job_id, source, target, applied=False, error=self.error)

        self._merge(job_id, data)
        logger.info(f"Moved job {job_id} from '{source.value}' to '{target.value}'")
        return MoveResult(job_id, source, target, applied=True)

    async def add_next_step(self, job_id: int, task: str) -> bool:
        """Append a pending task to a card."""
        return await self._replace_list(
            job_id, "next_steps", lambda steps: steps + [task]
        )

    async def complete_next_step(self, job_id: int, task: str) -> bool:
        """Mark a task done by removing it from the card."""

        def remove(steps: list[str]) -> list[str]:
            if task not in steps:
                raise ValueError(f"Task '{task}' is not pending for job {job_id}")
            steps.remove(task)
            return steps

        return await self._replace_list(job_id, "next_steps", remove)

    async def schedule_interview(self, job_id: int, when: datetime) -> bool:
        """Add the next interview round."""
        return await self._replace_list(
            job_id, "interview_dates", lambda dates: dates + [when]
        )

    async def remove_interview(self, job_id: int, round_number: int) -> bool:
        """Drop an interview round; later rounds move up."""

        def remove(dates: list[datetime]) -> list[datetime]:
            if not 1 <= round_number <= len(dates):
                raise ValueError(f"Job {job_id} has no interview round {round_number}")
            del dates[round_number - 1]
            return dates

        return await self._replace_list(job_id, "interview_dates", remove)

    async def _replace_list(
        self,
        job_id: int,
        field_name: str,
        mutate: Callable[[list], list],
    ) -> bool:
        """Apply a list edit locally and send the whole new list."""
        _, card = self._require_card(job_id)
        if card.application_id is None:
            raise ValueError(f"Card for job {job_id} has not been saved yet")
        if self.is_busy(job_id):
            raise MoveInProgressError(job_id)

        new_list = mutate(list(getattr(card, field_name)))
        snapshot = self.state.snapshot()
        setattr(card, field_name, new_list)
        if field_name == "interview_dates":
            self.state.sync_interview_markers(card)

        data = await self._send(
            job_id,
            snapshot,
            lambda: self.client.update_application(
                card.application_id, **{field_name: new_list}
            ),
            f"update {field_name}",
        )
        if data is None:
            return False

        self._merge(job_id, data)
        return True

    async def _send(
        self,
        job_id: int,
        snapshot: BoardState,
        call: Callable[[], Awaitable[dict[str, Any]]],
        description: str,
    ) -> dict[str, Any] | None:
        """Run a remote call for a card; on failure restore ``snapshot``."""
        self._in_flight.add(job_id)
        try:
            data = await asyncio.wait_for(call(), timeout=self.timeout)
        except asyncio.TimeoutError:
            timeout_error = OperationTimeoutError(
                f"{description} for job {job_id}", self.timeout
            )
            self._rollback(snapshot, job_id, str(timeout_error))
            return None
        except REMOTE_FAILURES as e:
            self._rollback(
                snapshot, job_id, f"Could not {description} for job {job_id}: {e}"
            )
            return None
        finally:
            self._in_flight.discard(job_id)

        self.error = None
        return data

    def _rollback(self, snapshot: BoardState, job_id: int, message: str) -> None:
        self.state.restore(snapshot)
        self.error = message
        logger.warning(f"Rolled back board for job {job_id}: {message}")

    def _merge(self, job_id: int, data: dict[str, Any]) -> None:
        # Another card's rollback may have replaced the card or its column
        found = self.state.find(job_id)
        if found is None:
            return
        column, card = found
        card.merge_server(data)
        if card.status != column:
            self.state.columns[column].remove(card)
            self.state.columns[card.status].append(card)
        self.state.sync_interview_markers(card)

    def _require_card(self, job_id: int) -> tuple[ApplicationStatus, Card]:
        found = self.state.find(job_id)
        if found is None:
            raise KeyError(f"No card for job {job_id} on the board")
        return found
