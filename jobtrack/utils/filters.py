"""Filtering and ordering for tracked application listings."""

from sqlalchemy import ColumnElement, or_
from sqlalchemy.sql.elements import UnaryExpression

from jobtrack.core.exceptions import ValidationError
from jobtrack.models.job import Job
from jobtrack.models.tracked_application import ApplicationStatus, TrackedApplication

SORTABLE_FIELDS = {
    "created_at": TrackedApplication.created_at,
    "updated_at": TrackedApplication.updated_at,
    "status": TrackedApplication.status,
    "reminder_date": TrackedApplication.reminder_date,
}


class TrackedApplicationFilter:
    """Builds WHERE and ORDER BY clauses for a user's listing query."""

    def __init__(
        self,
        user_id: str,
        status: ApplicationStatus | None = None,
        search: str | None = None,
        favorite: bool | None = None,
        sort: str = "-created_at",
    ):
        self.user_id = user_id
        self.status = status
        self.search = search.strip() if search else None
        self.favorite = favorite
        self.sort = sort

    @property
    def needs_job_join(self) -> bool:
        return bool(self.search)

    def conditions(self) -> list[ColumnElement[bool]]:
        """Conditions to AND together for the listing."""
        clauses: list[ColumnElement[bool]] = [
            TrackedApplication.user_id == self.user_id
        ]

        if self.status is not None:
            clauses.append(TrackedApplication.status == self.status.value)

        if self.favorite is not None:
            clauses.append(TrackedApplication.is_favorite.is_(self.favorite))

        if self.search:
            pattern = f"%{self.search}%"
            clauses.append(
                or_(
                    Job.title.ilike(pattern),
                    Job.company.ilike(pattern),
                    Job.location.ilike(pattern),
                )
            )

        return clauses

    def ordering(self) -> list[UnaryExpression]:
        """ORDER BY terms; '-field' sorts descending."""
        descending = self.sort.startswith("-")
        name = self.sort.lstrip("-+")
        column = SORTABLE_FIELDS.get(name)
        if column is None:
            allowed = ", ".join(sorted(SORTABLE_FIELDS))
            raise ValidationError(
                f"Cannot sort by '{name}'. Allowed fields: {allowed}", field="sort"
            )
        primary = column.desc() if descending else column.asc()
        tiebreak = (
            TrackedApplication.id.desc() if descending else TrackedApplication.id.asc()
        )
        return [primary, tiebreak]
