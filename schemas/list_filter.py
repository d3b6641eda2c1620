"""
Query-string filter for listing a broker's applications.

Dates go through two separate steps. `normalize_date` turns anything
unparseable into None, which is what the query layer consumes.
`parse_list_filter` then rejects a non-empty value that normalized to None,
so callers see INVALID_MINIMUM_DATE_ERROR / INVALID_MAXIMUM_DATE_ERROR
instead of a silently dropped bound.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from constants import INVALID_MAXIMUM_DATE_ERROR, INVALID_MINIMUM_DATE_ERROR
from exceptions import DateRangeError, InvalidDateError, InvalidFilterError
from models.enums import ApplicationStatus, TaskStatus, enum_values

logger = logging.getLogger(__name__)

COMPLETED_FILTER_VALUES = (TaskStatus.COMPLETED, TaskStatus.PENDING)


def normalize_date(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 date or datetime; None when missing or unparseable.

    Naive values are taken as UTC; aware values are converted to UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class BrokerApplicationsFilter(BaseModel):
    """Normalized filter handed to the query layer."""

    model_config = ConfigDict(frozen=True)

    status: list[ApplicationStatus] = Field(default_factory=list)
    completed: Optional[Literal[TaskStatus.COMPLETED, TaskStatus.PENDING]] = None
    minimum_date: Optional[datetime] = None
    maximum_date: Optional[datetime] = None

    @field_validator("minimum_date", "maximum_date", mode="before")
    @classmethod
    def _normalize_dates(cls, v: Any) -> Optional[datetime]:
        return normalize_date(v)


def _supplied(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def parse_list_filter(
    status: Optional[list[str]] = None,
    completed: Optional[str] = None,
    minimum_date: Optional[str] = None,
    maximum_date: Optional[str] = None,
) -> BrokerApplicationsFilter:
    """Validate raw query values and build the filter; nothing is queried on failure."""
    statuses: list[ApplicationStatus] = []
    for value in status or []:
        try:
            statuses.append(ApplicationStatus(value))
        except ValueError:
            logger.debug("Rejected status filter value %r", value)
            raise InvalidFilterError("status", value, enum_values(ApplicationStatus)) from None

    completed_status = None
    if _supplied(completed):
        allowed = [s.value for s in COMPLETED_FILTER_VALUES]
        if completed not in allowed:
            logger.debug("Rejected completed filter value %r", completed)
            raise InvalidFilterError("completed", completed, allowed)
        completed_status = TaskStatus(completed)

    filters = BrokerApplicationsFilter(
        status=statuses,
        completed=completed_status,
        minimum_date=minimum_date,
        maximum_date=maximum_date,
    )

    if _supplied(minimum_date) and filters.minimum_date is None:
        raise InvalidDateError(INVALID_MINIMUM_DATE_ERROR, "minimumDate")
    if _supplied(maximum_date) and filters.maximum_date is None:
        raise InvalidDateError(INVALID_MAXIMUM_DATE_ERROR, "maximumDate")
    if (
        filters.minimum_date is not None
        and filters.maximum_date is not None
        and filters.minimum_date > filters.maximum_date
    ):
        raise DateRangeError()

    return filters
