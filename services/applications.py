from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import and_, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from exceptions import FieldViolation, ValidationError
from models import Application, ApplicationStatus, Task, TaskStatus
from schemas.application import ApplicationDto
from schemas.list_filter import BrokerApplicationsFilter

logger = logging.getLogger(__name__)

PHONE_NUMBER_FIELD = "applicantMobilePhoneNumber"
PHONE_NUMBER_TAKEN = "Mobile phone number is already registered to another application"


def _open_task_exists():
    """Correlated EXISTS: the application has a task that is not completed."""
    return exists().where(
        and_(Task.application_id == Application.id, Task.status != TaskStatus.COMPLETED)
    )


def apply_list_filter(stmt, filters: BrokerApplicationsFilter):
    """Add WHERE clauses for each populated filter field."""
    if filters.status:
        stmt = stmt.where(Application.status.in_(filters.status))
    if filters.completed == TaskStatus.COMPLETED:
        stmt = stmt.where(~_open_task_exists())
    elif filters.completed == TaskStatus.PENDING:
        stmt = stmt.where(_open_task_exists())
    if filters.minimum_date is not None:
        stmt = stmt.where(Application.created_at >= filters.minimum_date)
    if filters.maximum_date is not None:
        stmt = stmt.where(Application.created_at <= filters.maximum_date)
    return stmt


async def list_broker_applications(
    session: AsyncSession,
    broker_id: int,
    filters: BrokerApplicationsFilter,
) -> list[Application]:
    """Applications owned by the broker that match the filter, newest first."""
    stmt = (
        select(Application)
        .where(Application.broker_id == broker_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
    )
    stmt = apply_list_filter(stmt, filters)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_broker_application(
    session: AsyncSession,
    broker_id: int,
    application_id: int,
) -> Application | None:
    """Return the application only if it belongs to the broker."""
    result = await session.execute(
        select(Application).where(
            Application.id == application_id,
            Application.broker_id == broker_id,
        )
    )
    return result.scalar_one_or_none()


def _phone_number_taken() -> ValidationError:
    return ValidationError([FieldViolation(PHONE_NUMBER_FIELD, PHONE_NUMBER_TAKEN)])


async def ensure_phone_number_available(
    session: AsyncSession,
    phone_number: str,
    exclude_id: int | None = None,
) -> None:
    """Raise ValidationError if another application already uses the number."""
    stmt = select(Application.id).where(Application.applicant_mobile_phone_number == phone_number)
    if exclude_id is not None:
        stmt = stmt.where(Application.id != exclude_id)
    if (await session.execute(stmt.limit(1))).scalar() is not None:
        raise _phone_number_taken()


async def _flush(session: AsyncSession) -> None:
    """Flush, reporting a concurrent duplicate phone number as a validation error."""
    try:
        await session.flush()
    except IntegrityError as e:
        if "applicant_mobile_phone_number" in str(e.orig):
            raise _phone_number_taken() from e
        raise


def compute_check_amount(loan_amount: Decimal, average: Decimal, ratio: float | None = None) -> bool:
    """True when the loan amount is high enough against the average to need a manual check."""
    if ratio is None:
        ratio = settings.check_amount_ratio
    if average <= 0:
        return False
    return Decimal(loan_amount) > Decimal(average) * Decimal(str(ratio))


async def create_application(
    session: AsyncSession,
    broker_id: int,
    payload: ApplicationDto,
) -> tuple[Application, bool]:
    """Insert a Pending application for the broker; returns it with its checkAmount flag."""
    await ensure_phone_number_available(session, payload.applicant_mobile_phone_number)
    average = await Application.get_average_loan_amount(session)
    app = Application(
        **payload.model_dump(),
        broker_id=broker_id,
        status=ApplicationStatus.PENDING,
    )
    session.add(app)
    await _flush(session)
    check_amount = compute_check_amount(app.loan_amount, average)
    logger.info(
        "Created application %s for broker %s (check_amount=%s)",
        app.application_id, broker_id, check_amount,
    )
    return app, check_amount


async def update_application(
    session: AsyncSession,
    app: Application,
    changes: dict[str, Any],
) -> Application:
    """Apply field edits and status transitions."""
    phone_number = changes.get("applicant_mobile_phone_number")
    if phone_number is not None and phone_number != app.applicant_mobile_phone_number:
        await ensure_phone_number_available(session, phone_number, exclude_id=app.id)
    previous_status = app.status
    for field, value in changes.items():
        setattr(app, field, value)
    await _flush(session)
    await session.refresh(app)
    if "status" in changes and changes["status"] != previous_status:
        logger.info(
            "Application %s status %s -> %s",
            app.application_id, getattr(previous_status, "value", previous_status), app.status.value,
        )
    return app


async def delete_application(session: AsyncSession, app: Application) -> None:
    """Delete the application; its tasks go with it."""
    application_id = app.application_id
    await session.delete(app)
    await session.flush()
    logger.info("Deleted application %s", application_id)
