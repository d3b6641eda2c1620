from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Header, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from exceptions import ApplicationNotFoundError, UnauthorizedError
from models import Application
from schemas.application import (
    ApplicationDto,
    ApplicationUpdate,
    ApplicationUpdateResponse,
    BrokerApplicationDetailResponse,
    BrokerApplicationPostResponse,
    BrokerApplicationsListResponse,
    parse_application,
    serialize_application,
    to_application_dto,
    to_broker_application_dto,
)
from schemas.list_filter import BrokerApplicationsFilter, parse_list_filter
from schemas.responses import BadRequestResponse, BrokerApplicationsListBadRequestResponse
from services import applications as app_service

router = APIRouter(prefix="/api/broker", tags=["broker"])


async def get_current_broker_id(x_broker_id: Optional[str] = Header(None)) -> int:
    """Broker identity as established upstream by the auth layer."""
    if x_broker_id is None or not x_broker_id.strip().isdecimal():
        raise UnauthorizedError()
    try:
        return int(x_broker_id)
    except ValueError:
        raise UnauthorizedError() from None


def get_list_filter(
    status: Optional[list[str]] = Query(None, description="Optional flag for application status"),
    completed: Optional[str] = Query(None, description="Optional flag for applications with incomplete tasks"),
    minimum_date: Optional[str] = Query(
        None, alias="minimumDate", description="Minimum date for the application submission",
    ),
    maximum_date: Optional[str] = Query(
        None, alias="maximumDate", description="Maximum date for the application submission",
    ),
) -> BrokerApplicationsFilter:
    return parse_list_filter(
        status=status,
        completed=completed,
        minimum_date=minimum_date,
        maximum_date=maximum_date,
    )


async def _load_application(db: AsyncSession, broker_id: int, application_id: int) -> Application:
    app = await app_service.get_broker_application(db, broker_id, application_id)
    if app is None:
        raise ApplicationNotFoundError(application_id)
    return app


@router.get(
    "/applications",
    response_model=BrokerApplicationsListResponse,
    responses={400: {"model": BrokerApplicationsListBadRequestResponse}},
)
async def list_applications(
    filters: BrokerApplicationsFilter = Depends(get_list_filter),
    broker_id: int = Depends(get_current_broker_id),
    db: AsyncSession = Depends(get_db),
):
    apps = await app_service.list_broker_applications(db, broker_id, filters)
    return BrokerApplicationsListResponse(applications=[to_broker_application_dto(a) for a in apps])


@router.post(
    "/applications",
    status_code=201,
    response_model=BrokerApplicationPostResponse,
    responses={422: {"model": BadRequestResponse}},
)
async def create_application(
    body: dict[str, Any] = Body(...),
    broker_id: int = Depends(get_current_broker_id),
    db: AsyncSession = Depends(get_db),
):
    payload = parse_application(body, ApplicationDto)
    app, check_amount = await app_service.create_application(db, broker_id, payload)
    return BrokerApplicationPostResponse(loan_amount=app.loan_amount, check_amount=check_amount)


@router.get(
    "/applications/{application_id}",
    response_model=BrokerApplicationDetailResponse,
    responses={404: {"model": BadRequestResponse}},
)
async def get_application(
    application_id: int,
    broker_id: int = Depends(get_current_broker_id),
    db: AsyncSession = Depends(get_db),
):
    app = await _load_application(db, broker_id, application_id)
    return BrokerApplicationDetailResponse(
        application_id=app.application_id,
        application=to_application_dto(app),
    )


@router.patch(
    "/applications/{application_id}",
    response_model=ApplicationUpdateResponse,
    responses={404: {"model": BadRequestResponse}, 422: {"model": BadRequestResponse}},
)
async def update_application(
    application_id: int,
    body: dict[str, Any] = Body(...),
    broker_id: int = Depends(get_current_broker_id),
    db: AsyncSession = Depends(get_db),
):
    changes = parse_application(body, ApplicationUpdate)
    app = await _load_application(db, broker_id, application_id)
    app = await app_service.update_application(db, app, changes.model_dump(exclude_unset=True))
    return ApplicationUpdateResponse(application=serialize_application(app))


@router.delete("/applications/{application_id}", status_code=204)
async def delete_application(
    application_id: int,
    broker_id: int = Depends(get_current_broker_id),
    db: AsyncSession = Depends(get_db),
):
    app = await _load_application(db, broker_id, application_id)
    await app_service.delete_application(db, app)
    return Response(status_code=204)
