from schemas.application import (
    ApplicationDto,
    ApplicationPublic,
    ApplicationRecord,
    ApplicationUpdate,
    ApplicationUpdateResponse,
    AverageLoanAmountResponse,
    BrokerApplicationDetailResponse,
    BrokerApplicationDto,
    BrokerApplicationPostResponse,
    BrokerApplicationsListResponse,
    parse_application,
    serialize_application,
    to_application_dto,
    to_broker_application_dto,
    validate_application,
)
from schemas.list_filter import BrokerApplicationsFilter, normalize_date, parse_list_filter
from schemas.responses import BadRequestResponse, BrokerApplicationsListBadRequestResponse, SuccessResponse

__all__ = [
    "ApplicationDto",
    "ApplicationPublic",
    "ApplicationRecord",
    "ApplicationUpdate",
    "ApplicationUpdateResponse",
    "AverageLoanAmountResponse",
    "BadRequestResponse",
    "BrokerApplicationDetailResponse",
    "BrokerApplicationDto",
    "BrokerApplicationPostResponse",
    "BrokerApplicationsFilter",
    "BrokerApplicationsListBadRequestResponse",
    "BrokerApplicationsListResponse",
    "SuccessResponse",
    "normalize_date",
    "parse_application",
    "parse_list_filter",
    "serialize_application",
    "to_application_dto",
    "to_broker_application_dto",
    "validate_application",
]
