"""
Application request/response shapes.

Validation, projection and persistence mapping are separate concerns:
`validate_application` checks untrusted input, the `to_*` functions narrow
an ORM row to one response shape, and `models.application.APPLICATION_COLUMNS`
maps attributes to columns.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import EmailStr, Field, PlainSerializer, StringConstraints
from pydantic import ValidationError as PydanticValidationError

from exceptions import FieldViolation, ValidationError, violations_from_errors
from models.application import Application
from models.enums import ApplicationStatus
from schemas.responses import CamelModel, SuccessResponse

Money = Annotated[
    Decimal,
    Field(ge=0, max_digits=10, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]
ShortText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
PhoneNumber = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]


class ApplicationDto(CamelModel):
    """Applicant and financial detail; used for create bodies and the detail view."""

    applicant_name: ShortText
    applicant_email: EmailStr
    applicant_mobile_phone_number: PhoneNumber
    applicant_address: ShortText
    annual_income_before_tax: Money
    incoming_address: ShortText
    incoming_deposit: Money
    incoming_price: Money
    incoming_stamp_duty: Money
    loan_amount: Money
    loan_duration: int = Field(..., ge=1, description="Loan duration in months")
    monthly_expenses: Money
    outgoing_address: ShortText
    outgoing_mortgage: Money
    outgoing_valuation: Money
    savings_contribution: Money


class ApplicationRecord(ApplicationDto):
    """Every externally settable field of an application row."""

    broker_id: Optional[int] = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicationUpdate(CamelModel):
    """Partial update. Omitted fields are left alone; an explicit null is a violation."""

    applicant_name: ShortText = None
    applicant_email: EmailStr = None
    applicant_mobile_phone_number: PhoneNumber = None
    applicant_address: ShortText = None
    annual_income_before_tax: Money = None
    incoming_address: ShortText = None
    incoming_deposit: Money = None
    incoming_price: Money = None
    incoming_stamp_duty: Money = None
    loan_amount: Money = None
    loan_duration: int = Field(None, ge=1)
    monthly_expenses: Money = None
    outgoing_address: ShortText = None
    outgoing_mortgage: Money = None
    outgoing_valuation: Money = None
    savings_contribution: Money = None
    status: ApplicationStatus = None


class ApplicationPublic(ApplicationDto):
    """Full public representation: everything except the key and timestamps."""

    application_id: str
    broker_id: Optional[int] = None
    status: ApplicationStatus


class BrokerApplicationDto(CamelModel):
    id: int
    application_id: str
    created_at: datetime
    status: ApplicationStatus
    loan_amount: Money
    loan_duration: int
    applicant_name: str
    incoming_address: str
    outgoing_address: str


class BrokerApplicationsListResponse(SuccessResponse):
    applications: list[BrokerApplicationDto] = Field(..., description="The broker's applications")


class BrokerApplicationPostResponse(SuccessResponse):
    loan_amount: Money
    check_amount: bool


class BrokerApplicationDetailResponse(SuccessResponse):
    application_id: str
    application: ApplicationDto


class ApplicationUpdateResponse(SuccessResponse):
    application: ApplicationPublic


class AverageLoanAmountResponse(SuccessResponse):
    average_loan_amount: Money


def validate_application(data: dict[str, Any], schema: type[CamelModel] = ApplicationRecord) -> list[FieldViolation]:
    """Check untrusted input against the application field rules.

    Returns every violation rather than stopping at the first; an empty
    list means the input is valid.
    """
    try:
        schema.model_validate(data)
    except PydanticValidationError as e:
        return violations_from_errors(e.errors())
    return []


def parse_application(data: dict[str, Any], schema: type[CamelModel] = ApplicationDto):
    """Validate and return the typed payload, or raise ValidationError listing all problems."""
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(violations_from_errors(e.errors())) from None


def to_application_dto(app: Application) -> ApplicationDto:
    return ApplicationDto(
        applicant_name=app.applicant_name,
        applicant_email=app.applicant_email,
        applicant_mobile_phone_number=app.applicant_mobile_phone_number,
        applicant_address=app.applicant_address,
        annual_income_before_tax=app.annual_income_before_tax,
        incoming_address=app.incoming_address,
        incoming_deposit=app.incoming_deposit,
        incoming_price=app.incoming_price,
        incoming_stamp_duty=app.incoming_stamp_duty,
        loan_amount=app.loan_amount,
        loan_duration=app.loan_duration,
        monthly_expenses=app.monthly_expenses,
        outgoing_address=app.outgoing_address,
        outgoing_mortgage=app.outgoing_mortgage,
        outgoing_valuation=app.outgoing_valuation,
        savings_contribution=app.savings_contribution,
    )


def to_broker_application_dto(app: Application) -> BrokerApplicationDto:
    """Summary row for list views; leaves out the financial detail."""
    return BrokerApplicationDto(
        id=app.id,
        application_id=app.application_id,
        created_at=app.created_at,
        status=app.status,
        loan_amount=app.loan_amount,
        loan_duration=app.loan_duration,
        applicant_name=app.applicant_name,
        incoming_address=app.incoming_address,
        outgoing_address=app.outgoing_address,
    )


def serialize_application(app: Application) -> ApplicationPublic:
    dto = to_application_dto(app)
    return ApplicationPublic(
        **dto.model_dump(),
        application_id=app.application_id,
        broker_id=app.broker_id,
        status=app.status,
    )
