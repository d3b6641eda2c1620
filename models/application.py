"""
Loan application rows: one per application submitted through a broker.
"""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import relationship

from database import Base
from models.enums import ApplicationStatus, enum_values

APPLICATION_ID_PREFIX = "A"
APPLICATION_ID_WIDTH = 5

# Attribute -> column name. Kept apart from validation (schemas.application)
# and projection so each concern can change on its own.
APPLICATION_COLUMNS: dict[str, str] = {
    "id": "id",
    "applicant_name": "applicant_name",
    "applicant_email": "applicant_email",
    "applicant_mobile_phone_number": "applicant_mobile_phone_number",
    "applicant_address": "applicant_address",
    "broker_id": "broker_id",
    "annual_income_before_tax": "annual_income_before_tax",
    "incoming_address": "incoming_address",
    "incoming_deposit": "incoming_deposit",
    "incoming_price": "incoming_price",
    "incoming_stamp_duty": "incoming_stamp_duty",
    "loan_amount": "loan_amount",
    "loan_duration": "loan_duration",
    "monthly_expenses": "monthly_expenses",
    "outgoing_address": "outgoing_address",
    "outgoing_mortgage": "outgoing_mortgage",
    "outgoing_valuation": "outgoing_valuation",
    "savings_contribution": "savings_contribution",
    "status": "status",
    "created_at": "created_at",
    "updated_at": "updated_at",
}

MONETARY_FIELDS = (
    "annual_income_before_tax",
    "incoming_deposit",
    "incoming_price",
    "incoming_stamp_duty",
    "loan_amount",
    "monthly_expenses",
    "outgoing_mortgage",
    "outgoing_valuation",
    "savings_contribution",
)

_CENTS = Decimal("0.01")


def format_application_id(pk: int) -> str:
    """Branded display id, e.g. 7 -> 'A00007'. Wider keys are never truncated."""
    return f"{APPLICATION_ID_PREFIX}{str(pk).zfill(APPLICATION_ID_WIDTH)}"


def _money(attr: str) -> Column:
    return Column(APPLICATION_COLUMNS[attr], Numeric(10, 2), nullable=False)


class Application(Base):
    __tablename__ = "applications"

    id = Column(APPLICATION_COLUMNS["id"], Integer, primary_key=True, autoincrement=True)
    applicant_name = Column(APPLICATION_COLUMNS["applicant_name"], String(50), nullable=False)
    applicant_email = Column(APPLICATION_COLUMNS["applicant_email"], String(255), nullable=False)
    applicant_mobile_phone_number = Column(
        APPLICATION_COLUMNS["applicant_mobile_phone_number"], String(20), unique=True, nullable=False,
    )
    applicant_address = Column(APPLICATION_COLUMNS["applicant_address"], String(50), nullable=False)
    broker_id = Column(
        APPLICATION_COLUMNS["broker_id"],
        Integer,
        ForeignKey("brokers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    annual_income_before_tax = _money("annual_income_before_tax")
    incoming_address = Column(APPLICATION_COLUMNS["incoming_address"], String(50), nullable=False)
    incoming_deposit = _money("incoming_deposit")
    incoming_price = _money("incoming_price")
    incoming_stamp_duty = _money("incoming_stamp_duty")
    loan_amount = _money("loan_amount")
    loan_duration = Column(APPLICATION_COLUMNS["loan_duration"], Integer, nullable=False)
    monthly_expenses = _money("monthly_expenses")
    outgoing_address = Column(APPLICATION_COLUMNS["outgoing_address"], String(50), nullable=False)
    outgoing_mortgage = _money("outgoing_mortgage")
    outgoing_valuation = _money("outgoing_valuation")
    savings_contribution = _money("savings_contribution")
    status = Column(
        APPLICATION_COLUMNS["status"],
        Enum(ApplicationStatus, name="enum_application_status", values_callable=enum_values),
        nullable=False,
        default=ApplicationStatus.PENDING,
        index=True,
    )
    created_at = Column(
        APPLICATION_COLUMNS["created_at"], DateTime(timezone=True), server_default=func.now(), nullable=False,
    )
    updated_at = Column(
        APPLICATION_COLUMNS["updated_at"],
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    broker = relationship("Broker", back_populates="applications")
    tasks = relationship(
        "Task", back_populates="application", cascade="all, delete-orphan", passive_deletes=True,
    )

    @property
    def application_id(self) -> str | None:
        """Display id derived from the primary key; None until the row is flushed."""
        if self.id is None:
            return None
        return format_application_id(self.id)

    @classmethod
    async def get_average_loan_amount(cls, session: AsyncSession) -> Decimal:
        """Mean loan amount across every application; 0 when there are none."""
        result = await session.execute(select(func.avg(cls.loan_amount)))
        average = result.scalar()
        if average is None:
            return Decimal("0")
        return Decimal(str(average)).quantize(_CENTS)

    def __repr__(self):
        return f"<Application(id={self.id}, status='{self.status}')>"
