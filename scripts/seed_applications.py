"""
Seed a demo broker with a handful of applications and tasks.
Run: python -m scripts.seed_applications (from the project root).
"""
import asyncio
import logging
import os
import sys
from decimal import Decimal

# Add parent so we can import from the project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database import AsyncSessionLocal, init_db
from models import Application, ApplicationStatus, Broker, Task, TaskStatus

logger = logging.getLogger(__name__)

BROKER_DATA = {"name": "Harbour Mortgage Brokers", "email": "team@harbourbrokers.example"}

APPLICATIONS_DATA = [
    {
        "applicant_name": "Jane Citizen",
        "applicant_email": "jane@example.com",
        "applicant_mobile_phone_number": "0400000001",
        "applicant_address": "1 Example St, Sydney",
        "annual_income_before_tax": Decimal("120000.00"),
        "incoming_address": "5 Harbour Rd, Sydney",
        "incoming_deposit": Decimal("150000.00"),
        "incoming_price": Decimal("900000.00"),
        "incoming_stamp_duty": Decimal("35000.00"),
        "loan_amount": Decimal("600000.00"),
        "loan_duration": 360,
        "monthly_expenses": Decimal("3500.00"),
        "outgoing_address": "1 Example St, Sydney",
        "outgoing_mortgage": Decimal("200000.00"),
        "outgoing_valuation": Decimal("650000.00"),
        "savings_contribution": Decimal("50000.00"),
        "status": ApplicationStatus.IN_PROGRESS,
        "tasks": [
            ("Verify payslips", TaskStatus.COMPLETED),
            ("Order valuation", TaskStatus.PENDING),
        ],
    },
    {
        "applicant_name": "Sam Lee",
        "applicant_email": "sam.lee@example.com",
        "applicant_mobile_phone_number": "0400000002",
        "applicant_address": "22 Park Ave, Melbourne",
        "annual_income_before_tax": Decimal("95000.00"),
        "incoming_address": "8 River Ln, Melbourne",
        "incoming_deposit": Decimal("80000.00"),
        "incoming_price": Decimal("640000.00"),
        "incoming_stamp_duty": Decimal("28000.00"),
        "loan_amount": Decimal("480000.00"),
        "loan_duration": 300,
        "monthly_expenses": Decimal("2800.00"),
        "outgoing_address": "22 Park Ave, Melbourne",
        "outgoing_mortgage": Decimal("0.00"),
        "outgoing_valuation": Decimal("0.00"),
        "savings_contribution": Decimal("40000.00"),
        "status": ApplicationStatus.COMPLETED,
        "tasks": [("Verify identity", TaskStatus.COMPLETED)],
    },
    {
        "applicant_name": "Priya Patel",
        "applicant_email": "priya@example.com",
        "applicant_mobile_phone_number": "0400000003",
        "applicant_address": "3 Hill St, Brisbane",
        "annual_income_before_tax": Decimal("150000.00"),
        "incoming_address": "12 Bay View, Brisbane",
        "incoming_deposit": Decimal("200000.00"),
        "incoming_price": Decimal("1100000.00"),
        "incoming_stamp_duty": Decimal("42000.00"),
        "loan_amount": Decimal("750000.00"),
        "loan_duration": 360,
        "monthly_expenses": Decimal("4200.00"),
        "outgoing_address": "3 Hill St, Brisbane",
        "outgoing_mortgage": Decimal("310000.00"),
        "outgoing_valuation": Decimal("720000.00"),
        "savings_contribution": Decimal("60000.00"),
        "status": ApplicationStatus.ON_HOLD,
        "tasks": [],
    },
]


async def seed_broker(session: AsyncSession) -> Broker:
    result = await session.execute(select(Broker).where(Broker.email == BROKER_DATA["email"]))
    broker = result.scalar_one_or_none()
    if broker is None:
        broker = Broker(**BROKER_DATA)
        session.add(broker)
        await session.flush()
        logger.info("Created broker %s (id=%s)", broker.name, broker.id)
    return broker


async def seed_applications(session: AsyncSession, broker: Broker) -> int:
    created = 0
    for data in APPLICATIONS_DATA:
        data = dict(data)
        tasks = data.pop("tasks")
        result = await session.execute(
            select(Application).where(
                Application.applicant_mobile_phone_number == data["applicant_mobile_phone_number"]
            )
        )
        if result.scalar_one_or_none() is not None:
            continue
        app = Application(**data, broker_id=broker.id)
        app.tasks = [Task(description=description, status=status) for description, status in tasks]
        session.add(app)
        created += 1
    await session.flush()
    return created


async def main():
    await init_db()
    async with AsyncSessionLocal() as session:
        broker = await seed_broker(session)
        created = await seed_applications(session, broker)
        await session.commit()
    logger.info("Seeded %d applications for broker id %s", created, broker.id)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
