"""
Shared builders and base test cases.
Database tests run against a fresh in-memory SQLite database per test.
"""
import unittest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import patch

from fastapi.testclient import TestClient

from database import create_engine, create_sessionmaker, get_db, init_db
from main import app
from models import Application, ApplicationStatus, Broker, Task

TEST_DATABASE_URL = "sqlite+aiosqlite://"
BROKER_HEADERS = {"X-Broker-Id": "1"}


def application_payload(**overrides):
    """camelCase body accepted by POST /api/broker/applications."""
    payload = {
        "applicantName": "Jane Citizen",
        "applicantEmail": "jane.citizen@mailbox.org",
        "applicantMobilePhoneNumber": "0400000001",
        "applicantAddress": "1 Example St, Sydney",
        "annualIncomeBeforeTax": 120000,
        "incomingAddress": "5 Harbour Rd, Sydney",
        "incomingDeposit": 150000,
        "incomingPrice": 900000,
        "incomingStampDuty": 35000.5,
        "loanAmount": 600000,
        "loanDuration": 360,
        "monthlyExpenses": 3500,
        "outgoingAddress": "1 Example St, Sydney",
        "outgoingMortgage": 200000,
        "outgoingValuation": 650000,
        "savingsContribution": 50000,
    }
    payload.update(overrides)
    return payload


def application_row(**overrides):
    """Keyword arguments for an Application ORM row."""
    row = {
        "applicant_name": "Jane Citizen",
        "applicant_email": "jane.citizen@mailbox.org",
        "applicant_mobile_phone_number": "0400000001",
        "applicant_address": "1 Example St, Sydney",
        "annual_income_before_tax": Decimal("120000.00"),
        "incoming_address": "5 Harbour Rd, Sydney",
        "incoming_deposit": Decimal("150000.00"),
        "incoming_price": Decimal("900000.00"),
        "incoming_stamp_duty": Decimal("35000.50"),
        "loan_amount": Decimal("600000.00"),
        "loan_duration": 360,
        "monthly_expenses": Decimal("3500.00"),
        "outgoing_address": "1 Example St, Sydney",
        "outgoing_mortgage": Decimal("200000.00"),
        "outgoing_valuation": Decimal("650000.00"),
        "savings_contribution": Decimal("50000.00"),
        "status": ApplicationStatus.PENDING,
    }
    row.update(overrides)
    return row


def utc(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


async def seed(session, broker_id=1, tasks=(), **overrides):
    """Insert an application (with optional (description, status) tasks) and return it."""
    app = Application(**application_row(broker_id=broker_id, **overrides))
    app.tasks = [Task(description=description, status=status) for description, status in tasks]
    session.add(app)
    await session.flush()
    return app


async def seed_broker(session, broker_id=1):
    session.add(Broker(id=broker_id, name=f"Broker {broker_id}", email=f"broker{broker_id}@mailbox.org"))
    await session.flush()


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.engine = create_engine(TEST_DATABASE_URL)
        await init_db(self.engine)
        self.session = create_sessionmaker(self.engine)()
        await seed_broker(self.session, 1)
        await seed_broker(self.session, 2)

    async def asyncTearDown(self):
        await self.session.close()
        await self.engine.dispose()


class ApiTestCase(unittest.TestCase):
    """Runs the real app with get_db pointed at a per-test in-memory database."""

    def setUp(self):
        self.engine = create_engine(TEST_DATABASE_URL)
        self.sessionmaker = create_sessionmaker(self.engine)

        async def _get_test_db():
            async with self.sessionmaker() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        async def _init_test_db():
            await init_db(self.engine)

        # Startup creates the schema on the test engine rather than the configured one
        self.init_db_patcher = patch("main.init_db", _init_test_db)
        self.init_db_patcher.start()
        app.dependency_overrides[get_db] = _get_test_db
        self.client = TestClient(app)
        self.client.__enter__()
        self.run_async(self._seed_brokers)

    def tearDown(self):
        self.run_async(self.engine.dispose)
        self.client.__exit__(None, None, None)
        app.dependency_overrides.clear()
        self.init_db_patcher.stop()

    def run_async(self, func, *args):
        """Run a coroutine function on the client's event loop."""
        return self.client.portal.call(func, *args)

    async def _seed_brokers(self):
        async with self.sessionmaker() as session:
            await seed_broker(session, 1)
            await seed_broker(session, 2)
            await session.commit()

    def seed_application(self, **kwargs):
        async def _seed():
            async with self.sessionmaker() as session:
                app = await seed(session, **kwargs)
                await session.commit()
                return app.id

        return self.run_async(_seed)
