import os

# Debe definirse antes de importar la app: Settings se carga al importar
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["ALLOW_INSECURE_BYPASS"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["MAIL_SUPPRESS_SEND"] = "true"
os.environ["APP_TIMEZONE"] = "Pacific/Port_Moresby"

from datetime import date, datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app import create_app
from app.apis.deps import get_clock, get_db, get_notifier
from app.cores.db import Base
from app.cores.environment import Environment
from app.cores.security import generate_uid, get_password_hash
from app.models import AppointmentTimeSlot, BiometricLocation, User
from app.services.externals.email_service import NotificationError

# Lunes 7 de enero de 2030, 10:00 en Port Moresby (UTC+10)
START = datetime(2030, 1, 7, 0, 0, tzinfo=timezone.utc)
NEXT_MONDAY = date(2030, 1, 14)
NEXT_TUESDAY = date(2030, 1, 15)
NEXT_SATURDAY = date(2030, 1, 12)
DEFAULT_PASSWORD = "TestPass123!"


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FakeNotifier:
    """Guarda los correos en memoria; con `fail=True` simula un SMTP caído."""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_template(self, template: str, recipient: str, **context) -> None:
        if self.fail:
            raise NotificationError("SMTP unavailable")
        self.sent.append({"template": template, "recipient": recipient, **context})

    async def send_best_effort(self, template: str, recipient: str, **context) -> bool:
        try:
            await self.send_template(template, recipient, **context)
            return True
        except NotificationError:
            return False

    def last(self, template: str) -> dict:
        matches = [mail for mail in self.sent if mail["template"] == template]
        assert matches, f"no se envió ningún correo '{template}'"
        return matches[-1]

    def last_code(self, template: str) -> str:
        return self.last(template)["code"]


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def environment():
    return Environment(name="test")


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory, notifier, clock, environment):
    app = create_app(environment)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(db, clock):
    async def _make_user(
        email: str = "test@sevispass.com",
        password: str = DEFAULT_PASSWORD,
        is_verified: bool = True,
        email_verified: bool = True,
        first_name: str = "Test",
    ) -> User:
        user = User(
            uid=generate_uid(),
            first_name=first_name,
            last_name="User",
            email=email,
            nid="S1234567A",
            phone_number="+675 8123 4567",
            password=get_password_hash(password),
            is_verified=is_verified,
            email_verified=email_verified,
            created_at=clock(),
            updated_at=clock(),
        )
        db.add(user)
        await db.commit()
        return user

    return _make_user


async def _add_location(db, name: str, slots: list) -> BiometricLocation:
    location = BiometricLocation(
        name=name,
        address=f"{name} address",
        electorate="Moresby North-East",
        phone="+675 321 4000",
        operating_hours="Mon-Fri 9:00 AM - 4:00 PM",
        is_active=True,
    )
    db.add(location)
    await db.flush()
    for day_of_week, start, end, capacity, active in slots:
        db.add(AppointmentTimeSlot(
            location_id=location.id,
            day_of_week=day_of_week,
            start_time=start,
            end_time=end,
            max_appointments=capacity,
            is_active=active,
        ))
    await db.commit()
    return location


@pytest_asyncio.fixture
async def location(db):
    """Sede L1: lunes 09:00 (cupo 2), lunes 10:00 (cupo 1), lunes 11:00 inactivo, martes 09:00 (cupo 2)."""
    return await _add_location(db, "Port Moresby Central Office", [
        (1, "09:00", "09:30", 2, True),
        (1, "10:00", "10:30", 1, True),
        (1, "11:00", "11:30", 2, False),
        (2, "09:00", "09:30", 2, True),
    ])


@pytest_asyncio.fixture
async def second_location(db):
    return await _add_location(db, "Lae Branch Office", [
        (1, "09:00", "09:30", 1, True),
        (2, "14:00", "14:30", 1, True),
    ])
