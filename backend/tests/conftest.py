"""
Test configuration and fixtures
"""
import base64
import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "false"
os.environ["ENV"] = "dev"
os.environ["ADMIN_USERNAME"] = "assessor"
os.environ["ADMIN_PASSWORD"] = "Assessor2024!"


def _basic_auth_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("utf-8")
    return f"Basic {token}"


AUTH_HEADERS = {
    "Authorization": _basic_auth_header(
        os.environ["ADMIN_USERNAME"],
        os.environ["ADMIN_PASSWORD"],
    )
}

from tax_forms_api.db.database import Base, get_db
from tax_forms_api.main import app
from tax_forms_api.db.models import TaxForm, TaxFormHistory, TaxFormStatus, TaxFormHistoryStatus
from tax_forms_api.services.tax_forms import TaxFormService


# Test database setup
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def async_engine():
    """Create async engine for tests"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async_session = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database session override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        ac.headers.update(AUTH_HEADERS)
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def anonymous_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Test client without credentials"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def service(db_session: AsyncSession) -> TaxFormService:
    return TaxFormService(db_session)


# === Sample Data Fixtures ===

SAMPLE_DETAILS = {
    "assessed_value": 100,
    "appraised_value": 200,
    "ratio": 0.5,
    "comments": "Testing",
}


async def create_form(
    db_session: AsyncSession,
    status: TaxFormStatus = TaxFormStatus.NOT_STARTED,
    form_year: int = 2024,
    form_name: str = "Test Form 1",
    history: tuple[TaxFormHistoryStatus, ...] = (),
) -> TaxForm:
    """Insert a form directly, bypassing the workflow"""
    form = TaxForm(form_year=form_year, form_name=form_name, status=status)
    for event in history:
        form.history.append(TaxFormHistory(status=event))
    db_session.add(form)
    await db_session.commit()
    await db_session.refresh(form, attribute_names=["history"])
    return form


@pytest.fixture
def form_factory(db_session: AsyncSession):
    """Factory for forms in an arbitrary state: `await form_factory(status=...)`"""

    async def _create(**kwargs) -> TaxForm:
        return await create_form(db_session, **kwargs)

    return _create


@pytest_asyncio.fixture
async def sample_form(db_session: AsyncSession) -> TaxForm:
    """A fresh NOT_STARTED form for 2024"""
    return await create_form(db_session)
