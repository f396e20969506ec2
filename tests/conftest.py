"""Shared fixtures for harmonet tests."""
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from harmonet.infra.models import Base, Tenant


@pytest.fixture
def base_dictionaries():
    """Small in-memory base dictionaries keyed by locale"""
    return {
        "ja": {"common": {"save": "保存", "cancel": "キャンセル"}, "nav": {"home": "ホーム"}},
        "en": {"common": {"save": "Save", "cancel": "Cancel"}, "nav": {"home": "Home"}},
        "zh": {"common": {"save": "保存", "cancel": "取消"}, "nav": {"home": "首页"}},
    }


@pytest.fixture
def dict_loader(base_dictionaries):
    return lambda locale: base_dictionaries[locale]


@pytest_asyncio.fixture
async def session():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    maker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with maker() as s:
        s.add(Tenant(id="tenant-a", name="Residence A"))
        s.add(Tenant(id="tenant-b", name="Residence B"))
        await s.flush()
        yield s
    await engine.dispose()
