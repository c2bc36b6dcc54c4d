import os

# Settings are read at import time, so configure them before importing userhub
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient

from userhub.core.database.engine import build_engine, build_session_factory, create_tables, get_db
from userhub.features.groups.models import Group, grants
from userhub.features.permissions.models import Permission
from userhub.features.users.models import User, memberships
from userhub.main import app


@pytest.fixture
async def engine(tmp_path):
    # Fresh database file per test
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'userhub-test.sqlite3'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def api_app(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(api_app):
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_group(db):
    async def _make(name: str, *, deleted: bool = False) -> Group:
        group = Group(name=name, active=not deleted, deleted=deleted)
        db.add(group)
        await db.commit()
        return group
    return _make


@pytest.fixture
def make_permission(db):
    async def _make(name: str, *, deleted: bool = False) -> Permission:
        permission = Permission(name=name, active=not deleted, deleted=deleted)
        db.add(permission)
        await db.commit()
        return permission
    return _make


@pytest.fixture
def make_user(db):
    async def _make(email: str, *, groups=(), active: bool = True, deleted: bool = False) -> User:
        user = User(email=email, active=active, deleted=deleted)
        db.add(user)
        await db.flush()
        await memberships.add_many(db, user.id, [g.id for g in groups])
        await db.commit()
        await db.refresh(user, attribute_names=["groups"])
        return user
    return _make


@pytest.fixture
def grant(db):
    async def _grant(group: Group, *permissions: Permission) -> None:
        await grants.add_many(db, group.id, [p.id for p in permissions])
        await db.commit()
    return _grant
