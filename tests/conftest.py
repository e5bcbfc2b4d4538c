import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.core.database import build_engine, get_db, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402

TEST_USER_ID = "user-alice"
OTHER_USER_ID = "user-bob"


def make_token(user_id: str, email: str = "", expires_in: int = 3600, **extra_claims) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "aud": settings.AUTH_JWT_AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
    }
    if email:
        claims["email"] = email
    claims.update(extra_claims)
    return jwt.encode(claims, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


def auth_header(user_id: str = TEST_USER_ID) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, email=f'{user_id}@example.com')}"}


@pytest.fixture
def db_session():
    engine = build_engine("sqlite://")
    init_db(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def user(db_session):
    row = User(id=TEST_USER_ID, email=f"{TEST_USER_ID}@example.com")
    db_session.add(row)
    db_session.commit()
    return row


@pytest_asyncio.fixture
async def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.pop(get_db, None)
