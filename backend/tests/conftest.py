import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from billsplit.database import Base, get_db
from billsplit.main import app
from billsplit.schemas import BillResponse

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_bill():
    counter = iter(range(1, 10_000))

    def _make(amount, paid_by, participants, max_contributions=None, description="Bill"):
        return BillResponse(
            id=f"bill-{next(counter)}",
            description=description,
            amount=amount,
            paid_by=paid_by,
            participants=participants,
            max_contributions=max_contributions,
        )

    return _make
