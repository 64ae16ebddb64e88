from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stockledger.database import Base
import stockledger.models.suppliers  # noqa: F401
import stockledger.models.products  # noqa: F401
import stockledger.models.stock_transactions  # noqa: F401
import stockledger.models.sales  # noqa: F401
from stockledger.schemas.product import ProductCreate
from stockledger.schemas.supplier import SupplierCreate
from stockledger.services.catalogue import create_product, create_supplier


@pytest.fixture
def engine():
    # The Engine "connect" listener in stockledger.database turns foreign keys on
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def supplier(db):
    return create_supplier(
        db,
        SupplierCreate(
            name="Tech Distributors Ltd",
            contact_name="Alice Morgan",
            email="alice@techdistributors.com",
            address="12 Market Street",
        ),
    )


@pytest.fixture
def make_product(db, supplier):
    def _make(name="Laptop", quantity=10, price="999.99", category="Electronics"):
        return create_product(
            db,
            ProductCreate(
                name=name,
                category=category,
                price=Decimal(price),
                quantity=quantity,
                supplier_id=supplier.id,
            ),
        )

    return _make


@pytest.fixture
def laptop(make_product):
    return make_product()


@pytest.fixture
def file_engine(tmp_path):
    # One connection per session, unlike the shared in-memory engine
    engine = create_engine(f"sqlite:///{tmp_path / 'stockledger.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def open_session(file_engine):
    FileSession = sessionmaker(autocommit=False, autoflush=False, bind=file_engine)
    sessions = []

    def _open():
        session = FileSession()
        sessions.append(session)
        return session

    yield _open

    for session in sessions:
        session.rollback()
        session.close()
