import os
from decimal import Decimal
import tempfile

# point the app at a throwaway database before anything imports webshop.config
_tmpdir = tempfile.mkdtemp(prefix="webshop-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_tmpdir, "test.db")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest  # noqa: E402

from webshop.db import SessionLocal, init_db  # noqa: E402
from webshop.models.product import Product  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    # every test starts from empty tables plus the default admin row
    init_db(reset=True)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def make_product(db):
    def _make(name="Test Coffee", price=Decimal("10.00"), stock=10, **extra):
        p = Product(name=name, price=price, stock=stock, **extra)
        db.add(p)
        db.commit()
        db.refresh(p)
        return p

    return _make
