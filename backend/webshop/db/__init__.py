import importlib

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from webshop.config import settings
from webshop.utils.log import get_logger

log = get_logger("db")

DATABASE_URL = settings.DATABASE_URL

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # the session is handed between FastAPI's threadpool workers
    connect_args["check_same_thread"] = False

engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


if engine.dialect.name == "sqlite":

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# every model module has to be imported before create_all so metadata is complete
MODEL_MODULES = [
    "webshop.models.product",
    "webshop.models.cart",
    "webshop.models.cart_item",
    "webshop.models.admin_credential",
]


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    Behavior:
      - If reset is true, drop & recreate all tables.
      - Create missing tables, leave existing ones in place.
      - Seed the default admin credential row when the table is empty.

    Errors are not swallowed: a storage that cannot be opened at startup is fatal.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        log.info("Resetting database tables")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized: %s", sorted(Base.metadata.tables.keys()))

    from webshop.services.admin_service import AdminService

    s = SessionLocal()
    try:
        AdminService(s).ensure_default()
    finally:
        s.close()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
