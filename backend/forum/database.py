"""
SQLAlchemy engine and session. Supports PostgreSQL and SQLite (local runs and tests).
Sync usage; one session per request, committed or rolled back by the service call.
"""
import logging
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from forum.config import settings

logger = logging.getLogger(__name__)

_is_sqlite = "sqlite" in settings.database_url
# sqlite:// and sqlite:///:memory: live in a single connection; share it across threads
_is_memory = _is_sqlite and (settings.database_url.rstrip("/") in ("sqlite:", "sqlite:/") or ":memory:" in settings.database_url)
_connect_args = {"check_same_thread": False} if _is_sqlite else {}
_engine_kwargs = {"poolclass": StaticPool} if _is_memory else {}
engine = create_engine(
    settings.database_url,
    pool_pre_ping=not _is_sqlite,
    connect_args=_connect_args,
    echo=False,  # Set True for SQL logging during development
    **_engine_kwargs,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


if _is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_tables():
    """Create all tables registered on Base. Alembic owns the schema in production."""
    # Import all models so they register with Base before create_all
    from forum.models import user, page, question, reply  # noqa: F401
    Base.metadata.create_all(bind=engine)


def init_db():
    """Create tables, seed default pages and bootstrap the admin account. Call once at app startup."""
    create_tables()
    from forum.services.auth import ensure_admin
    from forum.services.pages import seed_default_pages

    db = SessionLocal()
    try:
        if settings.seed_default_pages:
            created = seed_default_pages(db)
            if created:
                logger.info("Database initialized with default pages: %s", ", ".join(created))
            else:
                logger.info("Default pages already exist. Skipping page seed.")
        if settings.admin_email and settings.admin_password:
            ensure_admin(db, settings.admin_name, settings.admin_email, settings.admin_password)
        elif settings.admin_email:
            logger.warning("ADMIN_EMAIL is set without ADMIN_PASSWORD; admin bootstrap skipped")
    finally:
        db.close()


def get_db():
    """Dependency: yield a DB session, close after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
