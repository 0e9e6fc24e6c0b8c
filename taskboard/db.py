import logging
from collections.abc import Generator

from sqlalchemy import create_engine, func, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.config import settings
from taskboard.models.base import Base

logger = logging.getLogger(__name__)

def make_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        # one shared connection, otherwise every connection gets its own empty :memory: db
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)

engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind: Engine | None = None, seed: bool | None = None) -> None:
    # register tables on Base.metadata
    import taskboard.models  # noqa: F401
    from taskboard.seed import seed_store

    bind = bind or engine
    Base.metadata.create_all(bind)

    if seed is None:
        seed = settings.seed_demo_data
    if seed:
        with Session(bind) as db:
            seed_store(db)
            db.commit()
    logger.info("store initialised (seed=%s)", seed)

def next_id(db: Session, column) -> str:
    # ids are sequential numeric strings, like the legacy store
    ids = db.scalars(select(column)).all()
    numeric = [int(i) for i in ids if str(i).isdigit()]
    return str(max(numeric, default=0) + 1)

def count_rows(db: Session, model) -> int:
    return db.scalar(select(func.count()).select_from(model)) or 0

# db connectivity check
def db_ping() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
