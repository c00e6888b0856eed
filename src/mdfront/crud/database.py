"""Database engine and schema creation"""

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from mdfront.crud import models  # noqa: F401  registers tables on SQLModel.metadata


def make_engine(db_url: str) -> Engine:
    """Engine for the catalog URL resolved by config.load_config (config.yaml, MDFRONT_DB_URL, CLI)."""
    return create_engine(db_url, echo=False)


def init_db(engine: Engine, reset: bool = False) -> None:
    """Create catalog tables; reset drops them first."""
    if reset:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
