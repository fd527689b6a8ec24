from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import config


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # single shared connection so in-memory databases survive across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


engine = create_engine(
    config.DATABASE_URL,
    echo=config.SQL_ECHO,
    **_engine_options(config.DATABASE_URL),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
