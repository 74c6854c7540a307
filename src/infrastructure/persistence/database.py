from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.config.settings_env import settings
from src.infrastructure.persistence.models.models import Base


def create_db_engine(database_url: str = settings.DATABASE_URL):
    connect_args = {"check_same_thread": False} if "sqlite" in database_url else {}
    return create_engine(database_url, connect_args=connect_args)


engine = create_db_engine()
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


def init_db(bind=engine):
    Base.metadata.create_all(bind=bind, checkfirst=True)
