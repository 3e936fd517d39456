from typing import Generator

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from config import settings


class Base(DeclarativeBase):
    pass


engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if "sqlite" in settings.database_url else {},
    echo=settings.debug,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _migrate_devices_table(connection, inspector):
    if "devices" in inspector.get_table_names():
        device_columns = {column["name"] for column in inspector.get_columns("devices")}
        if "serial" not in device_columns:
            connection.execute(
                text("ALTER TABLE devices ADD COLUMN serial VARCHAR(32)")
            )
        if "ocr_warnings" not in device_columns:
            connection.execute(
                text("ALTER TABLE devices ADD COLUMN ocr_warnings JSON")
            )


def init_db() -> None:
    with engine.begin() as connection:
        inspector = inspect(connection)
        _migrate_devices_table(connection, inspector)

    Base.metadata.create_all(bind=engine)
