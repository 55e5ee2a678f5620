"""SQLite settings backend built on SQLAlchemy and SQLModel."""

import logging
from pathlib import Path

from sqlalchemy import create_engine, delete, select
from sqlalchemy.orm import Session, sessionmaker
from sqlmodel import Field, SQLModel

from versioned_settings.backends.base import SettingsBackend
from versioned_settings.version import Version

logger = logging.getLogger(__name__)


class StoredSetting(SQLModel, table=True):
    """One setting value stored for one application version."""

    __tablename__: str = "settings"  # type: ignore[assignment]

    # Natural composite key: setting name + canonical version string
    name: str = Field(primary_key=True)
    version: str = Field(primary_key=True, index=True)
    value: str


class SqliteBackend(SettingsBackend):
    """Backend storing settings in a SQLite database.

    Each handle is an ORM session. Closing a handle commits; aborting it rolls
    back, so a failed upgrade leaves the database untouched.
    """

    supports_version_listing = True
    supports_version_deletion = True

    def __init__(self, db_path: Path | None = None):
        """Initialize the backend and create the settings table if needed.

        Args:
            db_path: Path to the SQLite database file. None uses a private
                in-memory database.
        """
        self.db_path = Path(db_path) if db_path is not None else None
        if self.db_path is not None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            db_url = f"sqlite:///{self.db_path}"
        else:
            db_url = "sqlite://"

        self.engine = create_engine(db_url, connect_args={"check_same_thread": False})
        self.session_local = sessionmaker(bind=self.engine)
        SQLModel.metadata.create_all(self.engine, tables=[StoredSetting.__table__])

    def open(self) -> Session:
        return self.session_local()

    def close(self, handle: Session) -> None:
        try:
            handle.commit()
        finally:
            handle.close()

    def abort(self, handle: Session) -> None:
        try:
            handle.rollback()
        finally:
            handle.close()

    def get_value(self, handle: Session, name: str, version: Version) -> str | None:
        setting = handle.get(StoredSetting, (name, str(version)))
        return setting.value if setting is not None else None

    def set_value(self, handle: Session, name: str, version: Version, value: str) -> None:
        handle.merge(StoredSetting(name=name, version=str(version), value=value))

    def list_versions(self, handle: Session) -> set[Version]:
        stmt = select(StoredSetting.version).distinct()
        return {Version.parse(version) for version in handle.execute(stmt).scalars()}

    def delete_for_version(self, handle: Session, version: Version) -> None:
        stmt = delete(StoredSetting).where(StoredSetting.version == str(version))
        result = handle.execute(stmt)
        logger.debug("Deleted %s settings for version %s", result.rowcount, version)

    def dispose(self) -> None:
        """Release the engine's connection pool."""
        self.engine.dispose()
