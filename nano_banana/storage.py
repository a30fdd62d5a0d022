"""
Local persistence of user configuration.

Stores the API key, endpoint override and model override in a small SQLite
key-value table. The API key is Fernet-encrypted at rest when an
encryption key is configured.

ConfigStore is best-effort: storage failures are logged and swallowed so a
broken or read-only store never blocks image generation.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from cryptography.fernet import Fernet, InvalidToken
from sqlalchemy import DateTime, String, Text, create_engine, delete, func
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from nano_banana.config import Settings, get_settings
from nano_banana.constants import (
    API_ENDPOINT_STORAGE_KEY,
    API_KEY_STORAGE_KEY,
    MODEL_ID_STORAGE_KEY,
)

logger = logging.getLogger(__name__)


class EncryptionError(Exception):
    """Raised when encryption/decryption fails."""

    pass


class Base(DeclarativeBase):
    pass


class StoredValue(Base):
    """One persisted configuration value."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class KeyValueStore(Protocol):
    """Minimal persistent string store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SQLiteKeyValueStore:
    """KeyValueStore backed by a local SQLite file.

    The database and its parent directory are created on first use.
    Errors propagate; ConfigStore decides what to do with them.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()
        self._engine: Engine | None = None

    def _get_engine(self) -> Engine:
        """Lazily create engine and schema."""
        if self._engine is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(f"sqlite:///{self.path}")
            Base.metadata.create_all(engine)
            self._engine = engine
        return self._engine

    def get(self, key: str) -> str | None:
        with Session(self._get_engine()) as db:
            row = db.get(StoredValue, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        with Session(self._get_engine()) as db:
            row = db.get(StoredValue, key)
            if row is None:
                db.add(StoredValue(key=key, value=value))
            else:
                row.value = value
            db.commit()

    def delete(self, key: str) -> None:
        with Session(self._get_engine()) as db:
            db.execute(delete(StoredValue).where(StoredValue.key == key))
            db.commit()

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


def _get_fernet(key: str) -> Fernet:
    try:
        return Fernet(key.encode())
    except Exception as e:
        raise EncryptionError(f"Invalid encryption key: {e}") from e


def encrypt_value(plaintext: str, key: str) -> str:
    """Encrypt a plaintext string into a URL-safe token."""
    return _get_fernet(key).encrypt(plaintext.encode()).decode()


def decrypt_value(token: str, key: str) -> str:
    """Decrypt a token produced by encrypt_value.

    Raises:
        EncryptionError: If the token or key is invalid.
    """
    fernet = _get_fernet(key)
    try:
        return fernet.decrypt(token.encode()).decode()
    except InvalidToken as e:
        raise EncryptionError("Decryption failed - invalid token or key") from e


class ConfigStore:
    """Saved API key, endpoint and model id.

    Getters return an empty string when nothing is stored or the store
    fails. Setters and clear methods never raise.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._store = store if store is not None else SQLiteKeyValueStore(settings.storage_path)
        self._encryption_key = settings.encryption_key

    def _read(self, key: str, label: str) -> str:
        try:
            return self._store.get(key) or ""
        except Exception as e:
            logger.warning(f"Could not read {label} from local storage: {e}")
            return ""

    def _write(self, key: str, value: str, label: str) -> None:
        try:
            self._store.set(key, value)
        except Exception as e:
            logger.warning(f"Could not save {label} to local storage: {e}")

    def _clear(self, key: str, label: str) -> None:
        try:
            self._store.delete(key)
        except Exception as e:
            logger.warning(f"Could not clear {label} from local storage: {e}")

    # API key

    def save_api_key(self, api_key: str) -> None:
        if self._encryption_key:
            try:
                api_key = encrypt_value(api_key, self._encryption_key)
            except EncryptionError as e:
                logger.warning(f"Could not save API key to local storage: {e}")
                return
        self._write(API_KEY_STORAGE_KEY, api_key, "API key")

    def get_api_key(self) -> str:
        stored = self._read(API_KEY_STORAGE_KEY, "API key")
        if not stored or not self._encryption_key:
            return stored
        try:
            return decrypt_value(stored, self._encryption_key)
        except EncryptionError as e:
            logger.warning(f"Could not read API key from local storage: {e}")
            return ""

    def clear_api_key(self) -> None:
        self._clear(API_KEY_STORAGE_KEY, "API key")

    # Endpoint override

    def save_api_endpoint(self, endpoint: str) -> None:
        self._write(API_ENDPOINT_STORAGE_KEY, endpoint, "API endpoint")

    def get_api_endpoint(self) -> str:
        return self._read(API_ENDPOINT_STORAGE_KEY, "API endpoint")

    def clear_api_endpoint(self) -> None:
        self._clear(API_ENDPOINT_STORAGE_KEY, "API endpoint")

    # Model override

    def save_model_id(self, model_id: str) -> None:
        self._write(MODEL_ID_STORAGE_KEY, model_id, "model ID")

    def get_model_id(self) -> str:
        return self._read(MODEL_ID_STORAGE_KEY, "model ID")

    def clear_model_id(self) -> None:
        self._clear(MODEL_ID_STORAGE_KEY, "model ID")
