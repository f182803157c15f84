"""Option storage backends.

Synopsis:
Narrow get/set/delete interface over string-valued admin options, with an
in-memory backend for tests, a JSON file backend for single-host installs and
a SQLAlchemy backend for the admin database.

Glossary:
- Option store: Anything implementing ``get``/``set``/``delete`` on string keys.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models.option import Option
from ..utils.json_store import dump_options_file, load_options_file

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS_FILE = "options.json"


class OptionStoreError(RuntimeError):
    """Raised when an option cannot be read, persisted or removed."""


class OptionStore(Protocol):
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryOptionStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._options: Dict[str, str] = dict(initial or {})

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._options.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._options[key] = value

    def delete(self, key: str) -> None:
        self._options.pop(key, None)

    def all(self) -> Dict[str, str]:
        return dict(self._options)


class JsonOptionStore:
    """JSON-file backed option store.

    Every call re-reads the file so separate worker processes observe each
    other's writes.
    """

    def __init__(self, options_file: str = DEFAULT_OPTIONS_FILE):
        self.options_file = options_file

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return load_options_file(self.options_file).get(key, default)

    def set(self, key: str, value: str) -> None:
        options = load_options_file(self.options_file)
        options[key] = value
        self._save(options)

    def delete(self, key: str) -> None:
        options = load_options_file(self.options_file)
        if key not in options:
            return
        del options[key]
        self._save(options)

    def all(self) -> Dict[str, str]:
        return load_options_file(self.options_file)

    def _save(self, options: Dict[str, str]) -> None:
        try:
            dump_options_file(self.options_file, options)
        except OSError as exc:
            logger.error("Failed to write options file %s: %s", self.options_file, exc)
            raise OptionStoreError(f"Unable to write {self.options_file}") from exc


class DatabaseOptionStore:
    """Option store on the ``admin_option`` table. Requires an app context."""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        try:
            option = Option.query.filter_by(key=key).first()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Failed to read option %s", key)
            raise OptionStoreError(f"Unable to read option {key}") from exc
        if option is None or option.value is None:
            return default
        return option.value

    def set(self, key: str, value: str) -> None:
        try:
            option = Option.query.filter_by(key=key).first()
            if option is None:
                db.session.add(Option(key=key, value=value))
            else:
                option.value = value
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Failed to save option %s", key)
            raise OptionStoreError(f"Unable to save option {key}") from exc

    def delete(self, key: str) -> None:
        try:
            Option.query.filter_by(key=key).delete()
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Failed to delete option %s", key)
            raise OptionStoreError(f"Unable to delete option {key}") from exc

    def all(self) -> Dict[str, str]:
        try:
            rows = Option.query.order_by(Option.key).all()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Failed to read options")
            raise OptionStoreError("Unable to read options") from exc
        return {option.key: option.value for option in rows}


def build_option_store(backend: str, *, options_file: str = DEFAULT_OPTIONS_FILE) -> OptionStore:
    """Return the store named by the ``OPTION_STORE`` config value."""
    normalized = (backend or "").strip().lower()
    if normalized == "database":
        return DatabaseOptionStore()
    if normalized == "json":
        return JsonOptionStore(options_file)
    if normalized == "memory":
        return MemoryOptionStore()
    raise ValueError(f"Unknown option store backend {backend!r}; expected database, json or memory.")


__all__ = [
    "DEFAULT_OPTIONS_FILE",
    "DatabaseOptionStore",
    "JsonOptionStore",
    "MemoryOptionStore",
    "OptionStore",
    "OptionStoreError",
    "build_option_store",
]
