"""Persisted admin option model.

Synopsis:
Store string-valued admin options (toggles and one-shot markers) keyed by
name so the navigation gate can read them per request.

Glossary:
- Option key: Unique name used to retrieve a stored value.
- Option value: String payload; toggles use ``"yes"`` for enabled.
"""

from __future__ import annotations

from ..extensions import db
from .mixins import TimestampMixin


# --- Option model ---
# Purpose: Store key/value admin options.
# Inputs: Unique option key plus string value.
# Outputs: Persisted option row.
class Option(TimestampMixin, db.Model):
    __tablename__ = "admin_option"

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(191), unique=True, nullable=False, index=True)
    value = db.Column(db.Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Option {self.key}={self.value!r}>"
