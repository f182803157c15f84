from __future__ import annotations

from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect

__all__ = ["db", "csrf"]

db = SQLAlchemy()
csrf = CSRFProtect()
