from ..extensions import db
from .option import Option

__all__ = ["db", "Option"]
