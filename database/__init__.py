"""Store package: ORM tables, session factories and domain repositories."""

from .database import ReadSessionLocal, WriteSessionLocal, get_read_session, get_write_session, init_db
from . import models

__all__ = [
    "ReadSessionLocal",
    "WriteSessionLocal",
    "get_read_session",
    "get_write_session",
    "init_db",
    "models",
]
