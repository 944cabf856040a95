# Third-party imports
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base shared by every table; scripts/create_tables.py creates from its metadata."""
