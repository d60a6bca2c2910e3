"""SQLAlchemy declarative Base shared by the users and reviews tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
