"""Declarative base and shared column helpers."""
import uuid
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def new_id() -> str:
    """Opaque unique identifier for every row."""
    return str(uuid.uuid4())
