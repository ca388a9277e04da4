"""Database models for model-viewer.

Models are defined using SQLModel (SQLAlchemy + Pydantic).

Tables:
- users: Login accounts (created out-of-band)
- components: Domain metadata, keyed by the node name used inside models
- annotations: Free-floating points placed in the viewer
"""

from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """User account model."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    password_hash: str


class Component(SQLModel, table=True):
    """Component metadata record.

    ``attributes`` carries the free-form fields of a component; API responses
    flatten them next to the fixed columns.
    """

    __tablename__ = "components"

    id: str = Field(primary_key=True)
    type: str = Field(index=True)
    pressure: float | None = Field(default=None)
    attributes: dict[str, Any] | None = Field(
        default=None, sa_column=Column(JSON)
    )

    def to_dict(self) -> dict[str, Any]:
        row: dict[str, Any] = dict(self.attributes or {})
        row.update({"id": self.id, "type": self.type, "pressure": self.pressure})
        return row


class Annotation(SQLModel, table=True):
    """Annotation point. Append-only."""

    __tablename__ = "annotations"

    id: int | None = Field(default=None, primary_key=True)
    x: float
    y: float
    z: float
    note: str
