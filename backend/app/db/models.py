"""SQLAlchemy ORM models - plans stored as whole JSON documents."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class PlanDocument(Base):
    """Plan table - one row per plan, days and activities embedded in document.

    title, status and share_link are denormalized from the document for
    listing and lookup; the document is authoritative.
    """

    __tablename__ = "plan_document"
    __table_args__ = (
        Index("idx_plan_document_updated", "updated_at"),
        Index("idx_plan_document_share_link", "share_link"),
    )

    plan_id: Mapped[str] = mapped_column(Text, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)
    share_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    document: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
