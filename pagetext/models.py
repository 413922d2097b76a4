"""Database models for the pagetext app.

We use SQLAlchemy's declarative system. A ``SourceFile`` records one
ingested PDF and the backend that read it; its recovered lines are stored as
``PageLine`` rows and the records a template produced from them as
``ExtractedEntry`` rows (the entry itself is kept as JSON, since templates
are free to return any record shape).
"""

from __future__ import annotations

from datetime import datetime
from sqlalchemy import (
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    DateTime as SA_DateTime,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative models."""

    pass


class SourceFile(Base):
    __tablename__ = "source_files"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    path: Mapped[str] = mapped_column(Text)
    # "scanned" or "searchable"
    mode: Mapped[str] = mapped_column(String)
    page_count: Mapped[int] = mapped_column(Integer, default=0)
    template: Mapped[str | None] = mapped_column(String, nullable=True)
    ingested_at: Mapped[datetime] = mapped_column(SA_DateTime, default=datetime.now)

    lines: Mapped[list["PageLine"]] = relationship(
        back_populates="source_file", cascade="all, delete-orphan", order_by="PageLine.id"
    )
    entries: Mapped[list["ExtractedEntry"]] = relationship(
        back_populates="source_file", cascade="all, delete-orphan", order_by="ExtractedEntry.position"
    )

    __table_args__ = (UniqueConstraint("path", name="uq_sourcefile_path"),)


class PageLine(Base):
    """One recovered line; ``position`` orders lines within a page."""

    __tablename__ = "page_lines"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    source_file_id: Mapped[int] = mapped_column(ForeignKey("source_files.id"))
    page_number: Mapped[int] = mapped_column(Integer)
    position: Mapped[int] = mapped_column(Integer)
    text: Mapped[str] = mapped_column(Text)

    source_file: Mapped["SourceFile"] = relationship(back_populates="lines")


class ExtractedEntry(Base):
    __tablename__ = "extracted_entries"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    source_file_id: Mapped[int] = mapped_column(ForeignKey("source_files.id"))
    template: Mapped[str] = mapped_column(String)
    position: Mapped[int] = mapped_column(Integer)
    line: Mapped[str] = mapped_column(Text)
    payload: Mapped[str] = mapped_column(Text)

    source_file: Mapped["SourceFile"] = relationship(back_populates="entries")
