"""Catalog table definitions for ingested documents"""

from datetime import datetime
from typing import Any, Dict, List
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class StoredDocument(SQLModel, table=True):
    """A parsed front-matter document, keyed by its source path"""
    __tablename__ = "documents"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    path: str = Field(..., sa_column=Column(Text, nullable=False, unique=True))
    slug: str = Field(..., index=True, nullable=False)
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    description: str = Field(default="", sa_column=Column(Text, nullable=False))
    date: datetime = Field(..., sa_column=Column(DateTime(timezone=True), nullable=False, index=True))
    draft: bool = Field(default=False, index=True, nullable=False)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    frontmatter: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    body: str = Field(..., sa_column=Column(Text, nullable=False))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
