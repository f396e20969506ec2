from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Tenant(Base):
    __tablename__ = "tenants"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class TenantStaticTranslation(Base):
    __tablename__ = "tenant_static_translations"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[str] = mapped_column(String(64), ForeignKey("tenants.id", ondelete="CASCADE"))
    screen_key: Mapped[str] = mapped_column(String(64))
    message_key: Mapped[str] = mapped_column(String(255))
    text_ja: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    text_en: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    text_zh: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="active")
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    __table_args__ = (UniqueConstraint("tenant_id", "screen_key", "message_key"),)


class StaticTranslationDefault(Base):
    __tablename__ = "static_translation_defaults"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    screen_key: Mapped[str] = mapped_column(String(64))
    message_key: Mapped[str] = mapped_column(String(255))
    text_ja: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    text_en: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    text_zh: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    __table_args__ = (UniqueConstraint("screen_key", "message_key"),)
