"""Deep talks: filters → deep talks → questions.

deep_talk_categories              - the top-level "filters", ordered within
                                    the deep-talks game mode, addressed in CSV
                                    by their ``label``.
deep_talk_categories_translations - filter name per language.
deep_talks                        - discussion categories inside a filter,
                                    addressed in CSV by their Spanish title.
deep_talk_translations            - title/subtitle/description/intensity.
deep_talk_questions               - one row per (question, language); rows of
                                    the same question share a sort_order.
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_cms.database import CatalogBase


class DeepTalkCategory(CatalogBase):
    __tablename__ = "deep_talk_categories"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    game_mode_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    label: Mapped[str | None] = mapped_column(String(100), index=True)
    icon: Mapped[str | None] = mapped_column(String(100))
    color: Mapped[str | None] = mapped_column(String(20))
    route: Mapped[str | None] = mapped_column(String(255))
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    translations = relationship(
        "DeepTalkCategoryTranslation", back_populates="category",
        cascade="all, delete-orphan", passive_deletes=True,
    )


class DeepTalkCategoryTranslation(CatalogBase):
    __tablename__ = "deep_talk_categories_translations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    deep_talk_category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deep_talk_categories.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))

    category = relationship("DeepTalkCategory", back_populates="translations")


class DeepTalk(CatalogBase):
    __tablename__ = "deep_talks"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    deep_talk_category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deep_talk_categories.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    icon: Mapped[str | None] = mapped_column(String(100))
    gradient_colors: Mapped[list | None] = mapped_column(JSON)
    estimated_time: Mapped[str | None] = mapped_column(String(50))
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    translations = relationship(
        "DeepTalkTranslation", back_populates="deep_talk",
        cascade="all, delete-orphan", passive_deletes=True,
    )


class DeepTalkTranslation(CatalogBase):
    __tablename__ = "deep_talk_translations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    deep_talk_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deep_talks.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    subtitle: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    intensity: Mapped[str | None] = mapped_column(String(50))

    deep_talk = relationship("DeepTalk", back_populates="translations")


class DeepTalkQuestion(CatalogBase):
    __tablename__ = "deep_talk_questions"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    deep_talk_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deep_talks.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str | None] = mapped_column(String(100))
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
