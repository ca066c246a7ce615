"""Challenge categories and challenges, each with per-language translations.

challenge_categories            - one row per category, ordered by sort_order
                                  within its game mode.
challenge_category_translations - title/description/instructions/tags per
                                  language; cascade-deleted with the category.
challenges                      - one row per challenge inside a category.
challenge_translations          - challenge text per language.
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_cms.database import CatalogBase


class ChallengeCategory(CatalogBase):
    __tablename__ = "challenge_categories"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    game_mode_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    icon: Mapped[str | None] = mapped_column(String(100))
    text_color: Mapped[str | None] = mapped_column(String(20))
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    min_players: Mapped[int | None] = mapped_column(Integer)
    max_players: Mapped[int | None] = mapped_column(Integer)
    route: Mapped[str | None] = mapped_column(String(255))
    # ALL | TEEN | ADULT
    age_rating: Mapped[str] = mapped_column(String(10), default="ALL")
    gradient_colors: Mapped[list | None] = mapped_column(JSON)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)
    author: Mapped[str | None] = mapped_column(String(200))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    translations = relationship(
        "ChallengeCategoryTranslation", back_populates="category",
        cascade="all, delete-orphan", passive_deletes=True,
    )


class ChallengeCategoryTranslation(CatalogBase):
    __tablename__ = "challenge_category_translations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    challenge_category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("challenge_categories.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    instructions: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list | None] = mapped_column(JSON)

    category = relationship("ChallengeCategory", back_populates="translations")


class Challenge(CatalogBase):
    __tablename__ = "challenges"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    challenge_category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("challenge_categories.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    icon: Mapped[str | None] = mapped_column(String(100))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)
    author: Mapped[str | None] = mapped_column(String(200))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    translations = relationship(
        "ChallengeTranslation", back_populates="challenge",
        cascade="all, delete-orphan", passive_deletes=True,
    )


class ChallengeTranslation(CatalogBase):
    __tablename__ = "challenge_translations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    challenge_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("challenges.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str | None] = mapped_column(String(100))

    challenge = relationship("Challenge", back_populates="translations")
