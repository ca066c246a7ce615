"""Create catalog tables: challenges and deep talks with their translations.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def upgrade() -> None:
    # ── Challenges ───────────────────────────────────────────
    op.create_table(
        "challenge_categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("game_mode_id", sa.String(36), nullable=False),
        sa.Column("icon", sa.String(100)),
        sa.Column("text_color", sa.String(20)),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("min_players", sa.Integer()),
        sa.Column("max_players", sa.Integer()),
        sa.Column("route", sa.String(255)),
        sa.Column("age_rating", sa.String(10), server_default="ALL"),
        sa.Column("gradient_colors", sa.JSON()),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("is_premium", sa.Boolean(), server_default=sa.false()),
        sa.Column("author", sa.String(200)),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_challenge_categories_game_mode_id", "challenge_categories", ["game_mode_id"])

    op.create_table(
        "challenge_category_translations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "challenge_category_id", sa.String(36),
            sa.ForeignKey("challenge_categories.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("language_code", sa.String(5), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("instructions", sa.Text()),
        sa.Column("tags", sa.JSON()),
    )
    op.create_index(
        "ix_challenge_category_translations_challenge_category_id",
        "challenge_category_translations", ["challenge_category_id"],
    )

    op.create_table(
        "challenges",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "challenge_category_id", sa.String(36),
            sa.ForeignKey("challenge_categories.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("icon", sa.String(100)),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("is_premium", sa.Boolean(), server_default=sa.false()),
        sa.Column("author", sa.String(200)),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_challenges_challenge_category_id", "challenges", ["challenge_category_id"])

    op.create_table(
        "challenge_translations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "challenge_id", sa.String(36),
            sa.ForeignKey("challenges.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("language_code", sa.String(5), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(100)),
    )
    op.create_index("ix_challenge_translations_challenge_id", "challenge_translations", ["challenge_id"])

    # ── Deep talks ───────────────────────────────────────────
    op.create_table(
        "deep_talk_categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("game_mode_id", sa.String(36), nullable=False),
        sa.Column("label", sa.String(100)),
        sa.Column("icon", sa.String(100)),
        sa.Column("color", sa.String(20)),
        sa.Column("route", sa.String(255)),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("is_premium", sa.Boolean(), server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_deep_talk_categories_game_mode_id", "deep_talk_categories", ["game_mode_id"])
    op.create_index("ix_deep_talk_categories_label", "deep_talk_categories", ["label"])

    op.create_table(
        "deep_talk_categories_translations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "deep_talk_category_id", sa.String(36),
            sa.ForeignKey("deep_talk_categories.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("language_code", sa.String(5), nullable=False),
        sa.Column("name", sa.String(255)),
    )
    op.create_index(
        "ix_deep_talk_categories_translations_deep_talk_category_id",
        "deep_talk_categories_translations", ["deep_talk_category_id"],
    )

    op.create_table(
        "deep_talks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "deep_talk_category_id", sa.String(36),
            sa.ForeignKey("deep_talk_categories.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("icon", sa.String(100)),
        sa.Column("gradient_colors", sa.JSON()),
        sa.Column("estimated_time", sa.String(50)),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("is_premium", sa.Boolean(), server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_deep_talks_deep_talk_category_id", "deep_talks", ["deep_talk_category_id"])

    op.create_table(
        "deep_talk_translations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "deep_talk_id", sa.String(36),
            sa.ForeignKey("deep_talks.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("language_code", sa.String(5), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("subtitle", sa.String(255)),
        sa.Column("description", sa.Text()),
        sa.Column("intensity", sa.String(50)),
    )
    op.create_index("ix_deep_talk_translations_deep_talk_id", "deep_talk_translations", ["deep_talk_id"])
    op.create_index("ix_deep_talk_translations_title", "deep_talk_translations", ["title"])

    op.create_table(
        "deep_talk_questions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "deep_talk_id", sa.String(36),
            sa.ForeignKey("deep_talks.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("language_code", sa.String(5), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(100)),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_deep_talk_questions_deep_talk_id", "deep_talk_questions", ["deep_talk_id"])


def downgrade() -> None:
    op.drop_table("deep_talk_questions")
    op.drop_table("deep_talk_translations")
    op.drop_table("deep_talks")
    op.drop_table("deep_talk_categories_translations")
    op.drop_table("deep_talk_categories")
    op.drop_table("challenge_translations")
    op.drop_table("challenges")
    op.drop_table("challenge_category_translations")
    op.drop_table("challenge_categories")
