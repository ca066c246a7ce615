"""Aggregate model imports for Alembic auto-detection."""

# Challenges
from catalog_cms.models.challenge import (  # noqa: F401
    Challenge,
    ChallengeCategory,
    ChallengeCategoryTranslation,
    ChallengeTranslation,
)

# Deep talks
from catalog_cms.models.deep_talk import (  # noqa: F401
    DeepTalk,
    DeepTalkCategory,
    DeepTalkCategoryTranslation,
    DeepTalkQuestion,
    DeepTalkTranslation,
)
