"""Import definitions for the catalog entity types.

Each ImportSpec names its CSV columns, how a validated row becomes an
EntityGraph, and (where applicable) the natural key that points at an
existing parent and the ordering scope the new record is slotted into.
"""

from __future__ import annotations

import re
import unicodedata

from catalog_cms.config import settings
from catalog_cms.imports.graph import (
    EntityGraph,
    OrderToken,
    RecordDraft,
    parent_fields,
    translation_drafts,
)
from catalog_cms.imports.import_spec import (
    FieldDef,
    ImportSpec,
    NaturalKey,
    coerce_bool,
    coerce_comma_list,
    coerce_int,
    coerce_pipe_list,
    language_columns,
    translation_field_defs,
)
from catalog_cms.imports.validator import ValidatedRow
from catalog_cms.middleware.exceptions import ResourceNotFoundError

AGE_RATINGS = frozenset({"ALL", "TEEN", "ADULT"})


def derive_label(name: str) -> str:
    """'Crecimiento Personal!' -> 'crecimiento_personal'"""
    text = unicodedata.normalize("NFD", name.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = re.sub(r"[^a-z0-9\s]", "", text).strip()
    return re.sub(r"\s+", "_", text)


# ── Challenge categories ───────────────────────────────────────

_CATEGORY_TRANSLATIONS = language_columns("title", "description", "instructions", "tags")


def _build_challenge_category(row: ValidatedRow, parent_id: str | None) -> EntityGraph:
    spec = CHALLENGE_CATEGORIES
    fields = parent_fields(row, spec)
    return EntityGraph(
        row=row.row,
        parent=RecordDraft("challenge_categories", fields),
        translations=translation_drafts(
            row, spec.translation_columns,
            collection="challenge_category_translations",
            parent_fk="challenge_category_id",
        ),
        order=OrderToken(
            collection="challenge_categories",
            scope_field="game_mode_id",
            scope_key=fields["game_mode_id"],
            position=row.get(spec.order_column),
        ),
    )


CHALLENGE_CATEGORIES = ImportSpec(
    entity="challenge-categories",
    label="Challenge category",
    fields=(
        FieldDef("game_mode_id", "game_mode_id", required=True),
        FieldDef("icon", "icon"),
        FieldDef("text_color", "text_color"),
        FieldDef("sort_order", "sort_order", required=True, coerce=coerce_int),
        FieldDef("min_players", "min_players", coerce=coerce_int),
        FieldDef("max_players", "max_players", coerce=coerce_int),
        FieldDef("gradient_colors", "gradient_colors", coerce=coerce_pipe_list),
        FieldDef("age_rating", "age_rating", choices=AGE_RATINGS, default="ALL"),
        FieldDef("route", "route"),
        FieldDef("author", "author"),
        FieldDef("is_active", "is_active", required=True, coerce=coerce_bool),
        FieldDef("is_premium", "is_premium", required=True, coerce=coerce_bool),
        *translation_field_defs(_CATEGORY_TRANSLATIONS, coercers={"tags": coerce_comma_list}),
    ),
    build_graph=_build_challenge_category,
    order_column="sort_order",
    translation_columns=_CATEGORY_TRANSLATIONS,
    sample_rows=(
        {
            "game_mode_id": "11111111-1111-1111-1111-111111111111",
            "icon": "🎉", "text_color": "#FFFFFF", "sort_order": "1",
            "min_players": "2", "max_players": "10",
            "gradient_colors": "#8B5CF6|#EC4899", "age_rating": "ALL",
            "route": "/challenges/fiesta", "is_active": "true", "is_premium": "false",
            "title_es": "Fiesta", "title_en": "Party",
            "description_es": "Retos para animar la fiesta",
            "description_en": "Challenges to get the party going",
            "tags_es": "fiesta, grupo", "tags_en": "party, group",
        },
    ),
)


# ── Challenges ─────────────────────────────────────────────────

_CHALLENGE_TRANSLATIONS = language_columns("content")


def _build_challenge(row: ValidatedRow, parent_id: str | None) -> EntityGraph:
    spec = CHALLENGES
    return EntityGraph(
        row=row.row,
        parent=RecordDraft("challenges", parent_fields(row, spec)),
        translations=translation_drafts(
            row, spec.translation_columns,
            collection="challenge_translations",
            parent_fk="challenge_id",
            extra={"icon": row.get("icon")},
        ),
    )


CHALLENGES = ImportSpec(
    entity="challenges",
    label="Challenge",
    fields=(
        FieldDef("challenge_category_id", "challenge_category_id", required=True),
        FieldDef("icon", "icon"),
        FieldDef("is_premium", "is_premium", required=True, coerce=coerce_bool),
        FieldDef("is_active", "is_active", required=True, coerce=coerce_bool),
        FieldDef("author", "author"),
        *translation_field_defs(_CHALLENGE_TRANSLATIONS),
    ),
    build_graph=_build_challenge,
    translation_columns=_CHALLENGE_TRANSLATIONS,
    sample_rows=(
        {"challenge_category_id": "b07421cb-248c-4099-8b29-e91a782939b3", "icon": "🎯",
         "is_premium": "false", "is_active": "true",
         "content_es": "Cuenta un chiste", "content_en": "Tell a joke",
         "content_fr": "Raconte une blague", "content_it": "Racconta una barzelletta",
         "content_pt": "Conte uma piada"},
        {"challenge_category_id": "b07421cb-248c-4099-8b29-e91a782939b3", "icon": "🎭",
         "is_premium": "false", "is_active": "true",
         "content_es": "Imita a un famoso", "content_en": "Imitate a celebrity",
         "content_fr": "Imite une celebrite", "content_it": "Imita una celebrita",
         "content_pt": "Imite uma celebridade"},
    ),
)


# ── Deep talk filters (top-level categories) ───────────────────

_FILTER_TRANSLATIONS = language_columns("name", languages=("es", "en", "pt", "fr", "it"))


def _build_deep_talk_filter(row: ValidatedRow, parent_id: str | None) -> EntityGraph:
    spec = DEEP_TALK_FILTERS
    fields = parent_fields(row, spec)
    fields["game_mode_id"] = settings.deep_talks_game_mode_id
    if not fields.get("label"):
        fields["label"] = derive_label(row.get("name_es"))
    return EntityGraph(
        row=row.row,
        parent=RecordDraft("deep_talk_categories", fields),
        translations=translation_drafts(
            row, spec.translation_columns,
            collection="deep_talk_categories_translations",
            parent_fk="deep_talk_category_id",
        ),
        order=OrderToken(
            collection="deep_talk_categories",
            scope_field="game_mode_id",
            scope_key=settings.deep_talks_game_mode_id,
            position=row.get(spec.order_column),
        ),
    )


DEEP_TALK_FILTERS = ImportSpec(
    entity="deep-talk-filters",
    label="Deep talk filter",
    fields=(
        FieldDef("label", "label"),
        FieldDef("icon", "icon"),
        FieldDef("color", "color"),
        FieldDef("route", "route"),
        FieldDef("sort_order", "sort_order", required=True, coerce=coerce_int),
        FieldDef("is_premium", "is_premium", required=True, coerce=coerce_bool),
        FieldDef("is_active", "is_active", required=True, coerce=coerce_bool),
        *translation_field_defs(_FILTER_TRANSLATIONS),
    ),
    build_graph=_build_deep_talk_filter,
    order_column="sort_order",
    translation_columns=_FILTER_TRANSLATIONS,
    sample_rows=(
        {"label": "relaciones", "icon": "heart", "color": "#EC4899",
         "route": "/deep-talks/relaciones", "sort_order": "1",
         "is_premium": "false", "is_active": "true",
         "name_es": "Relaciones", "name_en": "Relationships", "name_pt": "Relacionamentos",
         "name_fr": "Relations", "name_it": "Relazioni"},
        {"label": "crecimiento-personal", "icon": "rocket", "color": "#8B5CF6",
         "route": "/deep-talks/crecimiento", "sort_order": "2",
         "is_premium": "false", "is_active": "true",
         "name_es": "Crecimiento Personal", "name_en": "Personal Growth",
         "name_pt": "Crescimento Pessoal", "name_fr": "Croissance Personnelle",
         "name_it": "Crescita Personale"},
    ),
)


# ── Deep talks ─────────────────────────────────────────────────

_DEEP_TALK_TRANSLATIONS = language_columns("title", "subtitle", "description", "intensity")


def _build_deep_talk(row: ValidatedRow, parent_id: str | None) -> EntityGraph:
    spec = DEEP_TALKS
    fields = parent_fields(row, spec)
    fields["deep_talk_category_id"] = parent_id
    return EntityGraph(
        row=row.row,
        parent=RecordDraft("deep_talks", fields),
        translations=translation_drafts(
            row, spec.translation_columns,
            collection="deep_talk_translations",
            parent_fk="deep_talk_id",
        ),
        order=OrderToken(
            collection="deep_talks",
            scope_field="deep_talk_category_id",
            scope_key=parent_id,
            position=row.get(spec.order_column),
        ),
    )


DEEP_TALKS = ImportSpec(
    entity="deep-talks",
    label="Deep talk",
    fields=(
        FieldDef("filter_label", required=True),
        FieldDef("icon", "icon"),
        FieldDef("gradient_colors", "gradient_colors", coerce=coerce_pipe_list),
        FieldDef("estimated_time", "estimated_time"),
        FieldDef("sort_order", "sort_order", required=True, coerce=coerce_int),
        FieldDef("is_active", "is_active", required=True, coerce=coerce_bool),
        FieldDef("is_premium", "is_premium", coerce=coerce_bool, default=False),
        *translation_field_defs(_DEEP_TALK_TRANSLATIONS),
    ),
    build_graph=_build_deep_talk,
    natural_key=NaturalKey(
        column="filter_label",
        collection="deep_talk_categories",
        match_field="label",
    ),
    order_column="sort_order",
    translation_columns=_DEEP_TALK_TRANSLATIONS,
    sample_rows=(
        {"filter_label": "relaciones", "icon": "heart", "gradient_colors": "#FF6B9D|#FF8FAB",
         "estimated_time": "15 min", "sort_order": "1", "is_active": "true", "is_premium": "false",
         "title_es": "Amor y Pareja", "subtitle_es": "Conversaciones sobre el amor",
         "description_es": "Explora temas profundos sobre relaciones románticas y conexiones emocionales",
         "intensity_es": "MEDIUM",
         "title_en": "Love and Partnership", "subtitle_en": "Conversations about love",
         "description_en": "Explore deep topics about romantic relationships and emotional connections",
         "intensity_en": "MEDIUM"},
        {"filter_label": "crecimiento-personal", "icon": "rocket", "gradient_colors": "#4CAF50|#66BB6A",
         "estimated_time": "25 min", "sort_order": "1", "is_active": "true", "is_premium": "true",
         "title_es": "Metas y Sueños", "subtitle_es": "Conversaciones sobre aspiraciones",
         "description_es": "Descubre qué motiva a las personas y cuáles son sus objetivos de vida",
         "intensity_es": "HIGH",
         "title_en": "Goals and Dreams", "subtitle_en": "Conversations about aspirations",
         "description_en": "Discover what motivates people and what their life goals are",
         "intensity_en": "HIGH"},
    ),
)


# ── Deep talk questions ────────────────────────────────────────
# One row per language in deep_talk_questions; there is no parent record
# of their own, the resolved deep talk is the parent.

_QUESTION_COLUMNS = language_columns("question", languages=("es", "en", "pt", "fr", "it"))


def _build_deep_talk_questions(row: ValidatedRow, parent_id: str | None) -> EntityGraph:
    shared = {
        "deep_talk_id": parent_id,
        "icon": row.get("icon"),
        "sort_order": row.get("sort_order"),
        "is_active": row.get("is_active"),
    }
    children = translation_drafts(
        row, DEEP_TALK_QUESTIONS.translation_columns,
        collection="deep_talk_questions",
        parent_fk=None,
        extra=shared,
    )
    return EntityGraph(
        row=row.row,
        parent=None,
        children=children,
        order=OrderToken(
            collection="deep_talk_questions",
            scope_field="deep_talk_id",
            scope_key=parent_id,
            position=row.get(DEEP_TALK_QUESTIONS.order_column),
        ),
    )


DEEP_TALK_QUESTIONS = ImportSpec(
    entity="deep-talk-questions",
    label="Deep talk question",
    fields=(
        FieldDef("category_title_es", required=True),
        FieldDef("icon"),
        FieldDef("sort_order", required=True, coerce=coerce_int),
        FieldDef("is_active", required=True, coerce=coerce_bool),
        *translation_field_defs(_QUESTION_COLUMNS),
    ),
    build_graph=_build_deep_talk_questions,
    natural_key=NaturalKey(
        column="category_title_es",
        collection="deep_talk_translations",
        match_field="title",
        id_field="deep_talk_id",
        filters={"language_code": settings.default_language},
    ),
    order_column="sort_order",
    translation_columns=_QUESTION_COLUMNS,
    sample_rows=(
        {"category_title_es": "Amor y Pareja", "icon": "heart", "sort_order": "1", "is_active": "true",
         "question_es": "¿Qué es lo que más valoras en una relación de pareja?",
         "question_en": "What do you value most in a romantic relationship?",
         "question_pt": "O que você mais valoriza em um relacionamento romântico?",
         "question_fr": "Qu'est-ce que tu valorises le plus dans une relation amoureuse?"},
        {"category_title_es": "Amor y Pareja", "icon": "gift", "sort_order": "2", "is_active": "true",
         "question_es": "¿Cómo demuestras amor a las personas importantes en tu vida?",
         "question_en": "How do you show love to the important people in your life?",
         "question_pt": "Como você demonstra amor às pessoas importantes da sua vida?",
         "question_fr": "Comment montres-tu ton amour aux personnes importantes de ta vie?"},
    ),
)


IMPORT_SPECS: dict[str, ImportSpec] = {
    spec.entity: spec
    for spec in (CHALLENGE_CATEGORIES, CHALLENGES, DEEP_TALK_FILTERS, DEEP_TALKS, DEEP_TALK_QUESTIONS)
}


def get_import_spec(entity: str) -> ImportSpec:
    spec = IMPORT_SPECS.get(entity)
    if spec is None:
        raise ResourceNotFoundError("Import type", entity)
    return spec
