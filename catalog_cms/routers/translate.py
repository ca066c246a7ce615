"""Machine translation for the admin UI.

    POST /api/translate   {text, target_languages, source_language?} → {translations}
"""

from fastapi import APIRouter, Depends

from catalog_cms.schemas.translation import TranslateRequest, TranslateResponse
from catalog_cms.services.translation import TranslationClient

router = APIRouter()


def get_translation_client() -> TranslationClient:
    return TranslationClient()


@router.post("", response_model=TranslateResponse)
async def translate(
    body: TranslateRequest,
    client: TranslationClient = Depends(get_translation_client),
):
    translations = await client.translate(
        body.text, body.target_languages, source_language=body.source_language,
    )
    return TranslateResponse(translations=translations)
