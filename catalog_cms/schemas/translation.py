from pydantic import BaseModel, Field, field_validator


class TranslateRequest(BaseModel):
    text: str = Field(..., min_length=1)
    target_languages: list[str] = Field(..., min_length=1)
    source_language: str = "es"

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text to translate cannot be blank")
        return v


class TranslateResponse(BaseModel):
    translations: dict[str, str]
