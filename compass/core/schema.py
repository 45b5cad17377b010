"""
Serialized corpus schema.
Validates entries of the career embeddings file before they become EmbeddingRecords.
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class CorpusMetadata(BaseModel):
    """Header written by the embedding generator. Every field is informational."""

    model_config = ConfigDict(extra="allow", protected_namespaces=())

    model: Optional[str] = None
    dimensions: Optional[int] = None
    generated_at: Optional[str] = None
    total_careers: Optional[int] = None
    embedding_strategy: Optional[str] = None
    weights: Optional[Dict[str, float]] = None
    description: Optional[str] = None


class CareerEmbeddingEntry(BaseModel):
    """One career as stored in the corpus file."""

    model_config = ConfigDict(allow_inf_nan=False, populate_by_name=True)

    slug: str = Field(validation_alias=AliasChoices("slug", "career_slug", "id"))
    title: Optional[str] = None
    category: str = ""
    task_embedding: List[float]
    narrative_embedding: List[float]
    skills_embedding: List[float]

    @field_validator('slug')
    @classmethod
    def slug_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('slug cannot be empty')
        return v

    @field_validator('category', mode='before')
    @classmethod
    def category_defaults_to_empty(cls, v):
        return "" if v is None else v

    @field_validator('task_embedding', 'narrative_embedding', 'skills_embedding')
    @classmethod
    def embedding_must_not_be_empty(cls, v):
        if not v:
            raise ValueError('embedding cannot be empty')
        return v

    @model_validator(mode='after')
    def title_defaults_to_slug(self):
        if not self.title:
            self.title = self.slug
        return self


def entry_identifier(raw: Any) -> Optional[str]:
    """Best-effort id of a raw entry, for error reporting only."""
    if isinstance(raw, dict):
        for key in ("slug", "career_slug", "id"):
            if isinstance(raw.get(key), str):
                return raw[key]
    return None
