"""Display-ready view of an extraction."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class NormalizedSection(BaseModel):
    """One summary field split into bullet sentences."""

    id: Literal["content", "methods", "findings", "conclusions"]
    title: str
    bullets: list[str] = []


class NormalizedResult(BaseModel):
    """Extraction reshaped for presentation."""

    model_config = ConfigDict(populate_by_name=True)

    document_type: str = Field(alias="documentType")
    year: str
    authors: list[str] = []
    sections: list[NormalizedSection] = []
