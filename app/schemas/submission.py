from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import EmailStr, Field, model_validator

from app.models.enums import PresentationType, SessionType, SubmissionStatus
from app.schemas.common import CamelModel


class AuthorCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    affiliation: str = Field(min_length=1, max_length=255)
    email: EmailStr
    is_corresponding: bool = False
    author_order: int = Field(ge=1)


class SubmissionCreate(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    abstract: str = Field(min_length=1)
    keywords: list[str] = Field(default_factory=list)
    session_type: SessionType
    presentation_type: PresentationType
    authors: list[AuthorCreate] = Field(min_length=1)
    corresponding_author: str = Field(min_length=1, max_length=255)

    @model_validator(mode="after")
    def _one_corresponding_author(self) -> "SubmissionCreate":
        if sum(1 for a in self.authors if a.is_corresponding) != 1:
            raise ValueError("Exactly one author must be marked as corresponding")
        return self


class AuthorRead(CamelModel):
    id: uuid.UUID
    name: str
    affiliation: str
    email: str
    is_corresponding: bool
    author_order: int


class SubmissionRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    abstract: str
    abstract_html: str | None = None
    keywords: list[str] = Field(default_factory=list)
    session_type: SessionType
    presentation_type: PresentationType
    status: SubmissionStatus
    submission_date: datetime
    manuscript_path: str | None = None
    corresponding_author: str
    authors: list[AuthorRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime | None = None
