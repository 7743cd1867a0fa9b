import uuid
from datetime import datetime

import bleach
from markdown import markdown
from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, event
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.enums import PresentationType, SessionType, SubmissionStatus, enum_column
from app.models.timestamps import utcnow


ABSTRACT_TAGS = frozenset(
    {
        "a", "b", "blockquote", "br", "code", "em", "h1", "h2", "h3", "h4",
        "i", "li", "ol", "p", "pre", "strong", "sub", "sup", "ul",
    }
)


def render_abstract(source: str | None) -> str:
    """Markdown abstract to the sanitised HTML kept in ``abstract_html``."""
    if not source:
        return ""
    return bleach.linkify(
        bleach.clean(
            markdown(source, output_format="html", extensions=["nl2br"]),
            tags=ABSTRACT_TAGS,
            attributes={"a": ["href", "title"]},
            strip=True,
        )
    )


class Submission(Base):
    __tablename__ = "submissions"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    abstract: Mapped[str] = mapped_column(Text, nullable=False)
    abstract_html: Mapped[str | None] = mapped_column(Text, nullable=True)
    keywords: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    session_type: Mapped[SessionType] = mapped_column(enum_column(SessionType), nullable=False, index=True)
    presentation_type: Mapped[PresentationType] = mapped_column(enum_column(PresentationType), nullable=False)
    status: Mapped[SubmissionStatus] = mapped_column(
        enum_column(SubmissionStatus), nullable=False, default=SubmissionStatus.SUBMITTED, index=True
    )

    submission_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    manuscript_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    corresponding_author: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    authors: Mapped[list["Author"]] = relationship(
        back_populates="submission",
        cascade="all, delete-orphan",
        order_by="Author.author_order",
        lazy="selectin",
    )

    @staticmethod
    def on_changed_abstract(target, value, oldvalue, initiator):
        target.abstract_html = render_abstract(value)


event.listen(Submission.abstract, "set", Submission.on_changed_abstract)


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    submission_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("submissions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    affiliation: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    is_corresponding: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    author_order: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    submission: Mapped[Submission] = relationship(back_populates="authors")
