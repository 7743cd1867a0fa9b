from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from app.models.timestamps import utcnow


def patch_fields(patch: BaseModel, exclude: set[str] | None = None) -> dict[str, Any]:
    """Fields the caller actually sent, keyed by column name."""
    return patch.model_dump(exclude_unset=True, exclude_none=True, exclude=exclude)


def apply_patch(entity: Any, fields: dict[str, Any]) -> bool:
    """
    Copy ``fields`` onto ``entity`` and stamp ``updated_at``.

    Returns False (and leaves the entity untouched) when there is nothing to
    write, so callers can skip the flush and hand back the current row.
    """
    if not fields:
        return False
    for name, value in fields.items():
        setattr(entity, name, value)
    entity.updated_at = utcnow()
    return True
