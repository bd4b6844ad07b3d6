# src/inkwell/api/v1/endpoints/tags.py
"""Tag listing endpoint."""

from fastapi import APIRouter
from sqlalchemy import select

from inkwell.api.v1.dependencies import SessionDep
from inkwell.models import Tag
from inkwell.schemas.tag import TagResponse

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=list[TagResponse])
async def list_tags(db: SessionDep) -> list[TagResponse]:
    """Return every known tag name, alphabetically."""
    tags = db.scalars(select(Tag).order_by(Tag.name)).all()
    return [TagResponse.model_validate(tag) for tag in tags]
