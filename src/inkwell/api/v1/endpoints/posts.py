# src/inkwell/api/v1/endpoints/posts.py
"""Post-related endpoints for the Inkwell API."""

from fastapi import APIRouter, Query, Response, status

from inkwell.api.v1.dependencies import OptionalUserDep, SessionDep
from inkwell.schemas.post import (
    PaginationMeta,
    PostCreate,
    PostPageResponse,
    PostResponse,
    PostUpdate,
)
from inkwell.services import post_service
from inkwell.services.post_query import PostIndexParams, PostQueryFilter

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=PostPageResponse)
async def list_posts(
    db: SessionDep,
    actor: OptionalUserDep,
    mine: str | None = Query(None, description="Only the caller's own posts"),
    p: str | None = Query(None, description="Private posts instead of public ones"),
    q: str | None = Query(None, description="Substring searched in title or content"),
    t: str | None = Query(None, description="Comma separated tags; any of them matches"),
    e: str | None = Query(None, description="Comma separated terms excluded from results"),
    page: int = Query(1, ge=1, description="Page number"),
) -> PostPageResponse:
    """List posts newest first, fifteen per page.

    Filters can be combined, e.g. ``/posts?q=pitbull&t=dogs,products&e=cats``
    looks for posts mentioning "pitbull", tagged "dogs" or "products", and
    not mentioning "cats" in either title or content.
    """
    params = PostIndexParams(mine=mine, p=p, q=q, t=t, e=e, page=page)
    result = PostQueryFilter(db).index(params, actor)
    return PostPageResponse(
        data=[PostResponse.model_validate(post) for post in result.items],
        meta=PaginationMeta(
            current_page=result.current_page,
            per_page=result.per_page,
            total=result.total,
            last_page=result.last_page,
        ),
    )


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    actor: OptionalUserDep,
    db: SessionDep,
) -> PostResponse:
    """Create a post owned by the caller."""
    post = post_service.create_post(db, actor, post_data)
    return PostResponse.model_validate(post)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, actor: OptionalUserDep, db: SessionDep) -> PostResponse:
    """Get a specific post by ID."""
    return PostResponse.model_validate(post_service.show_post(db, actor, post_id))


@router.get("/{post_id}/edit", response_model=PostResponse)
async def edit_post(post_id: int, actor: OptionalUserDep, db: SessionDep) -> PostResponse:
    """Get a post for editing; requires the update capability."""
    return PostResponse.model_validate(post_service.edit_post(db, actor, post_id))


@router.put("/{post_id}", status_code=status.HTTP_200_OK)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    actor: OptionalUserDep,
    db: SessionDep,
) -> None:
    """Replace a post's editable fields."""
    post_service.update_post(db, actor, post_id, post_data)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, actor: OptionalUserDep, db: SessionDep) -> Response:
    """Delete a post."""
    post_service.delete_post(db, actor, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
