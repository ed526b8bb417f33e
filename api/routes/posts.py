"""Post and category routes"""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from api.dependencies import get_db, staged_image
from api.responses import MessageResponse, deleted_response, error_responses
from domain.schemas.post_schemas import (
    CategoryCreate,
    CategoryResponse,
    PostCreate,
    PostUpdate,
    PostResponse,
    PostDetailResponse,
)
from services.post_service import PostService, CategoryService

router = APIRouter(prefix="/posts", tags=["Posts"])
category_router = APIRouter(prefix="/categories", tags=["Categories"])
logger = logging.getLogger("nutrilife.api.posts")


def _category_ids(categories: Optional[List[str]]) -> Optional[List[str]]:
    """Drop blank entries; a submitted field holding only blanks clears the set"""
    if categories is None:
        return None
    return [c for c in categories if c and c.strip()]


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 404),
)
def create_post(
    author_id: Optional[str] = Form(None, alias="authorId"),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    published: bool = Form(False),
    categories: Optional[List[str]] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """Publish a post (unpublished by default), optionally with an image."""
    post_data = PostCreate(
        author_id=author_id,
        title=title,
        description=description,
        published=published,
        categories=_category_ids(categories),
    )
    return PostService.create_post(db, post_data, staged_image(image))


@router.get("", response_model=List[PostResponse])
def get_all_posts(db: Session = Depends(get_db)):
    return PostService.list_posts(db)


@router.get(
    "/{post_id}", response_model=PostDetailResponse, responses=error_responses(404)
)
def get_post(post_id: str, db: Session = Depends(get_db)):
    """Get a post with its author and categories."""
    return PostService.get_post(db, post_id)


@router.put(
    "/{post_id}", response_model=PostResponse, responses=error_responses(400, 404)
)
def update_post(
    post_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    published: Optional[bool] = Form(None),
    categories: Optional[List[str]] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """
    Update a post. Repeated `categories` fields replace the whole category
    set (send one empty `categories` field to clear it); a new `image`
    replaces (and deletes) the previous one.
    """
    submitted = {
        "title": title,
        "description": description,
        "published": published,
        "categories": _category_ids(categories),
    }
    changes = PostUpdate(**{k: v for k, v in submitted.items() if v is not None})
    return PostService.update_post(db, post_id, changes, staged_image(image))


@router.delete(
    "/{post_id}", response_model=MessageResponse, responses=error_responses(404)
)
def delete_post(post_id: str, db: Session = Depends(get_db)):
    PostService.delete_post(db, post_id)
    return deleted_response("Post", post_id)


@category_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 409),
)
def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    return CategoryService.create_category(db, category.name)


@category_router.get("", response_model=List[CategoryResponse])
def get_all_categories(db: Session = Depends(get_db)):
    return CategoryService.list_categories(db)
