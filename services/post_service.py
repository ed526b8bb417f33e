from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from adapters.attachment_store import StagedFile
from domain.enums import AttachmentKind
from domain.models import Post, Category
from domain.schemas.post_schemas import PostCreate, PostUpdate
from repositories import (
    unit_of_work,
    UserRepository,
    PostRepository,
    CategoryRepository,
)
from services.attachment_lifecycle import (
    store_upload,
    discard_on_failure,
    replace_image,
    release_image,
)
from app.exceptions import ServiceValidationError, NotFoundError, ConflictError

logger = logging.getLogger("nutrilife.posts")


class CategoryService:
    """Categories posts can be filed under"""

    @staticmethod
    def create_category(db: Session, name: str) -> Category:
        category = Category(name=name.strip())
        if not category.name:
            raise ServiceValidationError("Category name is required")
        try:
            with unit_of_work(db):
                CategoryRepository(db).add(category)
        except IntegrityError:
            raise ConflictError(f"Category '{category.name}' already exists")
        db.refresh(category)
        logger.info(f"category_created category_id={category.id}")
        return category

    @staticmethod
    def list_categories(db: Session) -> List[Category]:
        return CategoryRepository(db).get_all()

    @staticmethod
    def resolve(db: Session, category_ids: Sequence[str]) -> List[Category]:
        """Load categories by id; every id must exist."""
        wanted = list(dict.fromkeys(category_ids))
        found = CategoryRepository(db).get_many(wanted)
        missing = sorted(set(wanted) - {c.id for c in found})
        if missing:
            raise NotFoundError(
                f"Unknown categories: {', '.join(missing)}",
                details={"categories": missing},
            )
        return found


class PostService:
    """Post CRUD with image attachments, mirroring MealService"""

    @staticmethod
    def create_post(
        db: Session, post_data: PostCreate, image: Optional[StagedFile] = None
    ) -> Post:
        if not post_data.author_id:
            raise ServiceValidationError("Author id is required")
        if not UserRepository(db).exists(post_data.author_id):
            raise NotFoundError(f"User {post_data.author_id} not found")
        categories = CategoryService.resolve(db, post_data.categories or [])

        image_ref = store_upload(AttachmentKind.POST, image, post_data.title)
        post = Post(
            author_id=post_data.author_id,
            title=post_data.title,
            description=post_data.description,
            published=post_data.published,
            image=image_ref,
            categories=categories,
        )
        with discard_on_failure(image_ref):
            with unit_of_work(db):
                PostRepository(db).add(post)

        db.refresh(post)
        logger.info(
            f"post_created post_id={post.id} author_id={post.author_id} "
            f"has_image={image_ref is not None}"
        )
        return post

    @staticmethod
    def list_posts(db: Session) -> List[Post]:
        return PostRepository(db).get_all()

    @staticmethod
    def get_post(db: Session, post_id: str) -> Post:
        """Return a post with author and categories"""
        post = PostRepository(db).get_detail(post_id)
        if not post:
            raise NotFoundError(f"Post {post_id} not found")
        return post

    @staticmethod
    def update_post(
        db: Session,
        post_id: str,
        changes: PostUpdate,
        image: Optional[StagedFile] = None,
    ) -> Post:
        """
        Update the supplied fields of a post.

        categories, when given, replaces the whole association (set, not
        merge). Image replacement follows MealService.update_meal.
        """
        post = PostService.get_post(db, post_id)

        fields = changes.model_dump(exclude_unset=True)
        category_ids = fields.pop("categories", None)
        categories = (
            CategoryService.resolve(db, category_ids) if category_ids is not None else None
        )
        fields = {name: value for name, value in fields.items() if value is not None}

        image_ref = store_upload(
            AttachmentKind.POST, image, fields.get("title") or post.title
        )
        with discard_on_failure(image_ref):
            with unit_of_work(db):
                replace_image(post, image_ref)
                for name, value in fields.items():
                    setattr(post, name, value)
                if categories is not None:
                    post.categories = categories

        db.refresh(post)
        logger.info(
            f"post_updated post_id={post_id} fields={','.join(fields) or '-'} "
            f"categories={len(categories) if categories is not None else '-'} "
            f"new_image={image_ref is not None}"
        )
        return post

    @staticmethod
    def delete_post(db: Session, post_id: str) -> None:
        post = PostService.get_post(db, post_id)
        release_image(post)
        with unit_of_work(db):
            PostRepository(db).delete(post)
        logger.info(f"post_deleted post_id={post_id}")
