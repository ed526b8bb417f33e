"""
Post Repository - Data access layer for posts and categories
"""

from typing import List, Optional, Sequence
from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Post, Category, post_categories


class PostRepository(BaseRepository[Post]):
    """Repository for post data access"""

    def __init__(self, db: Session):
        super().__init__(db, Post)

    def get_detail(self, post_id: str) -> Optional[Post]:
        """Get post with author and categories loaded"""
        return (
            self.db.query(Post)
            .options(selectinload(Post.author), selectinload(Post.categories))
            .filter(Post.id == post_id)
            .first()
        )

    def get_all(self) -> List[Post]:
        return (
            self.db.query(Post)
            .options(selectinload(Post.categories))
            .order_by(Post.created_at, Post.id)
            .all()
        )

    def get_images_by_author_id(self, author_id: str) -> List[str]:
        rows = (
            self.db.query(Post.image)
            .filter(Post.author_id == author_id, Post.image.isnot(None))
            .all()
        )
        return [row.image for row in rows]

    def delete_by_author_id(self, author_id: str) -> int:
        """Delete all posts of an author together with their category links"""
        post_ids = select(Post.id).where(Post.author_id == author_id)
        self.db.execute(
            delete(post_categories).where(post_categories.c.post_id.in_(post_ids))
        )
        count = (
            self.db.query(Post)
            .filter(Post.author_id == author_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return count


class CategoryRepository(BaseRepository[Category]):
    """Repository for category data access"""

    def __init__(self, db: Session):
        super().__init__(db, Category)

    def get_all(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def get_many(self, category_ids: Sequence[str]) -> List[Category]:
        """Categories for the given ids; unknown ids are simply absent"""
        if not category_ids:
            return []
        return self.db.query(Category).filter(Category.id.in_(category_ids)).all()
