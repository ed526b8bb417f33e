from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class PostCreate(BaseModel):
    author_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    published: bool = False
    categories: Optional[List[str]] = None


class PostUpdate(BaseModel):
    """Unset fields keep their value; categories, when given, replace the whole set"""

    title: Optional[str] = None
    description: Optional[str] = None
    published: Optional[bool] = None
    categories: Optional[List[str]] = None


class AuthorResponse(BaseModel):
    id: str
    name: Optional[str]
    email: str

    model_config = {"from_attributes": True}


class PostResponse(BaseModel):
    id: str
    author_id: str
    title: Optional[str]
    description: Optional[str]
    published: bool
    image: Optional[str]
    created_at: Optional[datetime] = None
    categories: List[CategoryResponse] = []

    model_config = {"from_attributes": True}


class PostDetailResponse(PostResponse):
    author: Optional[AuthorResponse] = None
