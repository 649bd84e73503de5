from typing import Literal

from pydantic import BaseModel, field_validator


PostStatus = Literal["draft", "published", "archived"]


class PostCreate(BaseModel):
    title: str
    slug: str | None = None
    excerpt: str | None = None
    content: str | None = None
    category: str | None = None
    author_name: str | None = None
    status: PostStatus = "draft"
    featured: bool = False


class PostUpdate(BaseModel):
    title: str | None = None
    slug: str | None = None
    excerpt: str | None = None
    content: str | None = None
    category: str | None = None
    author_name: str | None = None
    status: PostStatus | None = None
    featured: bool | None = None

    @field_validator("title", "status", "featured")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class PostResponse(BaseModel):
    id: str
    title: str
    slug: str
    excerpt: str | None
    content: str | None
    category: str | None
    author_name: str | None
    status: str
    featured: bool
    views_count: int
    published_at: str | None
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}
