from typing import Literal

from pydantic import BaseModel, field_validator


ProjectStatus = Literal["planning", "in-progress", "completed", "on-hold"]


class ProjectCreate(BaseModel):
    name: str
    slug: str | None = None
    client_name: str | None = None
    short_description: str | None = None
    description: str | None = None
    project_url: str | None = None
    status: ProjectStatus = "planning"
    featured: bool = False
    budget: int | None = None
    start_date: str | None = None
    end_date: str | None = None


class ProjectUpdate(BaseModel):
    name: str | None = None
    slug: str | None = None
    client_name: str | None = None
    short_description: str | None = None
    description: str | None = None
    project_url: str | None = None
    status: ProjectStatus | None = None
    featured: bool | None = None
    budget: int | None = None
    start_date: str | None = None
    end_date: str | None = None

    @field_validator("name", "status", "featured")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class ProjectResponse(BaseModel):
    id: str
    name: str
    slug: str
    client_name: str | None
    short_description: str | None
    description: str | None
    project_url: str | None
    status: str
    featured: bool
    views_count: int
    budget: int | None
    start_date: str | None
    end_date: str | None
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}
