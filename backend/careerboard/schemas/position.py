from typing import Literal

from pydantic import BaseModel, field_validator

from careerboard.schemas.taxonomy import TaxonomyRef


PositionStatus = Literal["draft", "open", "closed", "filled"]


class PositionCreate(BaseModel):
    title: str
    slug: str | None = None
    category_id: str | None = None
    location_id: str | None = None
    type_id: str | None = None
    level_id: str | None = None
    summary: str | None = None
    description: str = ""
    requirements: str | None = None
    benefits: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    salary_currency: str = "USD"
    salary_type: str = "yearly"
    application_deadline: str | None = None
    remote_allowed: bool = False
    featured: bool = False
    urgent: bool = False
    status: PositionStatus = "draft"
    is_active: bool = True


class PositionUpdate(BaseModel):
    title: str | None = None
    slug: str | None = None
    category_id: str | None = None
    location_id: str | None = None
    type_id: str | None = None
    level_id: str | None = None
    summary: str | None = None
    description: str | None = None
    requirements: str | None = None
    benefits: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    salary_currency: str | None = None
    salary_type: str | None = None
    application_deadline: str | None = None
    remote_allowed: bool | None = None
    featured: bool | None = None
    urgent: bool | None = None
    status: PositionStatus | None = None
    is_active: bool | None = None

    # Omit a field to leave it alone; these columns cannot be cleared
    @field_validator(
        "title", "description", "salary_currency", "salary_type",
        "remote_allowed", "featured", "urgent", "status", "is_active",
    )
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class PositionResponse(BaseModel):
    id: str
    title: str
    slug: str
    category_id: str | None
    location_id: str | None
    type_id: str | None
    level_id: str | None
    summary: str | None
    description: str
    requirements: str | None
    benefits: str | None
    salary_min: int | None
    salary_max: int | None
    salary_currency: str
    salary_type: str
    application_deadline: str | None
    remote_allowed: bool
    featured: bool
    urgent: bool
    status: str
    views_count: int
    applications_count: int
    is_active: bool
    published_at: str | None
    created_at: str
    updated_at: str
    category: TaxonomyRef | None = None
    location: TaxonomyRef | None = None
    type: TaxonomyRef | None = None
    level: TaxonomyRef | None = None

    model_config = {"from_attributes": True}


class SlugCheckResponse(BaseModel):
    slug: str
    exists: bool
