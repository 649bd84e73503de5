from pydantic import BaseModel, field_validator


class TaxonomyCreate(BaseModel):
    name: str
    slug: str | None = None
    description: str | None = None
    sort_order: int = 0
    is_active: bool = True
    # kind-specific extras; ignored where the table has no such column
    icon: str | None = None
    color: str | None = None
    city: str | None = None
    country: str | None = None
    is_remote: bool | None = None
    years_min: int | None = None
    years_max: int | None = None


class TaxonomyUpdate(BaseModel):
    name: str | None = None
    slug: str | None = None
    description: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None
    icon: str | None = None
    color: str | None = None
    city: str | None = None
    country: str | None = None
    is_remote: bool | None = None
    years_min: int | None = None
    years_max: int | None = None

    @field_validator("name", "sort_order", "is_active", "is_remote", "years_min")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class TaxonomyRef(BaseModel):
    id: str
    name: str
    slug: str

    model_config = {"from_attributes": True}


class TaxonomyResponse(TaxonomyRef):
    sort_order: int
    is_active: bool
    created_at: str
    updated_at: str
    position_count: int = 0
