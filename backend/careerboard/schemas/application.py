import re

from pydantic import BaseModel, field_validator

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ApplicationCreate(BaseModel):
    position_id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None
    github_url: str | None = None
    cover_letter: str | None = None
    resume_url: str | None = None
    source: str | None = None

    @field_validator("position_id", "first_name", "last_name")
    @classmethod
    def _required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        value = value.strip()
        if not EMAIL_RE.match(value):
            raise ValueError("Invalid email format")
        return value


class PositionRef(BaseModel):
    id: str
    title: str
    slug: str


class ApplicationResponse(BaseModel):
    id: str
    position_id: str | None
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str | None
    linkedin_url: str | None
    portfolio_url: str | None
    github_url: str | None
    cover_letter: str | None
    resume_url: str | None
    status: str
    notes: str | None
    source: str | None
    applied_at: str
    last_activity_at: str
    created_at: str
    updated_at: str
    position: PositionRef | None = None


class StatusChange(BaseModel):
    status: str
    note: str | None = None


class GuidedAction(BaseModel):
    status: str


class TransitionResponse(BaseModel):
    application: ApplicationResponse
    previous_status: str
    changed: bool


class GuidedActionsResponse(BaseModel):
    status: str
    terminal: bool
    actions: list[str]


class ActivityResponse(BaseModel):
    id: str
    application_id: str
    activity_type: str
    old_status: str | None
    new_status: str | None
    description: str | None
    notes: str | None
    created_at: str

    model_config = {"from_attributes": True}
