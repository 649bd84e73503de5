"""
Per-kind field contracts for the listing engine.

Each record kind declares which of its fields the filter and sort stages
read, so one engine serves positions, applications, projects and posts.
Paths may be dotted to reach into a relation (``category.slug``).
"""
from collections.abc import Mapping

from pydantic import BaseModel


class ListingFields(BaseModel):
    kind: str
    search: tuple[str, ...] = ()
    # criterion key -> candidate paths; a criterion matches if any path equals it
    equality: dict[str, tuple[str, ...]] = {}
    flags: dict[str, str] = {}
    created: str = "created_at"
    title: str = "title"
    salary_high: str | None = None
    salary_low: str | None = None
    deadline: str | None = None

    model_config = {"frozen": True}

    @property
    def sort_keys(self) -> set[str]:
        keys = {"newest", "oldest", "title"}
        if self.salary_high:
            keys.add("salary_high")
        if self.salary_low:
            keys.add("salary_low")
        if self.deadline:
            keys.add("deadline")
        return keys

    @property
    def criteria_keys(self) -> set[str]:
        keys = set(self.equality) | set(self.flags)
        if self.search:
            keys.add("search")
        return keys


def resolve(record, path: str):
    """Read a possibly dotted path from an object or mapping; None if absent."""
    value = record
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


POSITION_FIELDS = ListingFields(
    kind="position",
    search=("title", "summary", "description"),
    equality={
        "category": ("category_id", "category.slug"),
        "location": ("location_id", "location.slug"),
        "type": ("type_id", "type.slug"),
        "level": ("level_id", "level.slug"),
        "status": ("status",),
    },
    flags={"featured": "featured", "urgent": "urgent", "remote": "remote_allowed"},
    created="created_at",
    title="title",
    salary_high="salary_max",
    salary_low="salary_min",
    deadline="application_deadline",
)

APPLICATION_FIELDS = ListingFields(
    kind="application",
    search=("first_name", "last_name", "email", "position.title"),
    equality={
        "status": ("status",),
        "position": ("position_id", "position.slug"),
    },
    created="applied_at",
    title="full_name",
)

PROJECT_FIELDS = ListingFields(
    kind="project",
    search=("name", "short_description", "description", "client_name"),
    equality={"status": ("status",)},
    flags={"featured": "featured"},
    created="created_at",
    title="name",
    salary_high="budget",
    salary_low="budget",
    deadline="end_date",
)

POST_FIELDS = ListingFields(
    kind="post",
    search=("title", "excerpt"),
    equality={"category": ("category",), "status": ("status",)},
    flags={"featured": "featured"},
    created="created_at",
    title="title",
)
