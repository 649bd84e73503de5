import re

from fastapi import HTTPException
from sqlalchemy.orm import Session

MAX_SLUG_LENGTH = 60


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Lowercase, hyphen-separated slug; never empty."""
    if not text:
        return ""
    slug = text.strip().lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug).strip("-")
    if len(slug) > max_length:
        # Cut back to the last whole word
        slug = re.sub(r"-[^-]*$", "", slug[:max_length])
    return slug or "untitled"


def slug_exists(db: Session, model, slug: str, exclude_id: str | None = None) -> bool:
    query = db.query(model.id).filter(model.slug == slug)
    if exclude_id:
        query = query.filter(model.id != exclude_id)
    return query.first() is not None


def unique_slug(db: Session, model, text: str, exclude_id: str | None = None) -> str:
    base = slugify(text)
    slug = base
    counter = 1
    while slug_exists(db, model, slug, exclude_id):
        slug = f"{base}-{counter}"
        counter += 1
    return slug


def claim_slug(db: Session, model, requested: str | None, fallback_text: str,
               exclude_id: str | None = None) -> str:
    """Slug for a create/update: an explicit slug must be free, otherwise derive one."""
    if requested:
        slug = slugify(requested)
        if slug_exists(db, model, slug, exclude_id):
            raise HTTPException(status_code=409, detail=f"Slug '{slug}' is already in use")
        return slug
    return unique_slug(db, model, fallback_text, exclude_id)
