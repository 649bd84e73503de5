import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from careerboard.database import get_db
from careerboard.dependencies import listing_query
from careerboard.models.post import Post
from careerboard.schemas.post import PostCreate, PostResponse, PostUpdate
from careerboard.services.listing import run_listing
from careerboard.services.listing_fields import POST_FIELDS
from careerboard.services.listing_query import ListQuery
from careerboard.services.pagination import Page
from careerboard.utils.slug import claim_slug
from careerboard.utils.timestamps import now_iso

router = APIRouter(prefix="/posts", tags=["posts"])


def _get_post(db: Session, post_id: str) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.get("", response_model=Page[PostResponse])
async def list_posts(query: ListQuery = Depends(listing_query), db: Session = Depends(get_db)):
    posts = [PostResponse.model_validate(p) for p in db.query(Post).all()]
    return run_listing(posts, query, POST_FIELDS)


@router.get("/slug/{slug}", response_model=PostResponse)
async def get_published_post(slug: str, db: Session = Depends(get_db)):
    post = db.query(Post).filter(Post.slug == slug, Post.status == "published").first()
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    post.views_count = (post.views_count or 0) + 1
    db.commit()
    db.refresh(post)
    return PostResponse.model_validate(post)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(req: PostCreate, db: Session = Depends(get_db)):
    now = now_iso()
    values = req.model_dump()
    values["slug"] = claim_slug(db, Post, req.slug, req.title)
    post = Post(
        id=str(uuid.uuid4()),
        **values,
        views_count=0,
        published_at=now if req.status == "published" else None,
        created_at=now,
        updated_at=now,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return PostResponse.model_validate(post)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(post_id: str, req: PostUpdate, db: Session = Depends(get_db)):
    post = _get_post(db, post_id)
    update_data = req.model_dump(exclude_unset=True)
    if "slug" in update_data:
        update_data["slug"] = claim_slug(
            db, Post, update_data["slug"], update_data.get("title") or post.title,
            exclude_id=post.id,
        )
    now = now_iso()
    for key, value in update_data.items():
        setattr(post, key, value)
    if post.status == "published" and not post.published_at:
        post.published_at = now
    post.updated_at = now
    db.commit()
    db.refresh(post)
    return PostResponse.model_validate(post)


@router.delete("/{post_id}")
async def delete_post(post_id: str, db: Session = Depends(get_db)):
    post = _get_post(db, post_id)
    db.delete(post)
    db.commit()
    return {"message": "Post deleted"}
