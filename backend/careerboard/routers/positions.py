import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload

from careerboard.database import get_db
from careerboard.dependencies import listing_query
from careerboard.models.position import CareerPosition
from careerboard.models.taxonomy import CareerCategory, CareerLevel, CareerLocation, CareerType
from careerboard.schemas.position import (
    PositionCreate,
    PositionResponse,
    PositionUpdate,
    SlugCheckResponse,
)
from careerboard.services.listing import run_listing
from careerboard.services.listing_fields import POSITION_FIELDS
from careerboard.services.listing_query import ListQuery, SortSpec
from careerboard.services.pagination import Page
from careerboard.services.sorting import sort_records
from careerboard.utils.slug import claim_slug, slug_exists, slugify
from careerboard.utils.timestamps import now_iso

router = APIRouter(prefix="/positions", tags=["positions"])

_REFERENCES = {
    "category_id": (CareerCategory, "Category"),
    "location_id": (CareerLocation, "Location"),
    "type_id": (CareerType, "Type"),
    "level_id": (CareerLevel, "Level"),
}


def _position_to_response(position: CareerPosition) -> PositionResponse:
    return PositionResponse.model_validate(position)


def _positions_query(db: Session, public: bool = False):
    query = db.query(CareerPosition).options(
        selectinload(CareerPosition.category),
        selectinload(CareerPosition.location),
        selectinload(CareerPosition.type),
        selectinload(CareerPosition.level),
    )
    if public:
        query = query.filter(CareerPosition.status == "open", CareerPosition.is_active.is_(True))
    return query


def _get_position(db: Session, position_id: str) -> CareerPosition:
    position = db.query(CareerPosition).filter(CareerPosition.id == position_id).first()
    if not position:
        raise HTTPException(status_code=404, detail="Position not found")
    return position


def _check_references(db: Session, values: dict):
    for field, (model, label) in _REFERENCES.items():
        ref_id = values.get(field)
        if ref_id and not db.query(model.id).filter(model.id == ref_id).first():
            raise HTTPException(status_code=404, detail=f"{label} not found")


@router.get("", response_model=Page[PositionResponse])
async def list_positions(query: ListQuery = Depends(listing_query), db: Session = Depends(get_db)):
    positions = [_position_to_response(p) for p in _positions_query(db).all()]
    return run_listing(positions, query, POSITION_FIELDS)


@router.get("/public", response_model=Page[PositionResponse])
async def list_public_positions(query: ListQuery = Depends(listing_query), db: Session = Depends(get_db)):
    positions = [_position_to_response(p) for p in _positions_query(db, public=True).all()]
    return run_listing(positions, query, POSITION_FIELDS)


@router.get("/featured", response_model=list[PositionResponse])
async def featured_positions(limit: int = Query(6, ge=1, le=50), db: Session = Depends(get_db)):
    positions = [
        _position_to_response(p)
        for p in _positions_query(db, public=True).filter(CareerPosition.featured.is_(True)).all()
    ]
    return sort_records(positions, SortSpec.parse("newest"), POSITION_FIELDS)[:limit]


@router.get("/check-slug", response_model=SlugCheckResponse)
async def check_slug(
    slug: str = Query(..., min_length=1),
    exclude_id: str | None = None,
    db: Session = Depends(get_db),
):
    normalized = slugify(slug)
    return SlugCheckResponse(
        slug=normalized,
        exists=slug_exists(db, CareerPosition, normalized, exclude_id),
    )


@router.get("/slug/{slug}", response_model=PositionResponse)
async def get_public_position(slug: str, db: Session = Depends(get_db)):
    position = _positions_query(db, public=True).filter(CareerPosition.slug == slug).first()
    if not position:
        raise HTTPException(status_code=404, detail="Position not found")
    position.views_count = (position.views_count or 0) + 1
    db.commit()
    db.refresh(position)
    return _position_to_response(position)


@router.get("/{position_id}", response_model=PositionResponse)
async def get_position(position_id: str, db: Session = Depends(get_db)):
    return _position_to_response(_get_position(db, position_id))


@router.get("/{position_id}/related", response_model=list[PositionResponse])
async def related_positions(
    position_id: str,
    limit: int = Query(3, ge=1, le=20),
    db: Session = Depends(get_db),
):
    position = _get_position(db, position_id)
    if not position.category_id:
        return []
    related = (
        _positions_query(db, public=True)
        .filter(CareerPosition.category_id == position.category_id)
        .filter(CareerPosition.id != position.id)
        .all()
    )
    ordered = sort_records([_position_to_response(p) for p in related], SortSpec.parse("newest"), POSITION_FIELDS)
    return ordered[:limit]


@router.post("", response_model=PositionResponse, status_code=201)
async def create_position(req: PositionCreate, db: Session = Depends(get_db)):
    values = req.model_dump()
    _check_references(db, values)
    now = now_iso()
    values["slug"] = claim_slug(db, CareerPosition, req.slug, req.title)

    position = CareerPosition(
        id=str(uuid.uuid4()),
        **values,
        views_count=0,
        applications_count=0,
        published_at=now if req.status == "open" else None,
        created_at=now,
        updated_at=now,
    )
    db.add(position)
    db.commit()
    db.refresh(position)
    return _position_to_response(position)


@router.put("/{position_id}", response_model=PositionResponse)
async def update_position(position_id: str, req: PositionUpdate, db: Session = Depends(get_db)):
    position = _get_position(db, position_id)
    update_data = req.model_dump(exclude_unset=True)
    _check_references(db, update_data)
    if "slug" in update_data:
        update_data["slug"] = claim_slug(
            db, CareerPosition, update_data["slug"], update_data.get("title") or position.title,
            exclude_id=position.id,
        )

    now = now_iso()
    for key, value in update_data.items():
        setattr(position, key, value)
    if position.status == "open" and not position.published_at:
        position.published_at = now
    position.updated_at = now

    db.commit()
    db.refresh(position)
    return _position_to_response(position)


@router.delete("/{position_id}")
async def delete_position(position_id: str, db: Session = Depends(get_db)):
    position = _get_position(db, position_id)
    db.delete(position)
    db.commit()
    return {"message": "Position deleted"}
