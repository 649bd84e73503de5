"""
CRUD for the career lookup tables (categories, locations, types, levels).

The four tables share one shape, so one router factory serves all of them.
"""
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from careerboard.database import get_db
from careerboard.models.position import CareerPosition
from careerboard.models.taxonomy import CareerCategory, CareerLevel, CareerLocation, CareerType
from careerboard.schemas.position import PositionResponse
from careerboard.schemas.taxonomy import TaxonomyCreate, TaxonomyResponse, TaxonomyUpdate
from careerboard.services.listing_fields import POSITION_FIELDS
from careerboard.services.listing_query import SortSpec
from careerboard.services.sorting import sort_records
from careerboard.utils.slug import claim_slug
from careerboard.utils.timestamps import now_iso


def build_taxonomy_router(prefix: str, model, fk_column, label: str) -> APIRouter:
    router = APIRouter(prefix=f"/{prefix}", tags=["taxonomy"])

    def _to_response(item, db: Session) -> TaxonomyResponse:
        count = db.query(func.count(CareerPosition.id)).filter(fk_column == item.id).scalar()
        return TaxonomyResponse(
            id=item.id,
            name=item.name,
            slug=item.slug,
            sort_order=item.sort_order,
            is_active=item.is_active,
            created_at=item.created_at,
            updated_at=item.updated_at,
            position_count=count,
        )

    def _get(db: Session, item_id: str):
        item = db.query(model).filter(model.id == item_id).first()
        if not item:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return item

    def _apply(item, values: dict):
        # Only columns this table actually has; extras are ignored
        for key, value in values.items():
            if hasattr(model, key):
                setattr(item, key, value)

    @router.get("", response_model=list[TaxonomyResponse])
    async def list_items(active_only: bool = False, db: Session = Depends(get_db)):
        query = db.query(model)
        if active_only:
            query = query.filter(model.is_active.is_(True))
        items = query.order_by(model.sort_order, model.name).all()
        return [_to_response(i, db) for i in items]

    @router.post("", response_model=TaxonomyResponse, status_code=201)
    async def create_item(req: TaxonomyCreate, db: Session = Depends(get_db)):
        now = now_iso()
        values = req.model_dump(exclude_none=True)
        values["slug"] = claim_slug(db, model, req.slug, req.name)
        if "sort_order" not in req.model_fields_set:
            # New items go to the end of the list
            values["sort_order"] = (db.query(func.max(model.sort_order)).scalar() or 0) + 1
        item = model(id=str(uuid.uuid4()), created_at=now, updated_at=now)
        _apply(item, values)
        db.add(item)
        db.commit()
        db.refresh(item)
        return _to_response(item, db)

    @router.put("/{item_id}", response_model=TaxonomyResponse)
    async def update_item(item_id: str, req: TaxonomyUpdate, db: Session = Depends(get_db)):
        item = _get(db, item_id)
        values = req.model_dump(exclude_unset=True)
        if "slug" in values:
            values["slug"] = claim_slug(
                db, model, values["slug"], values.get("name") or item.name, exclude_id=item.id
            )
        _apply(item, values)
        item.updated_at = now_iso()
        db.commit()
        db.refresh(item)
        return _to_response(item, db)

    @router.delete("/{item_id}")
    async def delete_item(item_id: str, db: Session = Depends(get_db)):
        item = _get(db, item_id)
        db.delete(item)
        db.commit()
        return {"message": f"{label} deleted"}

    @router.get("/{item_id}/positions", response_model=list[PositionResponse])
    async def positions_for_item(item_id: str, db: Session = Depends(get_db)):
        _get(db, item_id)
        positions = db.query(CareerPosition).filter(fk_column == item_id).all()
        return sort_records(
            [PositionResponse.model_validate(p) for p in positions],
            SortSpec.parse("newest"),
            POSITION_FIELDS,
        )

    return router


categories_router = build_taxonomy_router("categories", CareerCategory, CareerPosition.category_id, "Category")
locations_router = build_taxonomy_router("locations", CareerLocation, CareerPosition.location_id, "Location")
types_router = build_taxonomy_router("types", CareerType, CareerPosition.type_id, "Type")
levels_router = build_taxonomy_router("levels", CareerLevel, CareerPosition.level_id, "Level")
