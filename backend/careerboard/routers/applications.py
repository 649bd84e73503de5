import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import literal_column
from sqlalchemy.orm import Session, selectinload

from careerboard.database import get_db
from careerboard.dependencies import listing_query
from careerboard.errors import ListingError
from careerboard.models.application import ApplicationActivity, CareerApplication
from careerboard.models.position import CareerPosition
from careerboard.schemas.application import (
    ActivityResponse,
    ApplicationCreate,
    ApplicationResponse,
    GuidedAction,
    GuidedActionsResponse,
    PositionRef,
    StatusChange,
    TransitionResponse,
)
from careerboard.services.listing import count_by, run_listing
from careerboard.services.listing_fields import APPLICATION_FIELDS
from careerboard.services.listing_query import ListQuery, SortSpec
from careerboard.services.pagination import Page
from careerboard.services.sorting import sort_records
from careerboard.services.workflow import (
    APPLICATION_STATUSES,
    apply_guided,
    apply_transition,
    delete_application,
    get_application,
    guided_actions,
    is_terminal,
)
from careerboard.utils.timestamps import now_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


def _application_to_response(app: CareerApplication) -> ApplicationResponse:
    position = None
    if app.position is not None:
        position = PositionRef(id=app.position.id, title=app.position.title, slug=app.position.slug)
    return ApplicationResponse(
        id=app.id,
        position_id=app.position_id,
        first_name=app.first_name,
        last_name=app.last_name,
        full_name=f"{app.first_name} {app.last_name}".strip(),
        email=app.email,
        phone=app.phone,
        linkedin_url=app.linkedin_url,
        portfolio_url=app.portfolio_url,
        github_url=app.github_url,
        cover_letter=app.cover_letter,
        resume_url=app.resume_url,
        status=app.status,
        notes=app.notes,
        source=app.source,
        applied_at=app.applied_at,
        last_activity_at=app.last_activity_at,
        created_at=app.created_at,
        updated_at=app.updated_at,
        position=position,
    )


def _all_applications(db: Session) -> list[ApplicationResponse]:
    apps = db.query(CareerApplication).options(selectinload(CareerApplication.position)).all()
    return [_application_to_response(a) for a in apps]


def _load(db: Session, application_id: str) -> CareerApplication:
    try:
        return get_application(db, application_id)
    except ListingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.post("", response_model=ApplicationResponse, status_code=201)
async def submit_application(req: ApplicationCreate, db: Session = Depends(get_db)):
    position = db.query(CareerPosition).filter(CareerPosition.id == req.position_id).first()
    if not position:
        raise HTTPException(status_code=404, detail="Position not found")
    if position.status != "open" or not position.is_active:
        raise HTTPException(status_code=409, detail="Position is not accepting applications")

    now = now_iso()
    app = CareerApplication(
        id=str(uuid.uuid4()),
        **req.model_dump(),
        status="submitted",
        applied_at=now,
        last_activity_at=now,
        created_at=now,
        updated_at=now,
    )
    db.add(app)

    # Auto-create the submission activity
    db.add(ApplicationActivity(
        id=str(uuid.uuid4()),
        application_id=app.id,
        activity_type="submitted",
        new_status="submitted",
        description="Application submitted",
        created_at=now,
    ))
    position.applications_count = (position.applications_count or 0) + 1
    db.commit()
    db.refresh(app)
    logger.info("New application %s for position %s", app.id, position.id)
    return _application_to_response(app)


@router.get("", response_model=Page[ApplicationResponse])
async def list_applications(query: ListQuery = Depends(listing_query), db: Session = Depends(get_db)):
    return run_listing(_all_applications(db), query, APPLICATION_FIELDS)


@router.get("/all", response_model=list[ApplicationResponse])
async def list_all_applications(db: Session = Depends(get_db)):
    return sort_records(_all_applications(db), SortSpec.parse("newest"), APPLICATION_FIELDS)


@router.get("/status-counts", response_model=dict[str, int])
async def status_counts(db: Session = Depends(get_db)):
    return count_by(db.query(CareerApplication).all(), "status", APPLICATION_STATUSES)


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application_detail(application_id: str, db: Session = Depends(get_db)):
    return _application_to_response(_load(db, application_id))


@router.get("/{application_id}/activities", response_model=list[ActivityResponse])
async def list_activities(application_id: str, db: Session = Depends(get_db)):
    _load(db, application_id)
    activities = (
        db.query(ApplicationActivity)
        .filter(ApplicationActivity.application_id == application_id)
        .order_by(ApplicationActivity.created_at.desc(), literal_column("rowid").desc())
        .all()
    )
    return [ActivityResponse.model_validate(a) for a in activities]


@router.get("/{application_id}/actions", response_model=GuidedActionsResponse)
async def list_guided_actions(application_id: str, db: Session = Depends(get_db)):
    app = _load(db, application_id)
    return GuidedActionsResponse(
        status=app.status,
        terminal=is_terminal(app.status),
        actions=guided_actions(app.status),
    )


@router.post("/{application_id}/status", response_model=TransitionResponse)
async def change_status(application_id: str, req: StatusChange, db: Session = Depends(get_db)):
    try:
        result = apply_transition(db, application_id, req.status, req.note)
    except ListingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return TransitionResponse(
        application=_application_to_response(result.application),
        previous_status=result.previous_status,
        changed=result.changed,
    )


@router.post("/{application_id}/advance", response_model=TransitionResponse)
async def advance_status(application_id: str, req: GuidedAction, db: Session = Depends(get_db)):
    try:
        result = apply_guided(db, application_id, req.status)
    except ListingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return TransitionResponse(
        application=_application_to_response(result.application),
        previous_status=result.previous_status,
        changed=result.changed,
    )


@router.delete("/{application_id}")
async def remove_application(application_id: str, db: Session = Depends(get_db)):
    try:
        delete_application(db, application_id)
    except ListingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return {"message": "Application deleted"}
