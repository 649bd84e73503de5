import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from careerboard.database import get_db
from careerboard.dependencies import listing_query
from careerboard.models.project import Project
from careerboard.schemas.position import SlugCheckResponse
from careerboard.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from careerboard.services.listing import run_listing
from careerboard.services.listing_fields import PROJECT_FIELDS
from careerboard.services.listing_query import ListQuery
from careerboard.services.pagination import Page
from careerboard.utils.slug import claim_slug, slug_exists, slugify
from careerboard.utils.timestamps import now_iso

router = APIRouter(prefix="/projects", tags=["projects"])


def _project_to_response(project: Project) -> ProjectResponse:
    return ProjectResponse.model_validate(project)


def _get_project(db: Session, project_id: str) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("", response_model=Page[ProjectResponse])
async def list_projects(query: ListQuery = Depends(listing_query), db: Session = Depends(get_db)):
    projects = [_project_to_response(p) for p in db.query(Project).all()]
    return run_listing(projects, query, PROJECT_FIELDS)


@router.get("/check-slug", response_model=SlugCheckResponse)
async def check_slug(
    slug: str = Query(..., min_length=1),
    exclude_id: str | None = None,
    db: Session = Depends(get_db),
):
    normalized = slugify(slug)
    return SlugCheckResponse(slug=normalized, exists=slug_exists(db, Project, normalized, exclude_id))


@router.get("/slug/{slug}", response_model=ProjectResponse)
async def get_project_by_slug(slug: str, db: Session = Depends(get_db)):
    project = db.query(Project).filter(Project.slug == slug).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return _project_to_response(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: str, db: Session = Depends(get_db)):
    return _project_to_response(_get_project(db, project_id))


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(req: ProjectCreate, db: Session = Depends(get_db)):
    now = now_iso()
    values = req.model_dump()
    values["slug"] = claim_slug(db, Project, req.slug, req.name)
    project = Project(
        id=str(uuid.uuid4()),
        **values,
        views_count=0,
        created_at=now,
        updated_at=now,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return _project_to_response(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(project_id: str, req: ProjectUpdate, db: Session = Depends(get_db)):
    project = _get_project(db, project_id)
    update_data = req.model_dump(exclude_unset=True)
    if "slug" in update_data:
        update_data["slug"] = claim_slug(
            db, Project, update_data["slug"], update_data.get("name") or project.name,
            exclude_id=project.id,
        )
    for key, value in update_data.items():
        setattr(project, key, value)
    project.updated_at = now_iso()
    db.commit()
    db.refresh(project)
    return _project_to_response(project)


@router.delete("/{project_id}")
async def delete_project(project_id: str, db: Session = Depends(get_db)):
    project = _get_project(db, project_id)
    db.delete(project)
    db.commit()
    return {"message": "Project deleted"}


@router.post("/{project_id}/views")
async def track_project_view(project_id: str, db: Session = Depends(get_db)):
    project = _get_project(db, project_id)
    project.views_count = (project.views_count or 0) + 1
    db.commit()
    return {"message": "View count incremented", "views_count": project.views_count}
