from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import projects, schemas
from ..database import get_db
from ..pricing_engine import compute_estimate

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/", response_model=schemas.Project)
def save_project(project: schemas.ProjectCreate, db: Session = Depends(get_db)):
    return projects.save_project(db, project.name, project.input)


@router.get("/", response_model=List[schemas.Project])
def list_projects(db: Session = Depends(get_db)):
    return projects.list_projects(db)


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(project_id: int, db: Session = Depends(get_db)):
    project = projects.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("/{project_id}/estimate", response_model=schemas.EstimateResult)
def estimate_project(project_id: int, db: Session = Depends(get_db)):
    """Recompute the estimate from the saved form snapshot."""
    project = projects.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return compute_estimate(projects.load_input(project))
