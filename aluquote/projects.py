"""
Saved project store.

Each row keeps a verbatim copy of the estimate form. Only the most recent
SAVED_PROJECT_LIMIT rows survive a save; derived results are never stored.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from . import models
from .config import settings
from .schemas import EstimateInput

logger = logging.getLogger(__name__)


def _newest_first(query):
    return query.order_by(models.SavedProject.created_at.desc(), models.SavedProject.id.desc())


def save_project(db: Session, name: Optional[str], estimate_input: EstimateInput,
                 limit: int = None) -> models.SavedProject:
    limit = settings.SAVED_PROJECT_LIMIT if limit is None else limit
    if limit < 1:
        raise ValueError(f"Saved project limit must be at least 1, got {limit}")
    now = datetime.utcnow()
    name = (name or "").strip() or f"Estimate {now.strftime('%Y-%m-%d %H:%M:%S')}"

    project = models.SavedProject(
        name=name,
        state=estimate_input.model_dump(mode="json"),
        created_at=now,
    )
    db.add(project)
    db.flush()

    # The row just saved always survives; older rows fill the remaining slots
    older = db.query(models.SavedProject).filter(models.SavedProject.id != project.id)
    stale = _newest_first(older).offset(limit - 1).all()
    for row in stale:
        db.delete(row)
    if stale:
        logger.info("Pruned %d saved projects beyond the newest %d", len(stale), limit)

    db.commit()
    db.refresh(project)
    return project


def list_projects(db: Session, limit: int = None) -> list:
    limit = settings.SAVED_PROJECT_LIMIT if limit is None else limit
    return _newest_first(db.query(models.SavedProject)).limit(limit).all()


def get_project(db: Session, project_id: int) -> Optional[models.SavedProject]:
    return db.query(models.SavedProject).filter(models.SavedProject.id == project_id).first()


def load_input(project: models.SavedProject) -> EstimateInput:
    """The saved form snapshot as an EstimateInput."""
    return EstimateInput(**project.state)
