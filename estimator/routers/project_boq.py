from typing import List, Optional

from fastapi import APIRouter, HTTPException

from estimator.core.errors import NotFoundError, ValidationError
from estimator.database import SessionLocal
from estimator.models.project import Project
from estimator.models.project_boq import ProjectBoq
from estimator.schemas.project_boq import BoqCreate, BoqRecalculate, BoqResponse, BoqUpdate
from estimator.services.boq_service import (
    instantiate_for_project,
    recalculate_boq_entry,
    save_boq_entry,
    update_quantity,
)

router = APIRouter(prefix="/project-boq", tags=["Project BOQ"])


def _get_or_404(db, boq_id: int) -> ProjectBoq:
    row = db.query(ProjectBoq).filter(ProjectBoq.id == int(boq_id)).first()
    if row is None:
        raise HTTPException(status_code=404, detail="BOQ item not found")
    return row


@router.get("", response_model=List[BoqResponse])
def list_boq_items(project_id: int):
    db = SessionLocal()
    try:
        return (
            db.query(ProjectBoq)
            .filter(ProjectBoq.project_id == int(project_id))
            .order_by(ProjectBoq.id.asc())
            .all()
        )
    finally:
        db.close()


@router.post("", response_model=BoqResponse, status_code=201)
def add_boq_item(payload: BoqCreate):
    db = SessionLocal()
    try:
        project = db.query(Project).filter(Project.id == int(payload.project_id)).first()
        if project is None:
            raise HTTPException(status_code=404, detail="Project not found")

        computed = instantiate_for_project(
            db,
            project,
            payload.template_id,
            payload.as_of_date,
            ocm_percentage=payload.ocm_percentage,
            cp_percentage=payload.cp_percentage,
        )
        boq_id = save_boq_entry(project.id, computed, payload.quantity, db=db)
        db.commit()
        return _get_or_404(db, boq_id)
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    finally:
        db.close()


@router.get("/{boq_id}", response_model=BoqResponse)
def get_boq_item(boq_id: int):
    db = SessionLocal()
    try:
        return _get_or_404(db, boq_id)
    finally:
        db.close()


@router.patch("/{boq_id}", response_model=BoqResponse)
def update_boq_item(boq_id: int, payload: BoqUpdate):
    db = SessionLocal()
    try:
        row = update_quantity(db, boq_id, payload.quantity)
        db.commit()
        db.refresh(row)
        return row
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    finally:
        db.close()


@router.delete("/{boq_id}")
def delete_boq_item(boq_id: int):
    db = SessionLocal()
    try:
        row = _get_or_404(db, boq_id)
        db.delete(row)
        db.commit()
        return {"deleted": True, "id": int(boq_id)}
    finally:
        db.close()


@router.post("/{boq_id}/recalculate", response_model=BoqResponse)
def recalculate_boq_item(boq_id: int, payload: Optional[BoqRecalculate] = None):
    as_of = payload.as_of_date if payload is not None else None
    db = SessionLocal()
    try:
        row = recalculate_boq_entry(db, boq_id, as_of)
        db.commit()
        db.refresh(row)
        return row
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    finally:
        db.close()
