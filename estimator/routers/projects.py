from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import IntegrityError

from estimator.core.errors import NotFoundError
from estimator.database import SessionLocal
from estimator.models.project import Project
from estimator.schemas.project import (
    ProjectCostSummaryResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectStatus,
    ProjectUpdate,
)
from estimator.services.boq_service import project_cost_summary

router = APIRouter(prefix="/projects", tags=["Projects"])


def _get_or_404(db, project_id: int) -> Project:
    row = db.query(Project).filter(Project.id == int(project_id)).first()
    if row is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return row


def _contract_taken(db, contract_id: Optional[str], exclude_id: Optional[int] = None) -> bool:
    if not contract_id:
        return False
    q = db.query(Project.id).filter(Project.contract_id == contract_id)
    if exclude_id is not None:
        q = q.filter(Project.id != int(exclude_id))
    return q.first() is not None


@router.get("", response_model=List[ProjectResponse])
def list_projects(
    status: Optional[ProjectStatus] = None,
    district: Optional[str] = None,
    search: Optional[str] = None,
):
    db = SessionLocal()
    try:
        q = db.query(Project)
        if status:
            q = q.filter(Project.status == status)
        if district:
            q = q.filter(Project.district.ilike(f"%{district}%"))
        if search:
            q = q.filter(Project.project_name.ilike(f"%{search}%"))
        return q.order_by(Project.created_at.desc(), Project.id.desc()).all()
    finally:
        db.close()


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(payload: ProjectCreate):
    db = SessionLocal()
    try:
        if _contract_taken(db, payload.contract_id):
            raise HTTPException(status_code=409, detail="Contract ID already exists")
        if payload.start_date and payload.end_date and payload.end_date < payload.start_date:
            raise HTTPException(status_code=400, detail="end_date must not be before start_date")

        data = payload.model_dump()
        if payload.hauling_config is not None:
            data["hauling_config"] = payload.hauling_config.model_dump(mode="json")

        row = Project(**data)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Contract ID already exists") from exc
    finally:
        db.close()


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int):
    db = SessionLocal()
    try:
        return _get_or_404(db, project_id)
    finally:
        db.close()


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(project_id: int, payload: ProjectUpdate):
    db = SessionLocal()
    try:
        row = _get_or_404(db, project_id)
        data = payload.model_dump(exclude_unset=True)

        if _contract_taken(db, data.get("contract_id"), exclude_id=row.id):
            raise HTTPException(status_code=409, detail="Contract ID already exists")

        if "hauling_config" in data and payload.hauling_config is not None:
            data["hauling_config"] = payload.hauling_config.model_dump(mode="json")

        nullable = {"contract_id", "start_date", "end_date", "hauling_config"}
        for key, value in data.items():
            if value is None and key not in nullable:
                continue
            setattr(row, key, value)

        if row.start_date and row.end_date and row.end_date < row.start_date:
            raise HTTPException(status_code=400, detail="end_date must not be before start_date")

        db.commit()
        db.refresh(row)
        return row
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Contract ID already exists") from exc
    finally:
        db.close()


@router.delete("/{project_id}")
def delete_project(project_id: int):
    db = SessionLocal()
    try:
        row = _get_or_404(db, project_id)
        db.delete(row)
        db.commit()
        return {"deleted": True, "id": int(project_id)}
    finally:
        db.close()


@router.get("/{project_id}/summary", response_model=ProjectCostSummaryResponse)
def get_project_summary(project_id: int):
    db = SessionLocal()
    try:
        summary = project_cost_summary(db, project_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    finally:
        db.close()

    return {"project_id": int(project_id), **asdict(summary)}
