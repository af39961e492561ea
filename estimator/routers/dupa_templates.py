import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from estimator.core.errors import NotFoundError, ValidationError
from estimator.database import SessionLocal
from estimator.models.dupa_template import DupaTemplate
from estimator.models.project import Project
from estimator.models.project_boq import ProjectBoq
from estimator.repositories.master_data import SqlRateLookup, SqlTemplateStore
from estimator.schemas.dupa_template import (
    ComputedDupaResponse,
    DupaTemplateCreate,
    DupaTemplateResponse,
    DupaTemplateUpdate,
    InstantiateRequest,
)
from estimator.services.boq_service import project_hauling_cost
from estimator.services.dupa_instantiation import instantiate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dupa-templates", tags=["DUPA Templates"])

_ENTRY_FIELDS = ("labor_template", "equipment_template", "material_template")


def _get_or_404(db, template_id: int) -> DupaTemplate:
    row = db.query(DupaTemplate).filter(DupaTemplate.id == int(template_id)).first()
    if row is None:
        raise HTTPException(status_code=404, detail="DUPA template not found")
    return row


@router.get("", response_model=List[DupaTemplateResponse])
def list_templates(
    search: Optional[str] = None,
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
):
    db = SessionLocal()
    try:
        q = db.query(DupaTemplate)
        if search:
            q = q.filter(
                or_(
                    DupaTemplate.pay_item_number.ilike(f"%{search}%"),
                    DupaTemplate.pay_item_description.ilike(f"%{search}%"),
                )
            )
        if category:
            q = q.filter(DupaTemplate.category == category)
        if is_active is not None:
            q = q.filter(DupaTemplate.is_active == bool(is_active))
        return q.order_by(DupaTemplate.pay_item_number.asc()).all()
    finally:
        db.close()


@router.post("", response_model=DupaTemplateResponse, status_code=201)
def create_template(payload: DupaTemplateCreate):
    db = SessionLocal()
    try:
        exists = (
            db.query(DupaTemplate.id)
            .filter(DupaTemplate.pay_item_number == payload.pay_item_number)
            .first()
        )
        if exists:
            raise HTTPException(status_code=409, detail="Template for this pay item already exists")

        # JSON columns need plain values (designation enums as strings).
        row = DupaTemplate(**payload.model_dump(mode="json"))
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Template for this pay item already exists") from exc
    finally:
        db.close()


@router.get("/{template_id}", response_model=DupaTemplateResponse)
def get_template(template_id: int):
    db = SessionLocal()
    try:
        return _get_or_404(db, template_id)
    finally:
        db.close()


@router.patch("/{template_id}", response_model=DupaTemplateResponse)
def update_template(template_id: int, payload: DupaTemplateUpdate):
    db = SessionLocal()
    try:
        row = _get_or_404(db, template_id)
        data = payload.model_dump(mode="json", exclude_unset=True)
        for key, value in data.items():
            if value is None and key != "pay_item_id":
                continue
            setattr(row, key, value)
        db.commit()
        db.refresh(row)
        return row
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Template for this pay item already exists") from exc
    finally:
        db.close()


@router.delete("/{template_id}")
def delete_template(template_id: int):
    db = SessionLocal()
    try:
        row = _get_or_404(db, template_id)
        in_use = db.query(ProjectBoq.id).filter(ProjectBoq.template_id == row.id).first()
        if in_use:
            raise HTTPException(
                status_code=409,
                detail="Template is used by project BOQ items and cannot be deleted",
            )
        db.delete(row)
        db.commit()
        return {"deleted": True, "id": int(template_id)}
    finally:
        db.close()


@router.post("/{template_id}/instantiate", response_model=ComputedDupaResponse)
def instantiate_template(template_id: int, payload: InstantiateRequest):
    db = SessionLocal()
    try:
        hauling = 0.0
        if payload.project_id is not None:
            project = db.query(Project).filter(Project.id == int(payload.project_id)).first()
            if project is None:
                raise HTTPException(status_code=404, detail="Project not found")
            hauling = project_hauling_cost(db, project)

        computed = instantiate(
            template_id,
            payload.location,
            payload.as_of_date,
            templates=SqlTemplateStore(db),
            lookup=SqlRateLookup(db),
            ocm_percentage=payload.ocm_percentage,
            cp_percentage=payload.cp_percentage,
            hauling_cost_per_unit=hauling,
        )
        return computed.to_dict()
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    finally:
        db.close()
