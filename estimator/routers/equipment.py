from typing import List, Optional, Union

from fastapi import APIRouter, HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from estimator.database import SessionLocal
from estimator.models.equipment import Equipment
from estimator.schemas.equipment import EquipmentCreate, EquipmentResponse, EquipmentUpdate

router = APIRouter(prefix="/master/equipment", tags=["Equipment"])


def _get_or_404(db, equipment_id: int) -> Equipment:
    row = db.query(Equipment).filter(Equipment.id == int(equipment_id)).first()
    if row is None:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return row


@router.get("", response_model=List[EquipmentResponse])
def list_equipment(search: Optional[str] = None):
    db = SessionLocal()
    try:
        q = db.query(Equipment)
        if search:
            q = q.filter(
                or_(
                    Equipment.description.ilike(f"%{search}%"),
                    Equipment.complete_description.ilike(f"%{search}%"),
                )
            )
        return q.order_by(Equipment.no.asc()).all()
    finally:
        db.close()


@router.post(
    "",
    response_model=Union[List[EquipmentResponse], EquipmentResponse],
    status_code=201,
)
def create_equipment(payload: Union[List[EquipmentCreate], EquipmentCreate]):
    items = payload if isinstance(payload, list) else [payload]
    if not items:
        raise HTTPException(status_code=400, detail="At least one equipment required")

    numbers = [item.no for item in items]
    if len(set(numbers)) != len(numbers):
        raise HTTPException(status_code=409, detail="Duplicate equipment numbers in request")

    db = SessionLocal()
    try:
        taken = db.query(Equipment.no).filter(Equipment.no.in_(numbers)).all()
        if taken:
            raise HTTPException(
                status_code=409,
                detail=f"Equipment number already exists: {sorted(n for (n,) in taken)}",
            )

        rows = [Equipment(**item.model_dump()) for item in items]
        db.add_all(rows)
        db.commit()
        for row in rows:
            db.refresh(row)
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Equipment number already exists") from exc
    finally:
        db.close()

    return rows if isinstance(payload, list) else rows[0]


@router.get("/{equipment_id}", response_model=EquipmentResponse)
def get_equipment(equipment_id: int):
    db = SessionLocal()
    try:
        return _get_or_404(db, equipment_id)
    finally:
        db.close()


@router.patch("/{equipment_id}", response_model=EquipmentResponse)
def update_equipment(equipment_id: int, payload: EquipmentUpdate):
    db = SessionLocal()
    try:
        row = _get_or_404(db, equipment_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(row, key, value)
        db.commit()
        db.refresh(row)
        return row
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Equipment number already exists") from exc
    finally:
        db.close()


@router.delete("/{equipment_id}")
def delete_equipment(equipment_id: int):
    db = SessionLocal()
    try:
        row = _get_or_404(db, equipment_id)
        db.delete(row)
        db.commit()
        return {"deleted": True, "id": int(equipment_id)}
    finally:
        db.close()
