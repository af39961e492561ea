from typing import List, Optional, Union

from fastapi import APIRouter, HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from estimator.database import SessionLocal
from estimator.models.material import Material
from estimator.schemas.material import MaterialCreate, MaterialResponse, MaterialUpdate

router = APIRouter(prefix="/master/materials", tags=["Materials"])


def _get_or_404(db, material_id: int) -> Material:
    row = db.query(Material).filter(Material.id == int(material_id)).first()
    if row is None:
        raise HTTPException(status_code=404, detail="Material not found")
    return row


@router.get("", response_model=List[MaterialResponse])
def list_materials(
    search: Optional[str] = None,
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
):
    db = SessionLocal()
    try:
        q = db.query(Material)
        if search:
            q = q.filter(
                or_(
                    Material.material_code.ilike(f"%{search}%"),
                    Material.material_description.ilike(f"%{search}%"),
                )
            )
        if category:
            q = q.filter(Material.category == category.strip().upper())
        if is_active is not None:
            q = q.filter(Material.is_active == bool(is_active))
        return q.order_by(Material.material_code.asc()).all()
    finally:
        db.close()


@router.post(
    "",
    response_model=Union[List[MaterialResponse], MaterialResponse],
    status_code=201,
)
def create_materials(payload: Union[List[MaterialCreate], MaterialCreate]):
    items = payload if isinstance(payload, list) else [payload]
    if not items:
        raise HTTPException(status_code=400, detail="At least one material required")

    codes = [item.material_code for item in items]
    if len(set(codes)) != len(codes):
        raise HTTPException(status_code=409, detail="Duplicate material codes in request")

    db = SessionLocal()
    try:
        taken = db.query(Material.material_code).filter(Material.material_code.in_(codes)).all()
        if taken:
            raise HTTPException(
                status_code=409,
                detail=f"Material code already exists: {', '.join(sorted(c for (c,) in taken))}",
            )

        rows = [Material(**item.model_dump()) for item in items]
        db.add_all(rows)
        db.commit()
        for row in rows:
            db.refresh(row)
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Material code already exists") from exc
    finally:
        db.close()

    return rows if isinstance(payload, list) else rows[0]


@router.get("/{material_id}", response_model=MaterialResponse)
def get_material(material_id: int):
    db = SessionLocal()
    try:
        return _get_or_404(db, material_id)
    finally:
        db.close()


@router.patch("/{material_id}", response_model=MaterialResponse)
def update_material(material_id: int, payload: MaterialUpdate):
    db = SessionLocal()
    try:
        row = _get_or_404(db, material_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None or key == "category":
                setattr(row, key, value)
        db.commit()
        db.refresh(row)
        return row
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Material code already exists") from exc
    finally:
        db.close()


@router.delete("/{material_id}")
def delete_material(material_id: int):
    db = SessionLocal()
    try:
        row = _get_or_404(db, material_id)
        db.delete(row)
        db.commit()
        return {"deleted": True, "id": int(material_id)}
    finally:
        db.close()
