from typing import List, Optional, Union

from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import IntegrityError

from estimator.database import SessionLocal
from estimator.models.labor_rate import LaborRate
from estimator.schemas.labor_rate import LaborRateCreate, LaborRateResponse, LaborRateUpdate

router = APIRouter(prefix="/master/labor", tags=["Labor Rates"])


def _get_or_404(db, labor_rate_id: int) -> LaborRate:
    row = db.query(LaborRate).filter(LaborRate.id == int(labor_rate_id)).first()
    if row is None:
        raise HTTPException(status_code=404, detail="Labor rate not found")
    return row


@router.get("", response_model=List[LaborRateResponse])
def list_labor_rates(
    location: Optional[str] = None,
    district: Optional[str] = None,
):
    db = SessionLocal()
    try:
        q = db.query(LaborRate)
        if location:
            q = q.filter(LaborRate.location.ilike(f"%{location}%"))
        if district:
            q = q.filter(LaborRate.district == district)
        return q.order_by(LaborRate.location.asc()).all()
    finally:
        db.close()


@router.post(
    "",
    response_model=Union[List[LaborRateResponse], LaborRateResponse],
    status_code=201,
)
def create_labor_rates(payload: Union[List[LaborRateCreate], LaborRateCreate]):
    items = payload if isinstance(payload, list) else [payload]
    if not items:
        raise HTTPException(status_code=400, detail="At least one labor rate required")

    db = SessionLocal()
    try:
        rows = [LaborRate(**item.model_dump(exclude_none=True)) for item in items]
        db.add_all(rows)
        db.commit()
        for row in rows:
            db.refresh(row)
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Labor rates already exist for location") from exc
    finally:
        db.close()

    return rows if isinstance(payload, list) else rows[0]


@router.get("/{labor_rate_id}", response_model=LaborRateResponse)
def get_labor_rate(labor_rate_id: int):
    db = SessionLocal()
    try:
        return _get_or_404(db, labor_rate_id)
    finally:
        db.close()


@router.patch("/{labor_rate_id}", response_model=LaborRateResponse)
def update_labor_rate(labor_rate_id: int, payload: LaborRateUpdate):
    db = SessionLocal()
    try:
        row = _get_or_404(db, labor_rate_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(row, key, value)
        db.commit()
        db.refresh(row)
        return row
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Labor rates already exist for location") from exc
    finally:
        db.close()


@router.delete("/{labor_rate_id}")
def delete_labor_rate(labor_rate_id: int):
    db = SessionLocal()
    try:
        row = _get_or_404(db, labor_rate_id)
        db.delete(row)
        db.commit()
        return {"deleted": True, "id": int(labor_rate_id)}
    finally:
        db.close()
