from datetime import datetime
from typing import List, Literal, Optional, Union

from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import IntegrityError

from estimator.database import SessionLocal
from estimator.models.material_price import MaterialPrice
from estimator.schemas.common import to_naive_utc
from estimator.schemas.material_price import (
    MaterialPriceCreate,
    MaterialPriceResponse,
    MaterialPriceUpdate,
)

router = APIRouter(prefix="/master/materials/prices", tags=["Material Prices"])

_DUPLICATE = "A price for this material and location already exists at that effective date"


def _get_or_404(db, price_id: int) -> MaterialPrice:
    row = db.query(MaterialPrice).filter(MaterialPrice.id == int(price_id)).first()
    if row is None:
        raise HTTPException(status_code=404, detail="Material price not found")
    return row


@router.get("", response_model=List[MaterialPriceResponse])
def list_material_prices(
    material_code: Optional[str] = None,
    location: Optional[str] = None,
    search: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    order: Literal["asc", "desc"] = "desc",
):
    db = SessionLocal()
    try:
        q = db.query(MaterialPrice)
        if material_code:
            q = q.filter(MaterialPrice.material_code == material_code.strip().upper())
        if location:
            q = q.filter(MaterialPrice.location.ilike(f"%{location}%"))
        if search:
            q = q.filter(MaterialPrice.description.ilike(f"%{search}%"))
        if date_from is not None:
            q = q.filter(MaterialPrice.effective_date >= to_naive_utc(date_from))
        if date_to is not None:
            q = q.filter(MaterialPrice.effective_date <= to_naive_utc(date_to))

        if order == "asc":
            q = q.order_by(MaterialPrice.effective_date.asc(), MaterialPrice.id.asc())
        else:
            q = q.order_by(MaterialPrice.effective_date.desc(), MaterialPrice.id.desc())
        return q.all()
    finally:
        db.close()


@router.post(
    "",
    response_model=Union[List[MaterialPriceResponse], MaterialPriceResponse],
    status_code=201,
)
def create_material_prices(payload: Union[List[MaterialPriceCreate], MaterialPriceCreate]):
    items = payload if isinstance(payload, list) else [payload]
    if not items:
        raise HTTPException(status_code=400, detail="At least one material price required")

    db = SessionLocal()
    try:
        rows = [MaterialPrice(**item.model_dump(exclude_none=True)) for item in items]
        db.add_all(rows)
        db.commit()
        for row in rows:
            db.refresh(row)
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail=_DUPLICATE) from exc
    finally:
        db.close()

    return rows if isinstance(payload, list) else rows[0]


@router.get("/{price_id}", response_model=MaterialPriceResponse)
def get_material_price(price_id: int):
    db = SessionLocal()
    try:
        return _get_or_404(db, price_id)
    finally:
        db.close()


@router.patch("/{price_id}", response_model=MaterialPriceResponse)
def update_material_price(price_id: int, payload: MaterialPriceUpdate):
    db = SessionLocal()
    try:
        row = _get_or_404(db, price_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(row, key, value)
        db.commit()
        db.refresh(row)
        return row
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail=_DUPLICATE) from exc
    finally:
        db.close()


@router.delete("/{price_id}")
def delete_material_price(price_id: int):
    db = SessionLocal()
    try:
        row = _get_or_404(db, price_id)
        db.delete(row)
        db.commit()
        return {"deleted": True, "id": int(price_id)}
    finally:
        db.close()
