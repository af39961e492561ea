from typing import List, Optional, Union

from fastapi import APIRouter, HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from estimator.database import SessionLocal
from estimator.models.pay_item import PayItem
from estimator.schemas.pay_item import PayItemCreate, PayItemResponse, PayItemUpdate

router = APIRouter(prefix="/master/pay-items", tags=["Pay Items"])


def _get_or_404(db, pay_item_id: int) -> PayItem:
    row = db.query(PayItem).filter(PayItem.id == int(pay_item_id)).first()
    if row is None:
        raise HTTPException(status_code=404, detail="Pay item not found")
    return row


@router.get("", response_model=List[PayItemResponse])
def list_pay_items(
    search: Optional[str] = None,
    division: Optional[str] = None,
    part: Optional[str] = None,
    item: Optional[str] = None,
    is_active: Optional[bool] = None,
):
    db = SessionLocal()
    try:
        q = db.query(PayItem)
        if search:
            q = q.filter(
                or_(
                    PayItem.pay_item_number.ilike(f"%{search}%"),
                    PayItem.description.ilike(f"%{search}%"),
                )
            )
        if division:
            q = q.filter(PayItem.division.ilike(f"%{division}%"))
        if part:
            q = q.filter(PayItem.part.ilike(f"%{part}%"))
        if item:
            q = q.filter(PayItem.item.ilike(f"%{item}%"))
        if is_active is not None:
            q = q.filter(PayItem.is_active == bool(is_active))
        return q.order_by(PayItem.pay_item_number.asc()).all()
    finally:
        db.close()


@router.post(
    "",
    response_model=Union[List[PayItemResponse], PayItemResponse],
    status_code=201,
)
def create_pay_items(payload: Union[List[PayItemCreate], PayItemCreate]):
    items = payload if isinstance(payload, list) else [payload]
    if not items:
        raise HTTPException(status_code=400, detail="At least one pay item required")

    numbers = [i.pay_item_number for i in items]
    if len(set(numbers)) != len(numbers):
        raise HTTPException(status_code=409, detail="Duplicate pay item numbers in request")

    db = SessionLocal()
    try:
        taken = db.query(PayItem.pay_item_number).filter(PayItem.pay_item_number.in_(numbers)).all()
        if taken:
            raise HTTPException(
                status_code=409,
                detail=f"Pay item number already exists: {', '.join(sorted(n for (n,) in taken))}",
            )

        rows = [PayItem(**i.model_dump()) for i in items]
        db.add_all(rows)
        db.commit()
        for row in rows:
            db.refresh(row)
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Pay item number already exists") from exc
    finally:
        db.close()

    return rows if isinstance(payload, list) else rows[0]


@router.get("/{pay_item_id}", response_model=PayItemResponse)
def get_pay_item(pay_item_id: int):
    db = SessionLocal()
    try:
        return _get_or_404(db, pay_item_id)
    finally:
        db.close()


@router.patch("/{pay_item_id}", response_model=PayItemResponse)
def update_pay_item(pay_item_id: int, payload: PayItemUpdate):
    db = SessionLocal()
    try:
        row = _get_or_404(db, pay_item_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(row, key, value)
        db.commit()
        db.refresh(row)
        return row
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Pay item number already exists") from exc
    finally:
        db.close()


@router.delete("/{pay_item_id}")
def delete_pay_item(pay_item_id: int):
    db = SessionLocal()
    try:
        row = _get_or_404(db, pay_item_id)
        db.delete(row)
        db.commit()
        return {"deleted": True, "id": int(pay_item_id)}
    finally:
        db.close()
