from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from estimator.core.errors import NotFoundError, ValidationError
from estimator.database import SessionLocal
from estimator.models.project import Project
from estimator.models.project_boq import ProjectBoq
from estimator.repositories.master_data import SqlRateLookup, SqlTemplateStore
from estimator.services.dupa_instantiation import ComputedDupa, instantiate
from estimator.services.dupa_types import lines_to_dicts
from estimator.services.hauling import hauling_cost_for_project
from estimator.services.indirect_costs import BoqCostEntry, ProjectCostSummary, aggregate

logger = logging.getLogger(__name__)


def _get_project(db: Session, project_id: int) -> Project:
    project = db.query(Project).filter(Project.id == int(project_id)).first()
    if project is None:
        raise NotFoundError("Project not found")
    return project


def _get_boq(db: Session, boq_id: int) -> ProjectBoq:
    row = db.query(ProjectBoq).filter(ProjectBoq.id == int(boq_id)).first()
    if row is None:
        raise NotFoundError("BOQ item not found")
    return row


def _check_quantity(quantity: float) -> float:
    quantity = float(quantity)
    if quantity < 0:
        raise ValidationError("Quantity must be non-negative")
    return quantity


def project_hauling_cost(db: Session, project: Project) -> float:
    lookup = SqlRateLookup(db)
    return hauling_cost_for_project(project, lookup.cheapest_hauling_equipment_rate())


def instantiate_for_project(
    db: Session,
    project: Project,
    template_id: int,
    as_of: Optional[datetime] = None,
    *,
    ocm_percentage: Optional[float] = None,
    cp_percentage: Optional[float] = None,
) -> ComputedDupa:
    """Instantiate a template at the project's location, with the project's hauling surcharge."""
    return instantiate(
        template_id,
        project.project_location,
        as_of,
        templates=SqlTemplateStore(db),
        lookup=SqlRateLookup(db),
        ocm_percentage=ocm_percentage,
        cp_percentage=cp_percentage,
        hauling_cost_per_unit=project_hauling_cost(db, project),
    )


def _apply_computed(row: ProjectBoq, computed: ComputedDupa, quantity: float) -> None:
    b = computed.breakdown
    row.template_id = computed.template_id
    row.pay_item_number = computed.pay_item_number
    row.pay_item_description = computed.pay_item_description
    row.unit_of_measurement = computed.unit_of_measurement
    row.output_per_hour = computed.output_per_hour
    row.category = computed.category
    row.quantity = quantity
    row.labor_items = lines_to_dicts(computed.labor_computed)
    row.equipment_items = lines_to_dicts(computed.equipment_computed)
    row.material_items = lines_to_dicts(computed.material_computed)
    row.labor_cost = b.labor_cost
    row.equipment_cost = b.equipment_cost
    row.material_cost = b.material_cost
    row.direct_cost = b.direct_cost
    row.ocm_percentage = b.ocm_percentage
    row.ocm_cost = b.ocm_cost
    row.cp_percentage = b.cp_percentage
    row.cp_cost = b.cp_cost
    row.subtotal_with_markup = b.subtotal_with_markup
    row.vat_percentage = b.vat_percentage
    row.vat_cost = b.vat_cost
    row.total_cost = b.total_cost
    row.unit_cost = b.unit_cost
    row.total_amount = b.unit_cost * quantity
    row.location = computed.location
    row.as_of_date = computed.as_of_date
    row.instantiated_at = computed.instantiated_at


def save_boq_entry(
    project_id: int,
    computed: ComputedDupa,
    quantity: float,
    *,
    db: Optional[Session] = None,
) -> int:
    """
    Store an instantiated template as a BOQ line and return its id.

    If db is provided, this function will NOT commit/close. Caller owns the transaction.
    If db is None, this function manages its own session + commit.
    """
    quantity = _check_quantity(quantity)

    owns_db = db is None
    if owns_db:
        db = SessionLocal()

    try:
        _get_project(db, project_id)

        row = ProjectBoq(project_id=int(project_id))
        _apply_computed(row, computed, quantity)
        db.add(row)
        db.flush()
        db.refresh(row)

        if owns_db:
            db.commit()

        logger.info(
            "BOQ item stored",
            extra={
                "boq_id": row.id,
                "project_id": int(project_id),
                "pay_item_number": row.pay_item_number,
                "quantity": quantity,
                "total_amount": row.total_amount,
            },
        )
        return int(row.id)
    except Exception:
        if owns_db:
            db.rollback()
        raise
    finally:
        if owns_db:
            db.close()


def update_quantity(db: Session, boq_id: int, quantity: float) -> ProjectBoq:
    """Change the quantity of a BOQ line; the rate snapshot is kept. Caller commits."""
    row = _get_boq(db, boq_id)
    row.quantity = _check_quantity(quantity)
    row.total_amount = row.unit_cost * row.quantity
    db.flush()
    return row


def recalculate_boq_entry(
    db: Session,
    boq_id: int,
    as_of: Optional[datetime] = None,
) -> ProjectBoq:
    """
    Re-price a BOQ line against current master data, keeping its quantity
    and its OCM/CP percentages. Caller commits.
    """
    row = _get_boq(db, boq_id)
    project = _get_project(db, row.project_id)

    computed = instantiate_for_project(
        db,
        project,
        row.template_id,
        as_of,
        ocm_percentage=row.ocm_percentage,
        cp_percentage=row.cp_percentage,
    )
    _apply_computed(row, computed, row.quantity)
    db.flush()

    logger.info(
        "BOQ item recalculated",
        extra={"boq_id": row.id, "project_id": row.project_id, "unit_cost": row.unit_cost},
    )
    return row


def project_cost_summary(db: Session, project_id: int) -> ProjectCostSummary:
    _get_project(db, project_id)

    rows = (
        db.query(ProjectBoq)
        .filter(ProjectBoq.project_id == int(project_id))
        .order_by(ProjectBoq.id.asc())
        .all()
    )

    return aggregate(
        BoqCostEntry(
            quantity=float(r.quantity),
            direct_cost=float(r.direct_cost),
            labor_cost=float(r.labor_cost or 0),
            equipment_cost=float(r.equipment_cost or 0),
            material_cost=float(r.material_cost or 0),
            total_amount=float(r.total_amount or 0),
        )
        for r in rows
    )
