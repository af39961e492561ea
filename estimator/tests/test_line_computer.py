import math

import pytest

from estimator.models.labor_rate import Designation
from estimator.services.dupa_types import (
    EquipmentEntry,
    EquipmentRate,
    LaborEntry,
    MaterialEntry,
    MaterialRate,
    ResolvedRates,
    TemplateData,
)
from estimator.services.line_computer import MINOR_TOOLS_DESCRIPTION, compute_lines


def _template(**kwargs) -> TemplateData:
    return TemplateData(
        id=7,
        pay_item_number="900(1)c",
        pay_item_description="Structural Concrete",
        unit_of_measurement="cu.m.",
        output_per_hour=1.0,
        **kwargs,
    )


def test_minor_tools_line_is_always_last_and_ten_percent_of_labor():
    template = _template(
        labor=(
            LaborEntry(Designation.FOREMAN, 1, 8),
            LaborEntry(Designation.UNSKILLED_LABOR, 4, 8),
        ),
        equipment=(EquipmentEntry(3, "", 1, 8),),
    )
    rates = ResolvedRates(
        labor_rates={Designation.FOREMAN: 120.0, Designation.UNSKILLED_LABOR: 60.0},
        equipment_rates={3: EquipmentRate(hourly_rate=900.0, description="Concrete Mixer")},
    )

    lines = compute_lines(template, rates)

    labor_total = sum(line.amount for line in lines.labor)
    assert labor_total == pytest.approx(120 * 8 + 4 * 8 * 60)

    minor = lines.equipment[-1]
    assert minor.description == MINOR_TOOLS_DESCRIPTION
    assert minor.equipment_id is None
    assert minor.no_of_units == 1
    assert minor.no_of_hours == 1
    assert minor.amount == pytest.approx(labor_total * 0.10)
    assert minor.hourly_rate == minor.amount

    assert lines.equipment[0].description == "Concrete Mixer"
    assert lines.equipment[0].amount == pytest.approx(7200)


def test_minor_tools_is_zero_without_labor():
    lines = compute_lines(_template(), ResolvedRates())

    assert len(lines.equipment) == 1
    assert lines.equipment[0].description == MINOR_TOOLS_DESCRIPTION
    assert lines.equipment[0].amount == 0


def test_designation_missing_from_rate_record_prices_at_zero():
    template = _template(labor=(LaborEntry(Designation.DRIVER, 1, 8),))

    lines = compute_lines(template, ResolvedRates(labor_rates={}))

    assert lines.labor[0].designation == "Driver"
    assert lines.labor[0].hourly_rate == 0
    assert lines.labor[0].amount == 0


def test_equipment_not_in_catalog_keeps_template_description_and_zero_rate():
    template = _template(
        equipment=(
            EquipmentEntry(99, "Vibrator", 1, 4),
            EquipmentEntry(None, "  ", 1, 4),
            EquipmentEntry(98, "", 1, 4),
        )
    )

    lines = compute_lines(template, ResolvedRates())

    # blank description without an id is dropped; minor tools is appended
    assert [line.description for line in lines.equipment] == [
        "Vibrator",
        "Equipment Item",
        MINOR_TOOLS_DESCRIPTION,
    ]
    assert all(line.amount == 0 for line in lines.equipment)


def test_nan_and_missing_quantities_count_as_zero():
    template = _template(
        labor=(LaborEntry(Designation.FOREMAN, float("nan"), 8),),
        material=(MaterialEntry("CEM-01", "Portland Cement", "bag", None),),
    )
    rates = ResolvedRates(
        labor_rates={Designation.FOREMAN: 100.0},
        material_rates={"CEM-01": MaterialRate(unit_cost=float("nan"))},
    )

    lines = compute_lines(template, rates)

    assert lines.labor[0].no_of_persons == 0
    assert lines.labor[0].amount == 0
    assert lines.material[0].quantity == 0
    assert lines.material[0].unit_cost == 0
    assert not math.isnan(lines.material[0].amount)


def test_material_lines_use_price_and_hauling_only_when_flagged():
    template = _template(
        material=(
            MaterialEntry("sand-01", "Washed Sand", "cu.m.", 2),
            MaterialEntry("CEM-01", "Portland Cement", "", 10),
            MaterialEntry("NONE-01", "Unpriced", "pc", 5),
            MaterialEntry("", "No code", "pc", 1),
        )
    )
    rates = ResolvedRates(
        material_rates={
            "SAND-01": MaterialRate(unit_cost=800.0, include_hauling=True),
            "CEM-01": MaterialRate(unit_cost=250.0, include_hauling=False),
        }
    )

    lines = compute_lines(template, rates, hauling_cost_per_unit=150.0)

    assert [line.material_code for line in lines.material] == ["SAND-01", "CEM-01", "NONE-01"]

    sand, cement, unpriced = lines.material
    assert sand.base_price == 800
    assert sand.hauling_cost == 150
    assert sand.hauling_included is True
    assert sand.unit_cost == 950
    assert sand.amount == 1900

    assert cement.unit == "unit"
    assert cement.hauling_included is False
    assert cement.amount == 2500

    # unpriced materials never pick up hauling
    assert unpriced.unit_cost == 0
    assert unpriced.hauling_cost == 0
    assert unpriced.amount == 0
