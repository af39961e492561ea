import pytest

from estimator.models.labor_rate import Designation
from estimator.services.cost_rollup import rollup
from estimator.services.dupa_types import (
    EquipmentLine,
    LaborEntry,
    LaborLine,
    MaterialLine,
    ResolvedRates,
    TemplateData,
)
from estimator.services.line_computer import compute_lines


def _labor(amount: float) -> LaborLine:
    return LaborLine(designation="Foreman", no_of_persons=1, no_of_hours=1, hourly_rate=amount, amount=amount)


def _equipment(amount: float) -> EquipmentLine:
    return EquipmentLine(equipment_id=1, description="Backhoe", no_of_units=1, no_of_hours=1, hourly_rate=amount, amount=amount)


def _material(amount: float) -> MaterialLine:
    return MaterialLine(material_code="M-01", description="Cement", unit="bag", quantity=1, unit_cost=amount, amount=amount)


def test_foreman_example_rolls_up_to_1232():
    template = TemplateData(
        id=1,
        pay_item_number="101(1)",
        pay_item_description="Example",
        unit_of_measurement="l.s.",
        output_per_hour=1.0,
        labor=(LaborEntry(Designation.FOREMAN, 1, 8),),
    )
    lines = compute_lines(template, ResolvedRates(labor_rates={Designation.FOREMAN: 100.0}))

    b = rollup(lines.labor, lines.equipment, lines.material, 15, 10, 12)

    assert b.labor_cost == pytest.approx(800)
    assert b.equipment_cost == pytest.approx(80)
    assert b.material_cost == 0
    assert b.direct_cost == pytest.approx(880)
    assert b.ocm_cost == pytest.approx(132)
    assert b.cp_cost == pytest.approx(88)
    assert b.subtotal_with_markup == pytest.approx(1100)
    assert b.vat_cost == pytest.approx(132)
    assert b.total_cost == pytest.approx(1232)
    assert b.unit_cost == b.total_cost


def test_rollup_direct_cost_is_sum_of_line_amounts():
    b = rollup([_labor(100), _labor(50)], [_equipment(30)], [_material(20), _material(5)], 0, 0, 0)

    assert b.labor_cost == 150
    assert b.equipment_cost == 30
    assert b.material_cost == 25
    assert b.direct_cost == 205
    assert b.total_cost == 205


def test_rollup_zero_direct_cost_gives_all_zero_amounts():
    b = rollup([], [], [], 15, 10, 12)

    assert b.direct_cost == 0
    assert b.ocm_cost == 0
    assert b.cp_cost == 0
    assert b.vat_cost == 0
    assert b.total_cost == 0
    # percentages are still reported
    assert (b.ocm_percentage, b.cp_percentage, b.vat_percentage) == (15, 10, 12)


@pytest.mark.parametrize("field", ["ocm", "cp", "vat"])
def test_rollup_total_grows_with_each_percentage(field):
    base = {"ocm": 15, "cp": 10, "vat": 12}
    bumped = dict(base, **{field: base[field] + 5})

    low = rollup([_labor(1000)], [], [], base["ocm"], base["cp"], base["vat"])
    high = rollup([_labor(1000)], [], [], bumped["ocm"], bumped["cp"], bumped["vat"])

    assert high.total_cost > low.total_cost


def test_rollup_total_grows_with_direct_cost():
    low = rollup([_labor(1000)], [], [], 15, 10, 12)
    high = rollup([_labor(1000)], [], [_material(1)], 15, 10, 12)

    assert high.total_cost > low.total_cost


def test_vat_applies_to_direct_plus_markups():
    b = rollup([], [], [_material(1000)], 10, 5, 12)

    assert b.ocm_cost == pytest.approx(100)
    assert b.cp_cost == pytest.approx(50)
    assert b.vat_cost == pytest.approx(1150 * 0.12)
    assert b.total_cost == pytest.approx(1150 * 1.12)
