from datetime import datetime

import pytest

from estimator.core.errors import NotFoundError, ValidationError
from estimator.models.labor_rate import Designation
from estimator.services.dupa_instantiation import instantiate
from estimator.services.dupa_types import (
    EquipmentEntry,
    EquipmentRate,
    LaborEntry,
    MaterialEntry,
    MaterialRate,
    TemplateData,
)
from estimator.services.line_computer import MINOR_TOOLS_DESCRIPTION
from estimator.services.rate_resolver import resolve_rates

LOCATION = "Malaybalay City"
FIXED_AT = datetime(2026, 3, 1, 8, 0, 0)


class FakeTemplates:
    def __init__(self, *templates):
        self.templates = {t.id: t for t in templates}

    def get_template_by_id(self, template_id):
        return self.templates.get(template_id)


class FakeLookup:
    def __init__(self, labor=None, equipment=None, materials=None):
        self.labor = labor or {}
        self.equipment = equipment or {}
        self.materials = materials or {}
        self.material_calls = []

    def get_labor_rates_for_location(self, location):
        return self.labor.get(location)

    def get_equipment_rate(self, equipment_id):
        return self.equipment.get(equipment_id)

    def get_material_unit_cost(self, material_code, location, as_of):
        self.material_calls.append((material_code, location, as_of))
        return self.materials.get((material_code, location))


def _template(**kwargs) -> TemplateData:
    fields = dict(
        id=1,
        pay_item_number="311(1)b",
        pay_item_description="PCC Pavement (Plain), 0.23 m thick",
        unit_of_measurement="sq.m.",
        output_per_hour=12.5,
        labor=(LaborEntry(Designation.FOREMAN, 1, 8),),
        category="Concrete Pavement",
    )
    fields.update(kwargs)
    return TemplateData(**fields)


def _lookup() -> FakeLookup:
    return FakeLookup(
        labor={LOCATION: {Designation.FOREMAN: 100.0, Designation.SKILLED_LABOR: 80.0}},
        equipment={5: EquipmentRate(hourly_rate=1500.0, description="Transit Mixer")},
        materials={("CEM-01", LOCATION): MaterialRate(unit_cost=260.0)},
    )


def test_instantiate_foreman_example():
    computed = instantiate(
        1,
        LOCATION,
        templates=FakeTemplates(_template()),
        lookup=_lookup(),
        instantiated_at=FIXED_AT,
    )

    assert computed.pay_item_number == "311(1)b"
    assert computed.location == LOCATION
    assert computed.instantiated_at == FIXED_AT
    assert computed.breakdown.direct_cost == pytest.approx(880)
    assert computed.breakdown.total_cost == pytest.approx(1232)
    assert computed.breakdown.unit_cost == pytest.approx(1232)
    assert computed.equipment_computed[-1].description == MINOR_TOOLS_DESCRIPTION


def test_instantiate_is_idempotent_for_fixed_timestamp():
    kwargs = dict(
        templates=FakeTemplates(_template(material=(MaterialEntry("cem-01", "Cement", "bag", 9),))),
        lookup=_lookup(),
        instantiated_at=FIXED_AT,
    )

    first = instantiate(1, LOCATION, datetime(2026, 1, 1), **kwargs)
    second = instantiate(1, LOCATION, datetime(2026, 1, 1), **kwargs)

    assert first.to_dict() == second.to_dict()


def test_missing_material_price_resolves_to_zero_without_error():
    template = _template(
        material=(
            MaterialEntry("CEM-01", "Cement", "bag", 10),
            MaterialEntry("GRAVEL-01", "Gravel", "cu.m.", 3),
        )
    )

    computed = instantiate(1, LOCATION, templates=FakeTemplates(template), lookup=_lookup())

    cement, gravel = computed.material_computed
    assert cement.amount == pytest.approx(2600)
    assert gravel.unit_cost == 0
    assert gravel.amount == 0
    assert computed.breakdown.material_cost == pytest.approx(2600)


def test_location_without_labor_rates_raises_not_found():
    with pytest.raises(NotFoundError, match="No labor rates found for location: Nowhere"):
        instantiate(1, "Nowhere", templates=FakeTemplates(_template()), lookup=_lookup())


def test_unknown_template_raises_not_found():
    with pytest.raises(NotFoundError, match="DUPA template not found"):
        instantiate(404, LOCATION, templates=FakeTemplates(_template()), lookup=_lookup())


@pytest.mark.parametrize("location", ["", "   ", None])
def test_blank_location_is_rejected_before_rate_lookup(location):
    lookup = _lookup()
    template = _template(material=(MaterialEntry("CEM-01", "Cement", "bag", 1),))

    with pytest.raises(ValidationError, match="Location is required"):
        instantiate(1, location, templates=FakeTemplates(template), lookup=lookup)

    assert lookup.material_calls == []


def test_unknown_template_is_reported_before_blank_location():
    with pytest.raises(NotFoundError, match="DUPA template not found"):
        instantiate(404, "   ", templates=FakeTemplates(), lookup=_lookup())


def test_ocm_and_cp_overrides_replace_template_percentages():
    computed = instantiate(
        1,
        LOCATION,
        templates=FakeTemplates(_template()),
        lookup=_lookup(),
        ocm_percentage=0,
        cp_percentage=0,
    )

    b = computed.breakdown
    assert (b.ocm_percentage, b.cp_percentage, b.vat_percentage) == (0, 0, 12)
    assert b.total_cost == pytest.approx(880 * 1.12)


def test_unusable_entries_are_dropped_and_equipment_is_priced():
    template = _template(
        equipment=(
            EquipmentEntry(5, "", 1, 8),
            EquipmentEntry(None, "", 1, 8),
        ),
        material=(
            MaterialEntry("", "No code", "pc", 1),
            MaterialEntry("CEM-01", "", "bag", 1),
        ),
    )

    computed = instantiate(1, LOCATION, templates=FakeTemplates(template), lookup=_lookup())

    assert [e.description for e in computed.equipment_computed] == [
        "Transit Mixer",
        MINOR_TOOLS_DESCRIPTION,
    ]
    assert computed.equipment_computed[0].amount == pytest.approx(12000)
    assert computed.material_computed == ()


def test_resolver_queries_each_material_code_once_with_as_of_date():
    lookup = _lookup()
    template = _template(
        material=(
            MaterialEntry("CEM-01", "Cement", "bag", 1),
            MaterialEntry("cem-01 ", "Cement again", "bag", 2),
        )
    )
    as_of = datetime(2025, 12, 31)

    rates = resolve_rates(template, LOCATION, as_of, lookup=lookup)

    assert lookup.material_calls == [("CEM-01", LOCATION, as_of)]
    assert rates.material_rates["CEM-01"].unit_cost == 260


def test_hauling_surcharge_is_added_only_to_hauled_materials():
    lookup = FakeLookup(
        labor={LOCATION: {}},
        materials={
            ("SAND-01", LOCATION): MaterialRate(unit_cost=700.0, include_hauling=True),
            ("CEM-01", LOCATION): MaterialRate(unit_cost=260.0, include_hauling=False),
        },
    )
    template = _template(
        labor=(),
        material=(
            MaterialEntry("SAND-01", "Sand", "cu.m.", 1),
            MaterialEntry("CEM-01", "Cement", "bag", 1),
        ),
    )

    computed = instantiate(
        1,
        LOCATION,
        templates=FakeTemplates(template),
        lookup=lookup,
        hauling_cost_per_unit=100.0,
    )

    sand, cement = computed.material_computed
    assert sand.unit_cost == 800
    assert cement.unit_cost == 260
    assert computed.hauling_cost_per_unit == 100.0
