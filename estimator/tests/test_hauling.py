from types import SimpleNamespace

import pytest

from estimator.core.errors import ValidationError
from estimator.services.hauling import (
    DPWH_DUMP_TRUCK_RATE,
    HaulingTemplate,
    RouteSegment,
    compute_hauling_cost,
    hauling_cost_for_project,
    hauling_template_for_project,
)


def _project(distance: float, config=None):
    return SimpleNamespace(distance_from_office=distance, hauling_config=config)


def test_cycle_time_includes_delay_and_maneuver_allowances():
    result = compute_hauling_cost(
        HaulingTemplate(
            total_distance_km=8,
            free_hauling_distance_km=3,
            route_segments=[RouteSegment(distance_km=5, speed_unloaded_kmh=50, speed_loaded_kmh=25)],
            equipment_hourly_rate=1000,
            equipment_capacity_cum=10,
        )
    )

    assert result.chargeable_distance_km == 5
    assert result.time_unloaded_hr == pytest.approx(0.1)
    assert result.time_loaded_hr == pytest.approx(0.2)
    assert result.delay_allowance_hr == pytest.approx(0.03)
    assert result.maneuver_allowance_hr == 0.25
    assert result.cycle_time_hr == pytest.approx(0.58)
    assert result.cost_per_trip == pytest.approx(580)
    assert result.cost_per_cum == pytest.approx(58)


def test_project_without_distance_has_no_hauling():
    assert hauling_template_for_project(_project(0)) is None
    assert hauling_cost_for_project(_project(0), 900) == 0.0


def test_project_fallback_uses_standard_truck_rate():
    template = hauling_template_for_project(_project(10))

    assert template.equipment_hourly_rate == DPWH_DUMP_TRUCK_RATE
    assert template.equipment_capacity_cum == 6
    assert hauling_cost_for_project(_project(10)) == pytest.approx(211.03)


def test_project_fallback_uses_catalog_truck_rate_at_or_above_minimum():
    assert hauling_template_for_project(_project(10), 800).equipment_hourly_rate == 800
    assert hauling_template_for_project(_project(10), 500).equipment_hourly_rate == 500
    assert hauling_template_for_project(_project(10), 499).equipment_hourly_rate == DPWH_DUMP_TRUCK_RATE
    assert hauling_cost_for_project(_project(10), 800) == pytest.approx(118.89)


def test_project_hauling_config_takes_precedence():
    config = {
        "total_distance": 8,
        "free_hauling_distance": 3,
        "route_segments": [{"distance_km": 5, "speed_unloaded_kmh": 50, "speed_loaded_kmh": 25}],
        "equipment_rental_rate": 1000,
        "equipment_capacity": 10,
    }

    assert hauling_cost_for_project(_project(12, config), 800) == pytest.approx(58)


def test_non_positive_speed_or_capacity_is_rejected():
    with pytest.raises(ValidationError):
        compute_hauling_cost(
            HaulingTemplate(1, 0, [RouteSegment(1, 0, 30)], 1000, 6)
        )
    with pytest.raises(ValidationError):
        compute_hauling_cost(
            HaulingTemplate(1, 0, [RouteSegment(1, 40, 30)], 1000, 0)
        )


def test_project_config_without_segments_charges_only_maneuvering():
    config = {
        "total_distance": 20,
        "free_hauling_distance": 3,
        "route_segments": [],
        "equipment_rental_rate": 1420,
        "equipment_capacity": 10,
    }

    template = hauling_template_for_project(_project(20, config), 800)

    assert template.equipment_capacity_cum == 10
    assert list(template.route_segments) == []
    # 0.25 h maneuvering x 1,420 / 10 cu.m.
    assert hauling_cost_for_project(_project(20, config), 800) == pytest.approx(35.5)
