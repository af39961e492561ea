from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from estimator.core.errors import ValidationError

DPWH_DUMP_TRUCK_RATE = 1420.0  # PHP/hour
DEFAULT_TRUCK_CAPACITY_CUM = 6.0
DEFAULT_CONFIG_CAPACITY_CUM = 10.0
DEFAULT_FREE_HAULING_KM = 3.0
MIN_HAULING_EQUIPMENT_RATE = 500.0
MANEUVER_ALLOWANCE_HR = 0.25
DELAY_ALLOWANCE_FACTOR = 0.10


@dataclass(frozen=True)
class RouteSegment:
    distance_km: float
    speed_unloaded_kmh: float
    speed_loaded_kmh: float


@dataclass(frozen=True)
class HaulingTemplate:
    total_distance_km: float
    free_hauling_distance_km: float
    route_segments: Sequence[RouteSegment]
    equipment_hourly_rate: float
    equipment_capacity_cum: float


@dataclass(frozen=True)
class HaulingResult:
    chargeable_distance_km: float
    time_unloaded_hr: float
    time_loaded_hr: float
    delay_allowance_hr: float
    maneuver_allowance_hr: float
    cycle_time_hr: float
    cost_per_trip: float
    cost_per_cum: float


def compute_hauling_cost(template: HaulingTemplate) -> HaulingResult:
    """
    Cycle-time hauling cost for one truck trip and per cubic meter.

    cycle = unloaded + loaded travel time, +10% delay, +0.25 h maneuvering.
    Reported figures are rounded to centavos.
    """
    if template.equipment_capacity_cum <= 0:
        raise ValidationError("Hauling equipment capacity must be positive")

    time_unloaded = 0.0
    time_loaded = 0.0
    for segment in template.route_segments:
        if segment.speed_unloaded_kmh <= 0 or segment.speed_loaded_kmh <= 0:
            raise ValidationError("Route segment speeds must be positive")
        time_unloaded += segment.distance_km / segment.speed_unloaded_kmh
        time_loaded += segment.distance_km / segment.speed_loaded_kmh

    delay = DELAY_ALLOWANCE_FACTOR * (time_unloaded + time_loaded)
    cycle = time_unloaded + time_loaded + delay + MANEUVER_ALLOWANCE_HR
    cost_per_trip = cycle * template.equipment_hourly_rate
    cost_per_cum = cost_per_trip / template.equipment_capacity_cum

    return HaulingResult(
        chargeable_distance_km=round(template.total_distance_km - template.free_hauling_distance_km, 2),
        time_unloaded_hr=round(time_unloaded, 2),
        time_loaded_hr=round(time_loaded, 2),
        delay_allowance_hr=round(delay, 2),
        maneuver_allowance_hr=round(MANEUVER_ALLOWANCE_HR, 2),
        cycle_time_hr=round(cycle, 2),
        cost_per_trip=round(cost_per_trip, 2),
        cost_per_cum=round(cost_per_cum, 2),
    )


def hauling_template_for_project(
    project: Any,
    hauling_equipment_rate: Optional[float] = None,
) -> Optional[HaulingTemplate]:
    """
    Hauling parameters for a project, or None when it has no haul distance.

    A stored hauling_config wins, even one without route segments (only the
    maneuver allowance is then charged). Otherwise a single segment at
    40/30 km/h with a 6 m3 truck is assumed, priced at the given equipment
    rate when it is at least 500 PHP/h, else at the DPWH standard dump
    truck rate.
    """
    distance = float(getattr(project, "distance_from_office", 0) or 0)
    if distance <= 0:
        return None

    config = getattr(project, "hauling_config", None)
    if config and "route_segments" in config:
        segments = config.get("route_segments") or []
        return HaulingTemplate(
            total_distance_km=float(config.get("total_distance") or distance),
            free_hauling_distance_km=float(config.get("free_hauling_distance", DEFAULT_FREE_HAULING_KM) or 0),
            route_segments=[
                RouteSegment(
                    distance_km=float(s["distance_km"]),
                    speed_unloaded_kmh=float(s["speed_unloaded_kmh"]),
                    speed_loaded_kmh=float(s["speed_loaded_kmh"]),
                )
                for s in segments
            ],
            equipment_hourly_rate=float(config.get("equipment_rental_rate") or DPWH_DUMP_TRUCK_RATE),
            equipment_capacity_cum=float(config.get("equipment_capacity") or DEFAULT_CONFIG_CAPACITY_CUM),
        )

    rate = DPWH_DUMP_TRUCK_RATE
    if hauling_equipment_rate is not None and hauling_equipment_rate >= MIN_HAULING_EQUIPMENT_RATE:
        rate = float(hauling_equipment_rate)

    return HaulingTemplate(
        total_distance_km=distance,
        free_hauling_distance_km=DEFAULT_FREE_HAULING_KM,
        route_segments=[RouteSegment(distance_km=distance, speed_unloaded_kmh=40.0, speed_loaded_kmh=30.0)],
        equipment_hourly_rate=rate,
        equipment_capacity_cum=DEFAULT_TRUCK_CAPACITY_CUM,
    )


def hauling_cost_for_project(project: Any, hauling_equipment_rate: Optional[float] = None) -> float:
    template = hauling_template_for_project(project, hauling_equipment_rate)
    if template is None:
        return 0.0
    return compute_hauling_cost(template).cost_per_cum
