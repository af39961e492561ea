import json
import logging
import os
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

# (upper bound of estimated direct cost, OCM %, CP %). None is the open top bracket.
DEFAULT_INDIRECT_COST_BRACKETS: List[Tuple[Optional[float], float, float]] = [
    (5_000_000.0, 15.0, 10.0),
    (50_000_000.0, 12.0, 8.0),
    (150_000_000.0, 10.0, 8.0),
    (None, 8.0, 8.0),
]

MINOR_TOOLS_PERCENTAGE = 10.0


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    try:
        return float(v)
    except ValueError:
        return default


def project_vat_percentage() -> float:
    return _env_float("PROJECT_VAT_PERCENTAGE", 12.0)


def default_ocm_percentage() -> float:
    return _env_float("DEFAULT_OCM_PERCENTAGE", 15.0)


def default_cp_percentage() -> float:
    return _env_float("DEFAULT_CP_PERCENTAGE", 10.0)


def default_vat_percentage() -> float:
    return _env_float("DEFAULT_VAT_PERCENTAGE", 12.0)


def indirect_cost_brackets() -> List[Tuple[Optional[float], float, float]]:
    """
    Bracket table used for project-level OCM/CP.

    INDIRECT_COST_BRACKETS may hold a JSON list of
    [upper_bound_or_null, ocm_pct, cp_pct] rows in ascending order.
    """
    raw = os.getenv("INDIRECT_COST_BRACKETS")
    if not raw:
        return list(DEFAULT_INDIRECT_COST_BRACKETS)

    try:
        rows = json.loads(raw)
        brackets = [
            (None if upper is None else float(upper), float(ocm), float(cp))
            for upper, ocm, cp in rows
        ]
    except (ValueError, TypeError) as exc:
        logger.warning(
            "Ignoring malformed INDIRECT_COST_BRACKETS",
            extra={"error": str(exc)},
        )
        return list(DEFAULT_INDIRECT_COST_BRACKETS)

    if not brackets:
        return list(DEFAULT_INDIRECT_COST_BRACKETS)
    return brackets
