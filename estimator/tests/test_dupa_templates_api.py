import pytest
from fastapi.testclient import TestClient

from estimator.main import app

client = TestClient(app)

LOCATION = "Malaybalay City"


def _seed_rates():
    labor = client.post(
        "/master/labor",
        json={
            "location": LOCATION,
            "district": "Bukidnon 1st",
            "foreman": 100,
            "leadman": 90,
            "equipment_operator_heavy": 85,
            "equipment_operator_high_skilled": 80,
            "equipment_operator_light_skilled": 75,
            "driver": 70,
            "labor_skilled": 65,
            "labor_semi_skilled": 60,
            "labor_unskilled": 50,
        },
    )
    assert labor.status_code == 201, labor.text

    mixer = client.post(
        "/master/equipment",
        json={
            "no": 12,
            "complete_description": "Concrete Mixer, 1 bagger",
            "description": "Concrete Mixer",
            "hourly_rate": 250,
        },
    )
    assert mixer.status_code == 201, mixer.text

    prices = client.post(
        "/master/materials/prices",
        json=[
            {
                "material_code": "CEM-01",
                "description": "Portland Cement",
                "unit": "bag",
                "location": LOCATION,
                "unit_cost": 240,
                "effective_date": "2025-01-01T00:00:00",
            },
            {
                "material_code": "CEM-01",
                "description": "Portland Cement",
                "unit": "bag",
                "location": LOCATION,
                "unit_cost": 260,
                "effective_date": "2025-06-01T00:00:00",
            },
        ],
    )
    assert prices.status_code == 201, prices.text
    return mixer.json()["id"]


def _create_template(mixer_id: int, **overrides) -> dict:
    body = {
        "pay_item_number": "900(1)c",
        "pay_item_description": "Structural Concrete, Class A",
        "unit_of_measurement": "cu.m.",
        "output_per_hour": 2.5,
        "labor_template": [
            {"designation": "Foreman", "no_of_persons": 1, "no_of_hours": 8},
            {"designation": "Unskilled Labor", "no_of_persons": 2, "no_of_hours": 8},
        ],
        "equipment_template": [
            {"equipment_id": mixer_id, "description": "", "no_of_units": 1, "no_of_hours": 2},
        ],
        "material_template": [
            {"material_code": "cem-01", "description": "Portland Cement", "unit": "bag", "quantity": 9},
            {"material_code": "SAND-01", "description": "Sand", "unit": "cu.m.", "quantity": 0.5},
        ],
        "category": "Concrete",
    }
    body.update(overrides)
    resp = client.post("/dupa-templates", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_template_crud():
    mixer_id = _seed_rates()
    created = _create_template(mixer_id)

    assert created["ocm_percentage"] == 15
    assert created["cp_percentage"] == 10
    assert created["vat_percentage"] == 12
    assert created["labor_template"][1]["designation"] == "Unskilled Labor"
    assert created["material_template"][0]["material_code"] == "CEM-01"

    dup = client.post(
        "/dupa-templates",
        json={
            "pay_item_number": "900(1)c",
            "pay_item_description": "again",
            "unit_of_measurement": "cu.m.",
        },
    )
    assert dup.status_code == 409

    listing = client.get("/dupa-templates", params={"search": "structural"})
    assert [t["id"] for t in listing.json()] == [created["id"]]

    patched = client.patch(f"/dupa-templates/{created['id']}", json={"ocm_percentage": 12, "notes": "rev 2"})
    assert patched.status_code == 200
    assert patched.json()["ocm_percentage"] == 12
    assert patched.json()["notes"] == "rev 2"
    assert len(patched.json()["labor_template"]) == 2

    assert client.delete(f"/dupa-templates/{created['id']}").status_code == 200
    assert client.get(f"/dupa-templates/{created['id']}").status_code == 404


def test_template_rejects_unknown_designation():
    resp = client.post(
        "/dupa-templates",
        json={
            "pay_item_number": "100",
            "pay_item_description": "Clearing",
            "unit_of_measurement": "ha",
            "labor_template": [{"designation": "Astronaut", "no_of_persons": 1, "no_of_hours": 8}],
        },
    )
    assert resp.status_code == 422


def test_instantiate_prices_template_at_location():
    mixer_id = _seed_rates()
    template = _create_template(mixer_id)

    resp = client.post(f"/dupa-templates/{template['id']}/instantiate", json={"location": LOCATION})
    assert resp.status_code == 200, resp.text
    body = resp.json()

    # labor: 1*8*100 + 2*8*50
    assert body["labor_cost"] == pytest.approx(1600)
    # mixer 1*2*250 + minor tools 10% of labor
    assert body["equipment_cost"] == pytest.approx(660)
    # latest cement price, sand unpriced
    assert body["material_cost"] == pytest.approx(9 * 260)
    assert body["direct_cost"] == pytest.approx(4600)
    assert body["total_cost"] == pytest.approx(4600 * 1.25 * 1.12)
    assert body["unit_cost"] == body["total_cost"]

    assert body["equipment_computed"][0]["description"] == "Concrete Mixer"
    assert body["equipment_computed"][-1]["description"] == "Minor Tools (10% of Labor Cost)"
    sand = body["material_computed"][1]
    assert (sand["unit_cost"], sand["amount"]) == (0, 0)
    assert body["location"] == LOCATION

    # instantiation never changes the template
    assert client.get(f"/dupa-templates/{template['id']}").json() == template


def test_instantiate_as_of_date_picks_older_price_and_overrides():
    mixer_id = _seed_rates()
    template = _create_template(mixer_id)

    resp = client.post(
        f"/dupa-templates/{template['id']}/instantiate",
        json={
            "location": LOCATION,
            "as_of_date": "2025-03-01T00:00:00",
            "ocm_percentage": 0,
            "cp_percentage": 0,
        },
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["material_cost"] == pytest.approx(9 * 240)
    assert body["ocm_cost"] == 0
    assert body["cp_cost"] == 0


def test_instantiate_errors():
    mixer_id = _seed_rates()
    template = _create_template(mixer_id)

    no_labor = client.post(f"/dupa-templates/{template['id']}/instantiate", json={"location": "Nowhere"})
    assert no_labor.status_code == 404
    assert no_labor.json()["detail"] == "No labor rates found for location: Nowhere"

    blank = client.post(f"/dupa-templates/{template['id']}/instantiate", json={"location": "   "})
    assert blank.status_code == 400

    missing = client.post("/dupa-templates/999999/instantiate", json={"location": LOCATION})
    assert missing.status_code == 404

    no_project = client.post(
        f"/dupa-templates/{template['id']}/instantiate",
        json={"location": LOCATION, "project_id": 999999},
    )
    assert no_project.status_code == 404
