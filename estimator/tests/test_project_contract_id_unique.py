import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from estimator.database import SessionLocal
from estimator.main import app
from estimator.models.project import Project

client = TestClient(app)


def test_contract_id_unique_index_blocks_duplicates():
    db = SessionLocal()
    try:
        db.add(Project(project_name="Road A", project_location="Malaybalay City", contract_id="C-1"))
        db.commit()

        db.add(Project(project_name="Road B", project_location="Malaybalay City", contract_id="C-1"))
        with pytest.raises(IntegrityError):
            db.commit()
    finally:
        db.rollback()
        db.close()

    db = SessionLocal()
    try:
        assert db.query(Project).filter(Project.contract_id == "C-1").count() == 1
    finally:
        db.close()


def test_projects_without_contract_id_do_not_collide():
    db = SessionLocal()
    try:
        db.add(Project(project_name="Road A", project_location="Valencia City", contract_id=None))
        db.add(Project(project_name="Road B", project_location="Valencia City", contract_id=None))
        db.commit()

        assert db.query(Project).filter(Project.contract_id.is_(None)).count() == 2
    finally:
        db.close()


def test_patch_to_taken_contract_id_conflicts():
    first = client.post(
        "/projects",
        json={"project_name": "Road A", "project_location": "Maramag", "contract_id": "24KB0001"},
    )
    second = client.post(
        "/projects",
        json={"project_name": "Road B", "project_location": "Maramag", "contract_id": "24KB0002"},
    )
    assert first.status_code == 201, first.text
    assert second.status_code == 201, second.text

    resp = client.patch(f"/projects/{second.json()['id']}", json={"contract_id": "24KB0001"})
    assert resp.status_code == 409

    unchanged = client.get(f"/projects/{second.json()['id']}")
    assert unchanged.json()["contract_id"] == "24KB0002"
