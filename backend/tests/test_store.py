import pytest
from beanie import init_beanie
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.errors import PersistenceError
from app.main import app
from app.models import Internship, JobApplication
from app.schemas import InternshipCreate
from app.services import application_service, internship_service


@pytest.fixture
async def store():
    client = AsyncMongoMockClient()
    db = client["mentorship_test"]
    await init_beanie(database=db, document_models=[JobApplication, Internship])
    return db


async def _broken_insert(self, *args, **kwargs):
    raise RuntimeError("insert failed")


# -------------------- applications --------------------


async def test_submit_application_stores_record_without_file(store):
    await application_service.submit_application(
        name="Ada", email="ada@example.com", resume_link="https://cv.example.com/ada",
    )

    stored = await JobApplication.find_all().to_list()

    assert len(stored) == 1
    assert stored[0].name == "Ada"
    assert stored[0].email == "ada@example.com"
    assert stored[0].resumeLink == "https://cv.example.com/ada"
    assert stored[0].coverLetter is None
    assert stored[0].resumeFile is None
    assert stored[0].createdAt is not None

    raw = await store["jobapplications"].find_one({"email": "ada@example.com"})
    assert raw["resumeFile"] is None


async def test_submit_application_with_file_name(store):
    await application_service.submit_application(
        name="Ada", email="ada@example.com", resume_file="1700000000000-cv.pdf",
    )

    stored = await JobApplication.find_one(JobApplication.email == "ada@example.com")

    assert stored.resumeFile == "1700000000000-cv.pdf"
    assert stored.resumeLink is None


async def test_submit_application_store_failure(store, monkeypatch):
    monkeypatch.setattr(JobApplication, "insert", _broken_insert)

    with pytest.raises(PersistenceError) as exc_info:
        await application_service.submit_application(
            name="Ada", email="ada@example.com", resume_link="https://cv.example.com/ada",
        )

    assert exc_info.value.status_code == 500
    assert "insert failed" in exc_info.value.log_message


async def test_apply_store_failure_is_a_generic_500(store, monkeypatch):
    monkeypatch.setattr(JobApplication, "insert", _broken_insert)

    resp = TestClient(app).post(
        "/api/apply",
        data={"name": "Ada", "email": "ada@example.com", "resumeLink": "https://cv.example.com/ada"},
    )

    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal Server Error"}


# -------------------- internships --------------------


async def test_list_internships_in_store_order(store):
    await store["internships"].insert_many([
        {"company_name": "Acme", "internship_title": "Backend Intern", "location": "Remote",
         "start_date": "2026-01-05", "duration": "3 months", "stipend": "1000"},
        {"company_name": "Globex", "internship_title": "Data Intern"},
    ])

    listed = await internship_service.list_internships()

    assert [i.company for i in listed] == ["Acme", "Globex"]
    assert listed[0].role == "Backend Intern"
    assert listed[0].startDate == "2026-01-05"
    assert listed[1].stipend is None
    assert all(i.id for i in listed)


async def test_list_internships_tolerates_loose_records(store):
    await store["internships"].insert_many([
        {"company_name": "Acme", "internship_title": "Backend Intern", "stipend": "1000"},
        {"internship_title": "Intern"},
        {"company_name": "Initech", "internship_title": "Dev", "stipend": 1000, "duration": 6},
    ])

    listed = await internship_service.list_internships()

    assert len(listed) == 3
    assert listed[1].company is None
    assert listed[1].role == "Intern"
    assert listed[2].stipend == 1000
    assert listed[2].duration == 6

    public = listed[2].model_dump(by_alias=True)
    assert public["company"] == "Initech"
    assert public["stipend"] == 1000


async def test_list_internships_store_failure(store, monkeypatch):
    def broken_find_all(*args, **kwargs):
        raise RuntimeError("cursor failed")

    monkeypatch.setattr(Internship, "find_all", broken_find_all)

    with pytest.raises(PersistenceError) as exc_info:
        await internship_service.list_internships()

    assert exc_info.value.detail_key == "error"

    resp = TestClient(app).get("/internships")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal Server Error"}


async def test_create_internship_persists(store):
    created = await internship_service.create_internship(
        InternshipCreate(company_name="Acme", internship_title="Data Intern", stipend=800)
    )

    stored = await Internship.find_all().to_list()

    assert len(stored) == 1
    assert str(stored[0].id) == created.id
    assert stored[0].company_name == "Acme"
    assert stored[0].stipend == 800
    assert created.role == "Data Intern"


async def test_create_internship_store_failure(store, monkeypatch):
    monkeypatch.setattr(Internship, "insert", _broken_insert)

    with pytest.raises(PersistenceError):
        await internship_service.create_internship(
            InternshipCreate(company_name="Acme", internship_title="Data Intern")
        )
