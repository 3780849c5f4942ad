import os

os.environ.setdefault("TESTING", "True")

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from typing import AsyncGenerator
from patient_records.database import Base, init_db
from patient_records.services.document_store import DocumentStore
from patient_records.services.patient_repository import PatientRepository


@pytest.fixture(scope="function")
async def test_engine(tmp_path):
    """Create a test database engine."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        future=True
    )

    await init_db(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()

@pytest.fixture(scope="function")
def session_factory(test_engine):
    """Session factory bound to the test database."""
    return sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

@pytest.fixture(scope="function")
def store(session_factory) -> DocumentStore:
    return DocumentStore(session_factory)

@pytest.fixture(scope="function")
def repository(store) -> PatientRepository:
    return PatientRepository(store)

@pytest.fixture
def patient_document():
    return {
        "username": "jdoe",
        "dateOfAdmit": "2024-03-01",
        "dateOfBirth": "1961-07-12",
        "diagnosis": "Pneumonia",
        "hospitalKey": "h1",
        "isRead": False,
        "isShowNotify": True,
        "name": "John",
        "sex": "male",
        "surname": "Doe",
        "patientRoomKey": "r1",
    }

@pytest.fixture
def log_document():
    return {
        "bloodPressure": "120/80",
        "heartRate": "72",
        "hospitalKey": "h1",
        "inputDate": "2024-03-02",
        "inputRound": 2,
        "microtime": 1709370000000000,
        "otherSymptoms": "mild cough",
        "oxygen": "97",
        "patientKey": "p1",
        "patientRoomKey": "r1",
        "symptomsCheck": [
            {"status": True, "sym": "fever"},
            {"status": False, "sym": "dyspnea"},
        ],
        "temperature": "37.8",
    }
