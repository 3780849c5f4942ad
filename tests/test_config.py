import logging
import pytest
from patient_records import config
from patient_records.services.patient_repository import get_repository


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

def test_testing_mode_uses_sqlite():
    assert config.DATABASE_URL.startswith("sqlite+aiosqlite")

def test_default_collections():
    repository = get_repository()
    assert repository.patient_collection == config.PATIENT_COLLECTION == "patientData"
    assert repository.log_collection == config.PATIENT_LOG_COLLECTION == "patientLog"

def test_configure_logging(monkeypatch, restore_root_logger):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    root_logger = config.configure_logging()
    assert root_logger is restore_root_logger
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1

    root_logger = config.configure_logging(logging.WARNING)
    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 1

async def test_get_db_yields_session():
    from sqlalchemy.ext.asyncio import AsyncSession
    from patient_records.database import get_db

    async for session in get_db():
        assert isinstance(session, AsyncSession)
