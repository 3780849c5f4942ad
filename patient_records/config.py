import logging
import os
import sys
from dotenv import load_dotenv

load_dotenv()

# Check if we're in testing mode
if os.getenv("DATABASE_URL"):
    DATABASE_URL = os.getenv("DATABASE_URL")
elif os.getenv("TESTING") == "True":
    DATABASE_URL = "sqlite+aiosqlite:///./test.db"
else:
    POSTGRES_USER = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
    POSTGRES_DB = os.getenv("POSTGRES_DB", "hospital_db")
    POSTGRES_HOST = os.getenv("POSTGRES_HOST", "db")
    DATABASE_URL = f"postgresql+asyncpg://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}/{POSTGRES_DB}"

SQL_ECHO = os.getenv("SQL_ECHO", "False").lower() == "true"

PATIENT_COLLECTION = os.getenv("PATIENT_COLLECTION", "patientData")
PATIENT_LOG_COLLECTION = os.getenv("PATIENT_LOG_COLLECTION", "patientLog")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level=None):
    """
    Configure the root logger for the application.
    Level falls back to LOG_LEVEL, then INFO.
    """
    if level is None:
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates when reloading
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if SQL_ECHO else logging.WARNING
    )
    return root_logger
