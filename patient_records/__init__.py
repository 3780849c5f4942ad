from .exceptions import (
    DocumentStoreError,
    PatientNotFoundError,
    PatientOwnershipError,
    PatientRecordsError,
)
from .schemas import Patient, PatientLog, PatientRecord, PatientStatusRequest, SymptomObservation
from .services.document_store import DocumentSnapshot, DocumentStore
from .services.patient_repository import PatientRepository, get_repository

__all__ = [
    "DocumentSnapshot",
    "DocumentStore",
    "DocumentStoreError",
    "Patient",
    "PatientLog",
    "PatientNotFoundError",
    "PatientOwnershipError",
    "PatientRecord",
    "PatientRecordsError",
    "PatientRepository",
    "PatientStatusRequest",
    "SymptomObservation",
    "get_repository",
]
