"""
Exceptions raised by the patient records data-access layer.
"""


class PatientRecordsError(Exception):
    """Base exception for patient records errors."""
    pass


class DocumentStoreError(PatientRecordsError):
    """Raised when the underlying document store fails to read or write."""
    pass


class PatientNotFoundError(PatientRecordsError):
    """Raised when an operation needs an existing patient document and there is none."""

    def __init__(self, patient_id: str):
        self.patient_id = patient_id
        super().__init__(f"Patient not found: {patient_id}")


class PatientOwnershipError(PatientRecordsError):
    """Raised when a patient is not registered to the caller's hospital."""

    def __init__(self, patient_id: str, hospital_key: str):
        self.patient_id = patient_id
        self.hospital_key = hospital_key
        super().__init__("Patient does not belong to this hospital")
