"""
Pydantic models for patient documents.

Aliases carry the camelCase field names used by the stored documents, so
``model_validate`` reads a document body directly and ``model_dump(by_alias=True)``
produces one. Fields missing from a document decode to their zero value; a field
holding null also decodes to its zero value, while a field holding a value of
the wrong type fails validation.
"""
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationInfo,
    field_validator,
)


class DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value, info: ValidationInfo):
        if value is None:
            field_info = cls.model_fields[info.field_name]
            if not field_info.is_required():
                return field_info.get_default(call_default_factory=True)
        return value


class PatientFields(DocumentModel):
    """Fields shared by the patient view and its stored form."""

    username: StrictStr = ""
    date_of_admit: StrictStr = Field("", alias="dateOfAdmit")
    date_of_birth: StrictStr = Field("", alias="dateOfBirth")
    diagnosis: StrictStr = ""
    is_read: StrictBool = Field(False, alias="isRead")
    is_show_notify: StrictBool = Field(False, alias="isShowNotify")
    name: StrictStr = ""
    sex: StrictStr = ""
    surname: StrictStr = ""
    patient_room_key: StrictStr = Field("", alias="patientRoomKey")


class PatientRecord(PatientFields):
    """Stored form of a patient, also used as the create/update payload."""
    hospital_key: StrictStr = Field("", alias="hospitalKey")

    def to_document(self, only_set: bool = False) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=only_set)


class Patient(PatientFields):
    """Patient as returned to callers; the hospital key is not exposed."""
    id: str

    @classmethod
    def from_record(cls, record: PatientRecord, patient_id: str) -> "Patient":
        return cls(id=patient_id, **record.model_dump(exclude={"hospital_key"}))


class PatientStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_read: Optional[bool] = Field(None, alias="isRead")
    is_notify: Optional[bool] = Field(None, alias="isNotify")

    def to_fields(self) -> dict:
        fields = {}
        if self.is_read is not None:
            fields["isRead"] = self.is_read
        if self.is_notify is not None:
            fields["isShowNotify"] = self.is_notify
        return fields


class SymptomObservation(DocumentModel):
    status: StrictBool = False
    sym: StrictStr = ""


class PatientLog(DocumentModel):
    """A single round of vital signs captured for a patient."""

    id: str = ""
    blood_pressure: StrictStr = Field("", alias="bloodPressure")
    heart_rate: StrictStr = Field("", alias="heartRate")
    hospital_key: StrictStr = Field("", alias="hospitalKey")
    input_date: StrictStr = Field("", alias="inputDate")
    input_round: StrictInt = Field(0, alias="inputRound")
    # capture time in microseconds since the epoch
    microtime: StrictInt = 0
    other_symptoms: StrictStr = Field("", alias="otherSymptoms")
    oxygen: StrictStr = ""
    patient_key: StrictStr = Field("", alias="patientKey")
    patient_room_key: StrictStr = Field("", alias="patientRoomKey")
    symptoms_check: List[SymptomObservation] = Field(default_factory=list, alias="symptomsCheck")
    temperature: StrictStr = ""
