import logging
from typing import List, Optional

from pydantic import ValidationError

from .. import config
from ..exceptions import DocumentStoreError, PatientNotFoundError, PatientOwnershipError
from ..schemas import Patient, PatientLog, PatientRecord, PatientStatusRequest
from .document_store import DocumentSnapshot, DocumentStore

logger = logging.getLogger(__name__)


class PatientRepository:
    """
    Data access for patient records and their vital-sign logs.

    The repository only holds a store handle, so a single instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        patient_collection: Optional[str] = None,
        log_collection: Optional[str] = None,
    ):
        self.store = store or DocumentStore()
        self.patient_collection = patient_collection or config.PATIENT_COLLECTION
        self.log_collection = log_collection or config.PATIENT_LOG_COLLECTION

    async def get_by_room_key(self, patient_room_key: str) -> List[Patient]:
        """
        Get the patients assigned to a room
        """
        return await self._query_patients("patientRoomKey", patient_room_key)

    async def get_by_hospital(self, hospital_key: str) -> List[Patient]:
        """
        Get every patient registered to a hospital
        """
        return await self._query_patients("hospitalKey", hospital_key)

    async def get_by_id(self, patient_id: str) -> Optional[Patient]:
        """
        Get a patient by id. Returns None when the patient is missing, the
        document is malformed or the store cannot be reached.
        """
        try:
            snapshot = await self.store.get(self.patient_collection, patient_id)
        except DocumentStoreError:
            return None
        if not snapshot.exists:
            return None
        return self._to_patient(snapshot)

    async def create(self, record: PatientRecord) -> str:
        """
        Insert a new patient and return the generated id
        """
        patient_id = await self.store.add(self.patient_collection, record.to_document())
        logger.info(f"Created patient {patient_id} in hospital {record.hospital_key}")
        return patient_id

    async def update(self, patient_id: str, record: PatientRecord) -> None:
        # Only fields set on the payload are written; a missing document is created.
        await self.store.set_merge(self.patient_collection, patient_id, record.to_document(only_set=True))

    async def update_status(self, hospital_key: str, patient_id: str, status: PatientStatusRequest) -> None:
        """
        Update the read/notify flags of a patient owned by the given hospital.

        Raises:
            PatientNotFoundError: no patient document with this id
            PatientOwnershipError: the patient belongs to another hospital
            DocumentStoreError: the store failed to read or write
        """
        snapshot = await self.store.get(self.patient_collection, patient_id)
        if not snapshot.exists:
            raise PatientNotFoundError(patient_id)

        # a missing or null hospitalKey reads as an empty key
        if (snapshot.data.get("hospitalKey") or "") != hospital_key:
            logger.warning(f"Rejected status update of patient {patient_id} from hospital {hospital_key}")
            raise PatientOwnershipError(patient_id, hospital_key)

        await self.store.set_merge(self.patient_collection, patient_id, status.to_fields())

    async def delete(self, patient_id: str) -> None:
        await self.store.delete(self.patient_collection, patient_id)

    async def get_logs_by_patient(self, patient_key: str) -> List[PatientLog]:
        """
        Get every log entry recorded for a patient. Malformed entries are skipped.
        """
        try:
            snapshots = await self.store.where_equal(self.log_collection, "patientKey", patient_key)
        except DocumentStoreError:
            return []

        logs = []
        for snapshot in snapshots:
            try:
                logs.append(PatientLog.model_validate({**snapshot.data, "id": snapshot.id}))
            except ValidationError as e:
                logger.debug(f"Skipping malformed log {snapshot.id}: {str(e)}")
                continue
        return logs

    async def delete_log(self, log_id: str) -> None:
        await self.store.delete(self.log_collection, log_id)

    async def _query_patients(self, field_name: str, value: str) -> List[Patient]:
        try:
            snapshots = await self.store.where_equal(self.patient_collection, field_name, value)
        except DocumentStoreError:
            return []

        patients = []
        for snapshot in snapshots:
            patient = self._to_patient(snapshot)
            if patient is not None:
                patients.append(patient)
        return patients

    @staticmethod
    def _to_patient(snapshot: DocumentSnapshot) -> Optional[Patient]:
        try:
            record = PatientRecord.model_validate(snapshot.data)
        except ValidationError as e:
            logger.debug(f"Skipping malformed patient {snapshot.id}: {str(e)}")
            return None
        return Patient.from_record(record, snapshot.id)


def get_repository() -> PatientRepository:
    return PatientRepository(DocumentStore())
