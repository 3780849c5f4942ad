import logging
import secrets
import string
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from ..database import AsyncSessionLocal
from ..exceptions import DocumentStoreError
from ..models import Document

logger = logging.getLogger(__name__)

AUTO_ID_ALPHABET = string.ascii_letters + string.digits
AUTO_ID_LENGTH = 20


def auto_id() -> str:
    return "".join(secrets.choice(AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))


@dataclass
class DocumentSnapshot:
    id: str
    data: Dict[str, Any] = field(default_factory=dict)
    exists: bool = True


def to_snapshot(document: Document) -> Optional[DocumentSnapshot]:
    """Map a row to a snapshot; None when the body is not a JSON object."""
    if document.data is None:
        return DocumentSnapshot(id=document.id)
    if not isinstance(document.data, dict):
        logger.debug(f"Skipping {document.collection}/{document.id}: body is not a JSON object")
        return None
    return DocumentSnapshot(id=document.id, data=dict(document.data))


class DocumentStore:
    """
    Collection/key document store kept in a single JSON table.

    Every call opens its own session, so one store can be shared by
    concurrent tasks.
    """

    def __init__(self, session_factory=None):
        self.session_factory = session_factory or AsyncSessionLocal

    async def add(self, collection: str, data: Dict[str, Any]) -> str:
        """
        Insert a new document under a generated key and return the key
        """
        document_id = auto_id()
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    session.add(Document(collection=collection, id=document_id, data=dict(data)))
        except SQLAlchemyError as e:
            logger.error(f"Failed to add document to {collection}: {str(e)}")
            raise DocumentStoreError(f"Database error while adding to {collection}: {str(e)}") from e
        return document_id

    async def get(self, collection: str, document_id: str) -> DocumentSnapshot:
        try:
            async with self.session_factory() as session:
                document = await session.get(Document, (collection, document_id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to read {collection}/{document_id}: {str(e)}")
            raise DocumentStoreError(f"Database error while reading {collection}/{document_id}: {str(e)}") from e

        if document is None:
            return DocumentSnapshot(id=document_id, exists=False)
        snapshot = to_snapshot(document)
        if snapshot is None:
            raise DocumentStoreError(f"Document {collection}/{document_id} is not a JSON object")
        return snapshot

    async def where_equal(self, collection: str, field_name: str, value: str) -> List[DocumentSnapshot]:
        """
        Return every document in the collection whose top-level string field equals value.
        Order is unspecified.
        """
        query = select(Document).filter(
            Document.collection == collection,
            Document.data[field_name].as_string() == value,
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                documents = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to query {collection} on {field_name}: {str(e)}")
            raise DocumentStoreError(f"Database error while querying {collection}: {str(e)}") from e

        snapshots = [to_snapshot(document) for document in documents]
        return [snapshot for snapshot in snapshots if snapshot is not None]

    async def set_merge(self, collection: str, document_id: str, data: Dict[str, Any]) -> None:
        """
        Merge the given top-level fields into a document, creating it if absent.
        Fields not named in data keep their stored values.
        """
        query = (
            select(Document)
            .filter(Document.collection == collection, Document.id == document_id)
            .with_for_update()
        )
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(query)
                    existing = result.scalar_one_or_none()

                    if existing:
                        if data:
                            body = existing.data if isinstance(existing.data, dict) else {}
                            existing.data = {**body, **data}
                    else:
                        session.add(Document(collection=collection, id=document_id, data=dict(data)))
        except SQLAlchemyError as e:
            logger.error(f"Failed to merge into {collection}/{document_id}: {str(e)}")
            raise DocumentStoreError(f"Database error while updating {collection}/{document_id}: {str(e)}") from e

    async def delete(self, collection: str, document_id: str) -> None:
        """
        Delete a document; deleting a missing document is not an error
        """
        statement = delete(Document).where(
            Document.collection == collection,
            Document.id == document_id,
        )
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete {collection}/{document_id}: {str(e)}")
            raise DocumentStoreError(f"Database error while deleting {collection}/{document_id}: {str(e)}") from e
