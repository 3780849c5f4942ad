from sqlalchemy import Column, String, JSON, PrimaryKeyConstraint
from .database import Base

class Document(Base):
    __tablename__ = "documents"

    collection = Column(String, nullable=False, index=True)
    id = Column(String, nullable=False)
    data = Column(JSON, nullable=False, default=dict)

    __table_args__ = (
        PrimaryKeyConstraint("collection", "id"),
    )

    def __repr__(self) -> str:
        return f"<Document(collection='{self.collection}', id='{self.id}')>"
