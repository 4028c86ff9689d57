from typing import Optional, Type, TypeVar

from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT")


class BaseRepository:
    """Unit-of-work helpers shared by every repository."""

    model: Optional[Type] = None

    def __init__(self, db: Session):
        self.db = db

    def get(self, record_id: str):
        return self.db.get(self.model, record_id)

    def add(self, record: ModelT) -> ModelT:
        self.db.add(record)
        return record

    def delete(self, record) -> None:
        self.db.delete(record)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def save(self, record: ModelT) -> ModelT:
        """Add, commit and refresh a record in one step."""
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record
