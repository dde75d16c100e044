"""
Record store for users and applications.

Every read or write takes the filter produced by app.core.access_policy.
A by-id operation only touches a record matching id and filter jointly;
anything else is NotFound.
"""
import enum
import logging
from typing import Any, Dict, List, Type

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import Conflict, NotFound, Unexpected, ValidationError
from app.db.models.user import User
from app.db.models.application import Application

logger = logging.getLogger(__name__)


def _column_value(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    return value


class RecordStore:
    def __init__(self, db: Session):
        self.db = db

    def find(self, model: Type, *filters, order_by=None) -> List[Any]:
        query = self.db.query(model).filter(*filters)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.all()

    def get(self, model: Type, record_id: int, *filters, not_found: str = "Not found.") -> Any:
        record = self.db.query(model).filter(model.id == record_id, *filters).first()
        if record is None:
            raise NotFound(not_found)
        return record

    def create(self, model: Type, conflict: str = "User already exists.", **fields) -> Any:
        """
        Insert one record.

        A unique-constraint violation (two requests racing on the same email)
        comes back as Conflict, same as the pre-check would have.
        """
        record = model(**{key: _column_value(value) for key, value in fields.items()})
        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error creating {model.__tablename__}: {e.orig}")
            raise Conflict(conflict)
        self.db.refresh(record)
        return record

    def update(
        self,
        model: Type,
        record_id: int,
        patch: Dict[str, Any],
        *filters,
        not_found: str = "Not found.",
        conflict: str = "Email already exists.",
    ) -> Any:
        """
        Apply a partial update.

        Keys absent from patch are left alone. A key present with None clears
        a nullable column; None for a required column is a ValidationError.
        """
        record = self.get(model, record_id, *filters, not_found=not_found)
        columns = inspect(model).columns

        for key, value in patch.items():
            if key not in columns or key == "id":
                raise ValidationError(f"Unknown field: {key}")
            if value is None and not columns[key].nullable:
                raise ValidationError(f"{key} cannot be empty.")
            setattr(record, key, _column_value(value))

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error updating {model.__tablename__} id={record_id}: {e.orig}")
            raise Conflict(conflict)
        self.db.refresh(record)
        return record

    def delete(self, model: Type, record_id: int, *filters, not_found: str = "Not found.") -> None:
        record = self.get(model, record_id, *filters, not_found=not_found)
        self.db.delete(record)
        self.db.commit()

    def delete_user(self, user_id: int, *filters, not_found: str = "User not found.") -> int:
        """
        Delete a user and every application they own, in one transaction.

        Either both deletes are committed or neither is; a failure part way
        through is rolled back and reported as Unexpected.

        Returns the number of applications removed.
        """
        user = self.get(User, user_id, *filters, not_found=not_found)
        try:
            removed = (
                self.db.query(Application)
                .filter(Application.candidate_id == user.id)
                .delete(synchronize_session="fetch")
            )
            self.db.expire(user, ["applications"])
            self.db.delete(user)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Cascade delete failed for user_id={user_id}: {e}", exc_info=True)
            raise Unexpected("Failed to delete account.")

        logger.info(f"Deleted user_id={user_id} and {removed} application(s)")
        return removed
