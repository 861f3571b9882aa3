"""Artisan Connect — Record Store.

The four verbs the core needs from the relational store, addressed by
logical table name. Storage failures surface as StoreError; the session is
rolled back before the error leaves this module.
"""

from typing import Any, Dict, List, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from artisan_connect.models.artisan_models import ArtisanProfile, Review
from artisan_connect.models.audit_models import AdminAuditLog
from artisan_connect.models.event_models import (
    AuthModalEvent,
    ContactEvent,
    FavoriteArtisan,
)
from artisan_connect.core.logging import get_logger

logger = get_logger("store")

TABLES: Dict[str, Type[SQLModel]] = {
    "artisan_profiles": ArtisanProfile,
    "reviews": Review,
    "favorite_artisans": FavoriteArtisan,
    "contact_events": ContactEvent,
    "auth_modal_events": AuthModalEvent,
    "admin_audit_logs": AdminAuditLog,
}


class StoreError(Exception):
    """Raised when the store rejects or fails an operation."""

    def __init__(self, message: str, table: str = "", operation: str = ""):
        self.table = table
        self.operation = operation
        super().__init__(message)


class EventStore:
    """Table-addressed access over a SQLModel session."""

    def __init__(self, session: Session):
        self.session = session

    def _model(self, table: str) -> Type[SQLModel]:
        try:
            return TABLES[table]
        except KeyError:
            raise StoreError(f"Unknown table: {table}", table=table) from None

    def _where(self, model: Type[SQLModel], filters: Dict[str, Any]) -> list:
        clauses = []
        for field, value in filters.items():
            column = getattr(model, field, None)
            if column is None:
                raise StoreError(
                    f"Unknown column {field} on {model.__tablename__}",
                    table=model.__tablename__,
                )
            clauses.append(column == value)
        return clauses

    # ── Writes ──

    def insert_record(self, table: str, fields: Dict[str, Any]) -> SQLModel:
        """Append one row and return it."""
        model = self._model(table)
        record = model(**fields)
        try:
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Insert into {table} failed: {e}", extra={"table": table})
            raise StoreError(str(e), table=table, operation="insert") from e
        return record

    def delete_record(self, table: str, filters: Dict[str, Any]) -> int:
        """Remove matching rows. Returns the number deleted."""
        model = self._model(table)
        if not filters:
            raise StoreError("Refusing unfiltered delete", table=table, operation="delete")
        try:
            rows = self.session.exec(
                select(model).where(*self._where(model, filters))
            ).all()
            for row in rows:
                self.session.delete(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Delete from {table} failed: {e}", extra={"table": table})
            raise StoreError(str(e), table=table, operation="delete") from e
        return len(rows)

    def update_record(
        self, table: str, record_id: str, fields: Dict[str, Any]
    ) -> Optional[SQLModel]:
        """Patch one row by id. Returns None if it does not exist."""
        model = self._model(table)
        record = self.session.get(model, record_id)
        if record is None:
            return None
        for key, value in fields.items():
            setattr(record, key, value)
        try:
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Update of {table} failed: {e}", extra={"table": table})
            raise StoreError(str(e), table=table, operation="update") from e
        return record

    # ── Reads ──

    def select_one(self, table: str, filters: Dict[str, Any]) -> Optional[SQLModel]:
        model = self._model(table)
        try:
            return self.session.exec(
                select(model).where(*self._where(model, filters)).limit(1)
            ).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(str(e), table=table, operation="select") from e

    def select_many(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[SQLModel]:
        model = self._model(table)
        query = select(model).where(*self._where(model, filters or {}))
        if order_by:
            column = getattr(model, order_by)
            query = query.order_by(column.desc() if descending else column.asc())
        try:
            return list(self.session.exec(query).all())
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(str(e), table=table, operation="select") from e
