"""SQL Invoice Store — InvoiceStore implementation over an AsyncSession.

Invariants:
    - Exactly one parameterized statement per call, committed before returning
    - Values are always bound parameters (SQLAlchemy Core), never formatted into SQL
    - Any SQLAlchemy failure is rolled back and raised as DatabaseError
    - update() never writes id or date

Design Decisions:
    - Core insert/update/delete over ORM unit-of-work: the statement issued is the
      statement the action asked for, and rowcount is available for delete
    - Id generated here (uuid4 text): the store, not the caller, owns identity
"""

import logging
import uuid

from sqlalchemy import delete, insert, update
from sqlalchemy.ext.asyncio import AsyncSession

from acme_dashboard.core.domain_types import InvoiceId
from acme_dashboard.core.repository_protocols import InvoiceChanges, NewInvoice
from acme_dashboard.infrastructure.database import guard_db_errors
from acme_dashboard.models.invoice import Invoice

logger = logging.getLogger(__name__)


class SqlInvoiceStore:
    """Invoice persistence backed by the request's database session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def insert(self, invoice: NewInvoice) -> InvoiceId:
        invoice_id = InvoiceId(str(uuid.uuid4()))
        async with guard_db_errors(self._db, "insert"):
            await self._db.execute(
                insert(Invoice).values(
                    id=invoice_id,
                    customer_id=invoice.customer_id,
                    amount=invoice.amount,
                    status=invoice.status.value,
                    date=invoice.date,
                ),
            )
            await self._db.commit()
        logger.info("Invoice inserted", extra={"invoice_id": invoice_id})
        return invoice_id

    async def update(
        self, invoice_id: InvoiceId, changes: InvoiceChanges,
    ) -> int:
        async with guard_db_errors(self._db, "update"):
            result = await self._db.execute(
                update(Invoice)
                .where(Invoice.id == invoice_id)
                .values(
                    customer_id=changes.customer_id,
                    amount=changes.amount,
                    status=changes.status.value,
                ),
            )
            await self._db.commit()
        return result.rowcount

    async def delete(self, invoice_id: InvoiceId) -> int:
        async with guard_db_errors(self._db, "delete"):
            result = await self._db.execute(
                delete(Invoice).where(Invoice.id == invoice_id),
            )
            await self._db.commit()
        return result.rowcount
