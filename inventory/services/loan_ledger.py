import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from inventory.constants import DEFAULT_LOAN_DAYS, STATUS_AVAILABLE
from inventory.models.loan import Loan

logger = logging.getLogger(__name__)


def utc_today() -> str:
    return datetime.utcnow().date().isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


class LoanLedger:
    def __init__(self, loans=None, store=None, id_factory=None, today=None):
        self._loans = list(loans or [])
        self._store = store
        self._new_id = id_factory or _new_id
        self._today = today or utc_today

    @property
    def loans(self):
        return list(self._loans)

    def today(self) -> str:
        return self._today()

    def load(self):
        if self._store is None:
            return
        self._loans = list(self._store.list_all())
        logger.info(f"[ledger] {len(self._loans)} loans loaded")

    def create_loan(self, fields: dict) -> Loan:
        """
        Record a new loan. The referenced material is not touched here;
        quantity/status bookkeeping belongs to LendingService.lend.
        """
        data = dict(fields)
        data["id"] = self._new_id()
        if not data.get("loan_date"):
            data["loan_date"] = self.today()
        if not data.get("expected_return_date"):
            start = date.fromisoformat(data["loan_date"][:10])
            data["expected_return_date"] = (start + timedelta(days=DEFAULT_LOAN_DAYS)).isoformat()
        data.setdefault("borrower_contact", "")

        loan = Loan.from_dict(data)
        self._loans.append(loan)
        self._mirror("create", loan)
        return loan

    def get(self, loan_id: str):
        return next((l for l in self._loans if l.id == loan_id), None)

    def delete_loan(self, loan_id: str):
        before = len(self._loans)
        self._loans = [l for l in self._loans if l.id != loan_id]
        if len(self._loans) != before:
            self._mirror("delete", loan_id)

    def active_loans(self):
        return [l for l in self._loans if l.is_active]

    def overdue_loans(self, today: str = None):
        today = today or self.today()
        return [l for l in self._loans if l.is_overdue(today)]

    def loans_for_material(self, material_id: str):
        return [l for l in self._loans if l.material_id == material_id]

    def return_material(self, loan_id, return_condition, materials_snapshot, update_material):
        """
        Close a loan and reconcile its material.

        The two steps are independent: the loan stays closed even when its
        material is missing from ``materials_snapshot``. ``update_material``
        is called as ``update_material(material_id, fields)``.
        Returns the closed loan, or None when nothing was done (unknown or
        already returned loan).
        """
        index = next((i for i, l in enumerate(self._loans) if l.id == loan_id), None)
        if index is None:
            return None

        loan = self._loans[index]
        if not loan.is_active:
            logger.info(f"[ledger] loan {loan_id} already returned, skipped")
            return None

        closed = replace(loan, actual_return_date=self.today(), condition_at_return=return_condition)
        self._loans[index] = closed
        self._mirror("update", closed)

        material = next((m for m in materials_snapshot if m.id == closed.material_id), None)
        if material is None:
            logger.warning(
                f"[ledger] material {closed.material_id} not found for loan {loan_id}, counters not reconciled"
            )
            return closed

        update_material(material.id, {
            "condition": return_condition,
            "loaned_quantity": max((material.loaned_quantity or 0) - closed.quantity, 0),
            # unconditional, even if other loans on this material are still open
            "status": STATUS_AVAILABLE,
        })
        return closed

    def _mirror(self, action: str, *args):
        if self._store is None:
            return
        try:
            getattr(self._store, action)(*args)
        except SQLAlchemyError as e:
            logger.warning(f"[ledger] {action} mirror failed, keeping local state: {e}")
