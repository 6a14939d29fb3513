from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Optional

from inventory.extensions import db
from inventory.utils.wire import camel_keys, snake_keys


@dataclass
class Loan:
    id: str
    material_id: str
    quantity: int
    borrower_name: str
    borrower_contact: str
    loan_date: str
    expected_return_date: str
    condition_at_loan: str
    actual_return_date: Optional[str] = None
    condition_at_return: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return not self.actual_return_date

    def is_overdue(self, today: str) -> bool:
        # ISO YYYY-MM-DD strings are fixed width, so string order is date order
        return self.is_active and self.expected_return_date < today

    @classmethod
    def field_names(cls):
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls, data: dict) -> "Loan":
        data = snake_keys(data)
        known = cls.field_names()
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict:
        return camel_keys(asdict(self))


class LoanRow(db.Model):
    __tablename__ = "loans"

    id = db.Column(db.String(64), primary_key=True)

    # plain id reference: a loan may outlive its material
    material_id = db.Column(db.String(64), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    borrower_name = db.Column(db.String(200), nullable=False)
    borrower_contact = db.Column(db.String(200), nullable=False, default="")

    loan_date = db.Column(db.String(10), nullable=False)
    expected_return_date = db.Column(db.String(10), nullable=False, index=True)
    actual_return_date = db.Column(db.String(10), nullable=True)

    condition_at_loan = db.Column(db.String(20), nullable=False)
    condition_at_return = db.Column(db.String(20), nullable=True)
    notes = db.Column(db.String(1000), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def apply(self, loan: Loan):
        for k, v in asdict(loan).items():
            setattr(self, k, v)

    def to_record(self) -> Loan:
        return Loan(**{k: getattr(self, k) for k in Loan.field_names()})
