from inventory.extensions import db
from inventory.models.loan import Loan, LoanRow


class LoanRepo:
    @staticmethod
    def list_all():
        rows = LoanRow.query.order_by(LoanRow.created_at, LoanRow.id).all()
        return [r.to_record() for r in rows]

    @staticmethod
    def get(loan_id: str):
        row = db.session.get(LoanRow, loan_id)
        return row.to_record() if row else None

    @staticmethod
    def create(loan: Loan):
        row = LoanRow()
        row.apply(loan)
        db.session.add(row)
        LoanRepo.commit()
        return loan

    @staticmethod
    def update(loan: Loan):
        row = db.session.get(LoanRow, loan.id)
        if row is None:
            row = LoanRow()
            db.session.add(row)
        row.apply(loan)
        LoanRepo.commit()
        return loan

    @staticmethod
    def delete(loan_id: str):
        row = db.session.get(LoanRow, loan_id)
        if row is not None:
            db.session.delete(row)
            LoanRepo.commit()

    @staticmethod
    def commit():
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
