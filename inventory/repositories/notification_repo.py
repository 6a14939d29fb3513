from inventory.models.notification_log import NotificationLog
from inventory.extensions import db


class NotificationRepo:
    @staticmethod
    def already_sent(loan_id: str, notif_type: str = "overdue") -> bool:
        return NotificationLog.query.filter_by(
            loan_id=loan_id, type=notif_type, success=True
        ).first() is not None

    @staticmethod
    def log(entry: NotificationLog, commit: bool = False):
        db.session.add(entry)
        if commit:
            db.session.commit()
        return entry

    @staticmethod
    def list_for_loan(loan_id: str):
        return NotificationLog.query.filter_by(loan_id=loan_id).order_by(NotificationLog.id).all()
