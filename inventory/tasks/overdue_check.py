# inventory/tasks/overdue_check.py
from flask import current_app

from inventory.extensions import db
from inventory.repositories.notification_repo import NotificationRepo
from inventory.services.mail_service import MailService

NOTIF_TYPE = "overdue"


def run_overdue_check_job(app, lending):
    """
    Send one reminder per overdue loan.
    - loans whose borrower contact is not an e-mail address are only counted
    - a loan with a successful reminder already logged is skipped
    - failed sends are logged and retried on the next run
    Returns the number of reminders sent.
    """
    with app.app_context():
        try:
            overdue = lending.ledger.overdue_loans()
            sent = 0
            skipped = 0

            for loan in overdue:
                if not MailService.looks_like_email(loan.borrower_contact):
                    skipped += 1
                    continue
                if NotificationRepo.already_sent(loan.id, NOTIF_TYPE):
                    continue

                material = lending.registry.get_by_id(loan.material_id)
                subject, body = MailService.overdue_message(loan, material)
                ok, err = MailService.send_email(loan.borrower_contact, subject, body)
                if ok:
                    sent += 1

                MailService.log_notification(
                    loan_id=loan.id,
                    notif_type=NOTIF_TYPE,
                    to_email=loan.borrower_contact,
                    message=body,
                    success=ok,
                    error=err,
                )

            db.session.commit()

            current_app.logger.info(
                f"[overdue_check] overdue={len(overdue)} sent={sent} no_email={skipped}"
            )
            return sent

        except Exception as e:
            db.session.rollback()
            current_app.logger.exception(f"[overdue_check] Erreur: {e}")
            return 0
