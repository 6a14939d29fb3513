# inventory/services/mail_service.py
from __future__ import annotations

import re
from datetime import datetime

from flask import current_app
from flask_mail import Message

from inventory.extensions import mail
from inventory.models.notification_log import NotificationLog
from inventory.repositories.notification_repo import NotificationRepo

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class MailService:
    @staticmethod
    def looks_like_email(contact: str | None) -> bool:
        return bool(contact) and bool(_EMAIL_RE.match(contact.strip()))

    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[MailService] Mail non envoyé à {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def log_notification(
        loan_id: str,
        notif_type: str,
        to_email: str | None,
        message: str,
        success: bool,
        error: str | None = None,
    ) -> NotificationLog:
        row = NotificationLog(
            loan_id=loan_id,
            type=notif_type,
            email=to_email,
            message=message,
            success=bool(success),
            error_message=error,
            sent_at=datetime.utcnow(),
        )
        return NotificationRepo.log(row)

    @staticmethod
    def overdue_message(loan, material) -> tuple[str, str]:
        name = material.name if material else f"Matériel #{loan.material_id}"
        subject = "Matériel de la ligue : retour en retard"
        body = (
            f"Bonjour {loan.borrower_name},\n\n"
            f"Le prêt de {loan.quantity} x '{name}' devait être rendu le {loan.expected_return_date}.\n\n"
            "Merci de le rapporter dès que possible."
        )
        return subject, body
