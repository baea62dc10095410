# backend/utils/mailer.py
import logging
import smtplib
from email.message import EmailMessage

from config import settings

logger = logging.getLogger(__name__)


class Mailer:
    """Sends notification mails through SMTP. Disabled unless MAIL_ENABLED is set."""

    def __init__(self, enabled=None, host=None, port=None, sender=None, recipient=None, timeout=None):
        self.enabled = settings.MAIL_ENABLED if enabled is None else enabled
        self.host = host or settings.MAIL_HOST
        self.port = port or settings.MAIL_PORT
        self.sender = sender or settings.MAIL_FROM
        self.recipient = recipient or settings.MAIL_TO
        self.timeout = timeout or settings.MAIL_TIMEOUT

    def send(self, subject: str, body: str) -> None:
        if not self.enabled:
            logger.info("Mail disabled, not sending: subject=%s", subject)
            return

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = self.recipient
        message.set_content(body, subtype="html")

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.send_message(message)
        logger.debug("send: subject=%s sent to %s", subject, self.recipient)


def get_mailer() -> Mailer:
    return Mailer()
