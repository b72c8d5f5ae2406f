"""Email channel implementation using SMTP."""

import smtplib
import ssl
from email.message import EmailMessage
from string import Template
from typing import Dict, List, Optional

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from infrastructure.exceptions import TransportError, ValidationError
from infrastructure.logging import get_module_logger
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Notification, TemplateNotification

logger = get_module_logger()

_email_adapter = TypeAdapter(EmailStr)


def is_valid_email(address: str) -> bool:
    """Check an address is syntactically valid (RFC 5322 via EmailStr)."""
    try:
        _email_adapter.validate_python(address)
    except PydanticValidationError:
        return False
    return True


class EmailChannel(NotificationChannel):
    """SMTP-backed email channel.

    Sends one message per valid email recipient over a single SMTP
    connection. Recipients that are not email addresses (phone numbers, push
    tokens) are skipped without counting as failures; a rejected recipient
    is logged and skipped.

    Args:
        host: SMTP server hostname (required)
        sender: From address (required)
        port: SMTP server port (default 587)
        username: Login user; login is attempted only with a password too
        password: Login password
        use_tls: Upgrade the connection with STARTTLS (default True)
        templates: Named body templates (``string.Template`` syntax) rendered
            with ``notification.data`` for TemplateNotification
        timeout: Socket timeout in seconds
    """

    def __init__(
        self,
        host: Optional[str] = None,
        sender: Optional[str] = None,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        templates: Optional[Dict[str, str]] = None,
        timeout: int = 30,
    ) -> None:
        self.host = host
        self.sender = sender
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.templates: Dict[str, str] = dict(templates or {})
        self.timeout = timeout

    @property
    def channel_name(self) -> str:
        return "email"

    def is_configured(self) -> bool:
        return bool(self.host) and bool(self.sender)

    def register_template(self, name: str, body: str) -> None:
        self.templates[name] = body

    def filter_recipients(self, recipients: List[str]) -> List[str]:
        return [r for r in recipients if is_valid_email(r)]

    def send(self, notification: Notification) -> int:
        """Send the notification to every valid email recipient.

        Returns:
            Number of messages accepted by the SMTP server.

        Raises:
            ConfigurationError: If host or sender is missing.
            ValidationError: If a template notification names an unknown
                template.
            TransportError: If the SMTP server cannot be reached. A connection
                lost mid-send is reopened for the remaining recipients; the
                recipient being sent to is counted as not reached.
        """
        self.ensure_configured()

        recipients = self.filter_recipients(notification.recipients)
        if not recipients:
            logger.debug("email_no_eligible_recipients")
            return 0

        subject, body = self._render(notification)

        server: Optional[smtplib.SMTP] = self._connect()
        sent = 0
        try:
            for index, recipient in enumerate(recipients):
                try:
                    if self._send_one(server, recipient, subject, body):
                        sent += 1
                except (smtplib.SMTPServerDisconnected, OSError) as e:
                    logger.warning(
                        "email_connection_lost", recipient=recipient, error=str(e)
                    )
                    server.close()
                    server = None
                    remaining = len(recipients) - index - 1
                    if not remaining:
                        break
                    try:
                        server = self._connect()
                    except TransportError:
                        logger.error("email_reconnect_failed", skipped=remaining)
                        break
        finally:
            if server is not None:
                self._disconnect(server)

        logger.info(
            "email_notification_sent",
            sent=sent,
            eligible=len(recipients),
        )
        return sent

    def _connect(self) -> smtplib.SMTP:
        """Open an SMTP session, upgrading to TLS and logging in if configured.

        Raises:
            TransportError: If the server cannot be reached or rejects the
                handshake or login.
        """
        server = None
        try:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            if self.use_tls:
                server.starttls(context=ssl.create_default_context())
            if self.username and self.password:
                server.login(self.username, self.password)
        except (smtplib.SMTPException, OSError) as e:
            if server is not None:
                server.close()
            logger.error("email_transport_failed", host=self.host, error=str(e))
            raise TransportError(f"SMTP {self.host}:{self.port} failed: {e}") from e
        return server

    @staticmethod
    def _disconnect(server: smtplib.SMTP) -> None:
        try:
            server.quit()
        except (smtplib.SMTPException, OSError):
            server.close()

    def _send_one(
        self, server: smtplib.SMTP, recipient: str, subject: str, body: str
    ) -> bool:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = recipient
        message.set_content(body)

        try:
            server.send_message(message)
        except smtplib.SMTPServerDisconnected:
            raise
        except smtplib.SMTPException as e:
            logger.warning("email_send_failed", recipient=recipient, error=str(e))
            return False
        return True

    def _render(self, notification: Notification) -> tuple[str, str]:
        """Resolve subject and body, rendering the template if there is one."""
        if not isinstance(notification, TemplateNotification):
            return notification.subject, notification.content

        template = self.templates.get(notification.template_name)
        if template is None:
            raise ValidationError(
                f"Unknown email template: {notification.template_name}"
            )
        data = {key: str(value) for key, value in notification.data.items()}
        subject = Template(notification.subject).safe_substitute(data)
        body = Template(template).safe_substitute(data)
        return subject, body
