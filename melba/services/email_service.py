"""Email delivery helper used for submission notifications.

Delivery is pluggable: the transport is injected at app creation and kept in
``app.extensions["email"]``. :class:`OutboxTransport` keeps messages in
memory (tests, local development without SMTP); :class:`SMTPTransport` talks
to a real server with a bounded timeout.

:func:`dispatch` is fire-and-forget. A failed render or delivery is logged
and dropped; nothing is retried.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
import threading
from dataclasses import dataclass, field
from email.message import EmailMessage as MIMEMessage
from email.utils import formataddr, make_msgid
from typing import Iterable, Mapping

from flask import Flask, current_app, render_template

from ..errors import NotificationFault

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EmailMessage:
    """Structure used to store email payloads in memory."""

    subject: str
    recipients: tuple[str, ...]
    html: str
    text: str
    reply_to: str | None = None
    sender: str | None = None
    extra: Mapping[str, object] | None = None


class OutboxTransport:
    """Keeps every delivered message in ``outbox``."""

    def __init__(self) -> None:
        self.outbox: list[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        self.outbox.append(message)


class SMTPTransport:
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        use_ssl: bool = False,
        timeout: float = 10,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.use_ssl = use_ssl
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Mapping[str, object]) -> "SMTPTransport":
        return cls(
            host=str(config.get("MAIL_SERVER")),
            port=int(config.get("MAIL_PORT") or 587),
            username=config.get("MAIL_USERNAME") or None,
            password=config.get("MAIL_PASSWORD") or None,
            use_tls=bool(config.get("MAIL_USE_TLS")),
            use_ssl=bool(config.get("MAIL_USE_SSL")),
            timeout=float(config.get("MAIL_TIMEOUT") or 10),
        )

    def _build_mime(self, message: EmailMessage) -> MIMEMessage:
        mime = MIMEMessage()
        mime["Subject"] = message.subject
        mime["From"] = message.sender or self.username or ""
        mime["To"] = ", ".join(message.recipients)
        mime["Message-ID"] = make_msgid()
        if message.reply_to:
            mime["Reply-To"] = message.reply_to
        mime.set_content(message.text)
        mime.add_alternative(message.html, subtype="html")
        return mime

    def send(self, message: EmailMessage) -> None:
        mime = self._build_mime(message)
        try:
            if self.use_ssl:
                server = smtplib.SMTP_SSL(
                    self.host, self.port, timeout=self.timeout, context=ssl.create_default_context()
                )
            else:
                server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with server:
                if self.use_tls and not self.use_ssl:
                    server.starttls(context=ssl.create_default_context())
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationFault(f"SMTP delivery to {self.host} failed: {exc}") from exc


def init_email(app: Flask, transport=None):
    """Attach the mail transport to ``app`` and return it."""

    if transport is None:
        if app.config.get("MAIL_SERVER"):
            transport = SMTPTransport.from_config(app.config)
        else:
            transport = OutboxTransport()
            app.logger.info("[BOOT] MAIL_SERVER not set; emails are kept in the in-memory outbox")
    app.extensions.setdefault("email", {})["transport"] = transport
    return transport


def get_transport(app: Flask | None = None):
    app = app or current_app._get_current_object()
    extensions = app.extensions.setdefault("email", {})
    transport = extensions.get("transport")
    if transport is None:
        transport = init_email(app)
    return transport


def _default_sender() -> str:
    sender = current_app.config.get("MAIL_DEFAULT_SENDER") or ""
    organization = current_app.config.get("ORGANIZATION_NAME")
    if sender and organization:
        return formataddr((str(organization), str(sender)))
    return str(sender)


def notification_address() -> str:
    return current_app.config.get("NOTIFY_EMAIL") or current_app.config.get("MAIL_DEFAULT_SENDER") or ""


def build_email(
    subject: str,
    recipients: Iterable[str],
    template_prefix: str,
    context: Mapping[str, object] | None = None,
    reply_to: str | None = None,
) -> EmailMessage:
    """Render ``emails/<template_prefix>.html`` and ``.txt`` into a message."""

    context = dict(context or {})
    context.setdefault("organization", current_app.config.get("ORGANIZATION_NAME"))
    html = render_template(f"emails/{template_prefix}.html", **context)
    text = render_template(f"emails/{template_prefix}.txt", **context)

    return EmailMessage(
        subject=subject,
        recipients=tuple(str(r) for r in recipients if r),
        html=html,
        text=text,
        reply_to=reply_to,
        sender=_default_sender(),
        extra=context,
    )


def deliver(message: EmailMessage, transport=None) -> EmailMessage:
    """Send ``message`` synchronously; transport errors propagate."""

    transport = transport or get_transport()
    transport.send(message)
    logger.info(
        "Email sent",
        extra={"subject": message.subject, "recipients": message.recipients},
    )
    return message


def send_email(
    subject: str,
    recipients: Iterable[str],
    template_prefix: str,
    context: Mapping[str, object] | None = None,
    reply_to: str | None = None,
    transport=None,
) -> EmailMessage:
    """Render and deliver an email message."""

    message = build_email(subject, recipients, template_prefix, context, reply_to)
    return deliver(message, transport)


@dataclass
class EmailRequest:
    """Unrendered email; rendering happens on the delivery thread."""

    subject: str
    recipients: tuple[str, ...]
    template_prefix: str
    context: Mapping[str, object] = field(default_factory=dict)
    reply_to: str | None = None


def _deliver_all(requests: list[EmailRequest], transport) -> int:
    delivered = 0
    for request in requests:
        if not any(request.recipients):
            logger.warning("Email skipped: no recipients", extra={"subject": request.subject})
            continue
        try:
            send_email(
                request.subject,
                request.recipients,
                request.template_prefix,
                request.context,
                request.reply_to,
                transport=transport,
            )
            delivered += 1
        except Exception:
            logger.exception(
                "Email delivery failed",
                extra={"subject": request.subject, "recipients": request.recipients},
            )
    return delivered


def _deliver_in_app(app: Flask, requests: list[EmailRequest], transport) -> None:
    with app.app_context():
        _deliver_all(requests, transport)


def dispatch(requests: Iterable[EmailRequest]) -> threading.Thread | None:
    """Fire-and-forget delivery of ``requests``.

    Returns the worker thread when ``MAIL_ASYNC`` is enabled, ``None`` when the
    messages were delivered inline. Never raises.
    """

    requests = list(requests)
    if not requests:
        return None
    try:
        app = current_app._get_current_object()
        transport = get_transport(app)
        if not app.config.get("MAIL_ASYNC", True):
            _deliver_all(requests, transport)
            return None
        thread = threading.Thread(
            target=_deliver_in_app,
            args=(app, requests, transport),
            daemon=True,
            name="email-dispatch",
        )
        thread.start()
        return thread
    except Exception:
        logger.exception("Failed to queue email")
        return None


__all__ = [
    "EmailMessage",
    "EmailRequest",
    "OutboxTransport",
    "SMTPTransport",
    "init_email",
    "get_transport",
    "notification_address",
    "build_email",
    "deliver",
    "send_email",
    "dispatch",
]
