"""Outbound email: the Notifier contract plus SMTP and logging implementations."""

from __future__ import annotations

import logging
import smtplib
import ssl
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Protocol, Set

from ..core.exceptions import DownstreamError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, *, to: str, subject: str, content: str) -> None:
        raise NotImplementedError


class LoggingNotifier(Notifier):
    """Used when SMTP is not configured (development, tests)."""

    def send(self, *, to: str, subject: str, content: str) -> None:
        logger.info("Email to %s: %s", to, subject)


class SmtpNotifier(Notifier):
    def __init__(
        self,
        *,
        host: str,
        port: int,
        user: str,
        password: str,
        sender: Optional[str] = None,
        use_ssl: bool = True,
        timeout: int = 30,
    ):
        self._host = host
        self._port = int(port)
        self._user = user
        self._password = password
        self._sender = sender or user
        self._use_ssl = use_ssl
        self._timeout = timeout

    def _build(self, *, to: str, subject: str, content: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self._sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(content, "html"))
        return msg

    def send(self, *, to: str, subject: str, content: str) -> None:
        msg = self._build(to=to, subject=subject, content=content)
        logger.info("Sending email to %s with subject: %s", to, subject)
        try:
            if self._use_ssl:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(self._host, self._port, context=context, timeout=self._timeout) as server:
                    server.login(self._user, self._password)
                    rejected = server.send_message(msg)
            else:
                with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                    server.starttls(context=ssl.create_default_context())
                    server.login(self._user, self._password)
                    rejected = server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise DownstreamError(f"Failed to send email to {to}") from e

        if rejected:
            logger.warning("Some recipients were rejected: %s", rejected)


class BackgroundNotifier(Notifier):
    """Hands every send to a small worker pool so callers never wait on delivery.

    Failures happen on the worker and are logged there; nothing is reported
    back to the caller.
    """

    def __init__(self, inner: Notifier, *, max_workers: int = 2):
        self._inner = inner
        self._executor = ThreadPoolExecutor(max_workers=max(int(max_workers), 1), thread_name_prefix="notifier")
        self._pending: Set[Future] = set()
        self._lock = threading.Lock()

    def send(self, *, to: str, subject: str, content: str) -> None:
        future = self._executor.submit(self._deliver, to, subject, content)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def _deliver(self, to: str, subject: str, content: str) -> None:
        try:
            self._inner.send(to=to, subject=subject, content=content)
        except Exception:
            logger.exception("Background notification to %s failed (%s)", to, subject)

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait for queued sends; False if some are still running after `timeout`."""
        with self._lock:
            pending = set(self._pending)
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def shutdown(self, *, wait_for_pending: bool = True) -> None:
        self._executor.shutdown(wait=wait_for_pending)


def build_notifier(settings: dict) -> Notifier:
    host = settings.get("SMTP_HOST")
    user = settings.get("SMTP_USER")
    if not host or not user:
        return LoggingNotifier()
    smtp = SmtpNotifier(
        host=host,
        port=int(settings.get("SMTP_PORT") or 465),
        user=user,
        password=settings.get("SMTP_PASSWORD") or "",
        sender=settings.get("SMTP_SENDER"),
        use_ssl=bool(settings.get("SMTP_USE_SSL", True)),
    )
    return BackgroundNotifier(smtp, max_workers=int(settings.get("NOTIFIER_WORKERS") or 2))


def send_quietly(notifier: Optional[Notifier], *, to: str, subject: str, content: str) -> bool:
    """Best-effort hand-off: the state change that triggered it already happened.

    With a BackgroundNotifier this only queues the message; a synchronous
    notifier that raises is logged and swallowed here.
    """
    if notifier is None or not to:
        return False
    try:
        notifier.send(to=to, subject=subject, content=content)
        return True
    except Exception:
        logger.exception("Notification to %s failed (%s)", to, subject)
        return False
