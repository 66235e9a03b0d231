"""Mirror selected notifications to the recipient's inbox via SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any
from urllib.parse import urljoin

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from talentbook.config import get_settings
from talentbook.domain.entities import Notification

logger = logging.getLogger(__name__)


def _describe_error_body(body: Any) -> str | None:
    """Return a readable description for a SendGrid error payload."""

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if not body:
        return None
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body.strip() or None

    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        messages = [
            str(item["message"])
            for item in body["errors"]
            if isinstance(item, dict) and item.get("message")
        ]
        if messages:
            return "; ".join(messages)
    return json.dumps(body, default=str)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.debug("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:  # the client raises python_http_client errors and socket errors alike
        status_code = getattr(exc, "status_code", None)
        details = _describe_error_body(getattr(exc, "body", None))
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details or exc
        )
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        logger.error(
            "SendGrid API responded with status %s: %s",
            status_code,
            _describe_error_body(getattr(response, "body", None)),
        )
        return False

    return True


def render_notification_email(notification: Notification) -> str:
    """Return the HTML body used when mailing ``notification``."""

    parts = [
        f"<h2>{escape(notification.title)}</h2>",
        f"<p>{escape(notification.message)}</p>",
    ]
    if notification.action_url:
        base_url = get_settings().app_base_url.rstrip("/")
        link = urljoin(f"{base_url}/", notification.action_url.lstrip("/"))
        parts.append(
            f'<p><a href="{escape(link, quote=True)}">Open in the app</a></p>'
        )
    return "".join(parts)


def send_notification_email(recipient: str, notification: Notification) -> bool:
    """Mail ``notification`` to ``recipient``; failures are logged, never raised."""

    return send_email(notification.title, render_notification_email(notification), recipient)


__all__ = ["render_notification_email", "send_email", "send_notification_email"]
