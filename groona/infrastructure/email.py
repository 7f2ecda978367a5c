"""Utility helpers for sending transactional email via SendGrid."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from groona.config import get_settings
from groona.utils.otp import OTP_TTL_MINUTES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailDeliveryResult:
    """Outcome of a single send request."""

    sent: bool
    message_id: str | None = None


@dataclass(frozen=True)
class EmailStatus:
    """Delivery status reported by the provider for one message."""

    message_id: str
    status: str
    to_email: str | None = None
    from_email: str | None = None
    subject: str | None = None
    last_event_time: str | None = None


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_sendgrid_exception(exc: Exception) -> None:
    """Log a SendGrid API error with helpful troubleshooting details."""

    status_code = getattr(exc, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(exc, "body", None))

    if status_code and details:
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details
        )
    elif status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid API request failed: %s", details)
    else:
        logger.exception("Error calling the SendGrid API: %s", exc)


def _log_unsuccessful_response(response: Any) -> None:
    status_code = getattr(response, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(response, "body", None))

    if details:
        logger.error(
            "SendGrid API responded with status %s: %s", status_code, details
        )
    else:
        logger.error("SendGrid API responded with status %s", status_code)


def _header_value(headers: Any, name: str) -> str | None:
    if headers is None:
        return None
    getter = getattr(headers, "get", None)
    if getter is None:
        return None
    value = getter(name) or getter(name.lower())
    return str(value) if value else None


def deliver_email(subject: str, html_content: str, recipient: str | list[str]) -> EmailDeliveryResult:
    """Send an email and return the provider message identifier when accepted."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return EmailDeliveryResult(sent=False)

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        _log_sendgrid_exception(exc)
        return EmailDeliveryResult(sent=False)

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_unsuccessful_response(response)
        return EmailDeliveryResult(sent=False)

    message_id = _header_value(getattr(response, "headers", None), "X-Message-Id")
    logger.info("Email '%s' accepted by SendGrid (message id: %s)", subject, message_id or "-")
    return EmailDeliveryResult(sent=True, message_id=message_id)


def send_email(subject: str, html_content: str, recipient: str | list[str]) -> bool:
    """Send an email using the configured SendGrid credentials."""

    return deliver_email(subject, html_content, recipient).sent


def get_email_status(message_id: str) -> EmailStatus | None:
    """Fetch the delivery status of ``message_id`` from the Email Activity API.

    Returns ``None`` when email is not configured or the lookup fails; nothing
    is stored locally.
    """

    settings = get_settings()
    if not settings.sendgrid_api_key:
        logger.info("SendGrid configuration incomplete; cannot look up message status")
        return None

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.client.messages._(message_id).get()
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        _log_sendgrid_exception(exc)
        return None

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_unsuccessful_response(response)
        return None

    body = getattr(response, "body", None)
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    try:
        payload = json.loads(body) if isinstance(body, str) else dict(body or {})
    except (TypeError, ValueError):
        logger.error("SendGrid returned an unreadable status payload for %s", message_id)
        return None

    return EmailStatus(
        message_id=str(payload.get("msg_id") or message_id),
        status=str(payload.get("status") or "unknown"),
        to_email=payload.get("to_email"),
        from_email=payload.get("from_email"),
        subject=payload.get("subject"),
        last_event_time=payload.get("last_event_time"),
    )


def render_otp_email(otp: str) -> str:
    """Return the static verification template with ``otp`` embedded."""

    return "".join(
        (
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; '
            'padding: 20px; background-color: #f9fafb;">',
            '<div style="background: linear-gradient(135deg, #2563eb 0%, #7c3aed 100%); '
            'padding: 30px; text-align: center; border-radius: 8px 8px 0 0;">',
            '<h1 style="color: #ffffff; margin: 0; font-size: 24px;">Email Verification</h1>',
            "</div>",
            '<div style="background: white; padding: 30px; border-radius: 0 0 8px 8px;">',
            '<p style="font-size: 16px; color: #1f2937;">Hello,</p>',
            '<p style="font-size: 16px; color: #4b5563;">Please use the following verification '
            "code to verify your email address:</p>",
            '<div style="text-align: center; margin: 30px 0;">',
            '<span style="font-family: \'Courier New\', monospace; font-size: 32px; '
            f'font-weight: bold; color: #2563eb; letter-spacing: 8px;">{escape(otp)}</span>',
            "</div>",
            f'<p style="font-size: 14px; color: #6b7280;">This code will expire in {OTP_TTL_MINUTES} minutes.</p>',
            '<p style="font-size: 14px; color: #6b7280;">If you didn\'t request this code, '
            "please ignore this email.</p>",
            "</div>",
            "</div>",
        )
    )


def send_otp_email(email: str, otp: str) -> bool:
    """Send the sign-in verification code to ``email``."""

    return send_email("Verify Your Email - Groona", render_otp_email(otp), email)


def send_test_email(recipient: str, *, now: datetime | None = None) -> EmailDeliveryResult:
    """Send an ad hoc delivery check message to ``recipient``."""

    sent_at = now or datetime.now()
    subject = f"Groona Delivery Test - {sent_at:%H:%M:%S}"
    html_content = "".join(
        (
            '<div style="font-family: sans-serif; padding: 20px; border: 1px solid #ccc; border-radius: 8px;">',
            '<h2 style="color: #2563eb;">If you see this, email is working!</h2>',
            "<p>This email confirms that the Groona backend can deliver transactional email.</p>",
            "<hr>",
            f'<p style="font-size: 12px; color: #666;">Time: {sent_at.isoformat(timespec="seconds")}</p>',
            "</div>",
        )
    )
    return deliver_email(subject, html_content, recipient)


def render_timesheet_lockout_email(
    *, user_name: str, missing_count: int, missing_dates: list[str]
) -> tuple[str, str]:
    """Return subject and body telling a member their timesheet logging is locked."""

    subject = "Urgent: Timesheet Submission Locked"
    html_content = "".join(
        (
            f"<p>Hello {escape(user_name)},</p>",
            f"<p>You have missed <strong>{missing_count}</strong> daily timesheets in the last week.</p>",
            f"<p>Missing days: {escape(', '.join(missing_dates))}</p>",
            "<p>Your ability to log new time is locked until you fill in the missing days.</p>",
        )
    )
    return subject, html_content


def render_team_member_lockout_email(
    *, recipient_name: str, user_name: str, missing_count: int
) -> tuple[str, str]:
    subject = f"Alert: {user_name} Timesheet Lockout"
    html_content = "".join(
        (
            f"<p>Hello {escape(recipient_name)},</p>",
            f"<p>{escape(user_name)} has been locked out of timesheets due to "
            f"{missing_count} missing entries in the last week.</p>",
        )
    )
    return subject, html_content


def render_multiple_overdue_email(
    *,
    user_name: str,
    overdue_count: int,
    task_titles: list[str],
    dashboard_url: str,
) -> tuple[str, str]:
    """Return subject and body warning a member that several tasks are overdue."""

    subject = f"ALARM: {overdue_count} Tasks Overdue!"
    items = "".join(f"<li>{escape(title)}</li>" for title in task_titles[:3])
    html_content = "".join(
        (
            f"<p>Hello {escape(user_name)},</p>",
            f"<p>You have <strong>{overdue_count}</strong> overdue tasks, including:</p>",
            f"<ul>{items}</ul>",
            "<p>Please consult your Project Manager immediately.</p>",
            f'<p><a href="{escape(dashboard_url)}">Open your dashboard</a></p>',
        )
    )
    return subject, html_content


_REWORK_SUBJECTS = {
    "critical": "Critical Rework Detected",
    "high": "High Rework Detected",
    "info": "Rework Logged",
}


def render_rework_email(
    *,
    user_name: str,
    level: str,
    rework_percent: float,
    threshold: int | None,
    dashboard_url: str,
) -> tuple[str, str]:
    """Return subject and body for a rework alarm or the informational notice.

    ``level`` is ``critical``, ``high`` or ``info``.
    """

    subject = _REWORK_SUBJECTS[level]
    if threshold is None:
        detail = (
            f"<p>You have logged rework time recently ({rework_percent:.1f}% of total). "
            "Please ensure quality and clarity of requirements.</p>"
        )
    else:
        detail = (
            f"<p>Your rework time is at <strong>{rework_percent:.1f}%</strong>, "
            f"exceeding the {threshold}% threshold.</p>"
        )
    html_content = "".join(
        (
            f"<p>Hello {escape(user_name)},</p>",
            detail,
            "<p>Task assignments are frozen until a peer review is done.</p>"
            if level == "critical"
            else "",
            f'<p><a href="{escape(dashboard_url)}">Review your timesheets</a></p>',
        )
    )
    return subject, html_content


def render_velocity_alarm_email(
    *,
    project_name: str,
    sprint_name: str,
    accuracy: float,
    previous_sprint_name: str,
    previous_accuracy: float,
    sprint_url: str,
) -> tuple[str, str]:
    subject = f"Alarm: Consistent Low Velocity - {project_name}"
    html_content = "".join(
        (
            "<p>Hello Project Manager,</p>",
            f"<p>The velocity for your project <strong>{escape(project_name)}</strong> is "
            "critically low (&lt;85%) for 2 consecutive sprints. Immediate action is required.</p>",
            "<ul>",
            f"<li>Latest sprint {escape(sprint_name)}: {accuracy:.1f}%</li>",
            f"<li>Previous sprint {escape(previous_sprint_name)}: {previous_accuracy:.1f}%</li>",
            "</ul>",
            "<p>New sprint commitments are frozen for this project.</p>",
            f'<p><a href="{escape(sprint_url)}">View sprint details</a></p>',
        )
    )
    return subject, html_content


__all__ = [
    "EmailDeliveryResult",
    "EmailStatus",
    "deliver_email",
    "get_email_status",
    "render_multiple_overdue_email",
    "render_otp_email",
    "render_rework_email",
    "render_team_member_lockout_email",
    "render_timesheet_lockout_email",
    "render_velocity_alarm_email",
    "send_email",
    "send_otp_email",
    "send_test_email",
]
