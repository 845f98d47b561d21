"""Email rendering for submissions.

Two templates are rendered for every stored submission: the customer
confirmation and the business notification. Each has an HTML and a plain
text body. User-supplied values are HTML-escaped exactly once, at the point
of interpolation into the HTML body.
"""

import html
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from travel_inquiry.api.models import Submission

NO_MESSAGE = "No additional message"
NO_END_DATE = "TBD"

CONFIRMATION_STYLE = """
      body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
      .container { max-width: 600px; margin: 0 auto; padding: 20px; background: #fff; }
      .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px 20px; text-align: center; border-radius: 8px 8px 0 0; }
      h1 { color: white; margin: 0; font-size: 28px; }
      .content { padding: 30px; border: 1px solid #e0e0e0; border-top: none; }
      .highlight { background: #f8f9ff; padding: 15px; margin: 20px 0; border-left: 4px solid #667eea; border-radius: 4px; }
      .message { background: #fafafa; padding: 15px; border: 1px solid #e0e0e0; border-radius: 4px; }
      .footer { margin-top: 30px; padding: 20px; font-size: 12px; color: #7f8c8d; background: #f8f9fa; text-align: center; border-radius: 0 0 8px 8px; }
      li { margin: 10px 0; }
"""

NOTIFICATION_STYLE = """
      body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
      .container { max-width: 600px; margin: 0 auto; padding: 20px; }
      .header { background: #2c5282; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0; }
      h1 { color: white; margin: 0; }
      table { border-collapse: collapse; width: 100%; margin: 20px 0; }
      table, th, td { border: 1px solid #ddd; }
      th, td { padding: 12px; text-align: left; }
      th { background-color: #f2f2f2; font-weight: bold; width: 30%; }
      .priority { background: #fff3cd; padding: 15px; border-left: 4px solid #ffc107; margin: 20px 0; }
"""


@dataclass(frozen=True)
class EmailContent:
    """Subject plus HTML and plain text bodies of one email."""

    subject: str
    html: str
    text: str


def escape_html(value: Optional[str]) -> str:
    """Escape &, <, >, " and ' for interpolation into HTML.

    Args:
        value: Raw user-supplied text (None renders as an empty string)

    Returns:
        Escaped text
    """
    if not value:
        return ""
    return html.escape(str(value), quote=True)


def html_message(value: str) -> str:
    """Escape a multi-line message and turn newlines into <br> tags."""
    return escape_html(value).replace("\r\n", "\n").replace("\n", "<br>")


def format_display_time(submitted_at: str) -> str:
    """Render an ISO 8601 timestamp for people.

    Args:
        submitted_at: ISO 8601 timestamp (a trailing Z is accepted)

    Returns:
        A string such as "Oct 18, 2026 03:04 PM UTC"; the input unchanged
        when it cannot be parsed
    """
    try:
        moment = datetime.fromisoformat(submitted_at.replace("Z", "+00:00"))
    except ValueError:
        return submitted_at

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%b %d, %Y %I:%M %p UTC")


def _travel_dates(submission: Submission, escape: bool) -> Optional[str]:
    if not submission.travel_date_start:
        return None
    start = submission.travel_date_start
    end = submission.travel_date_end or NO_END_DATE
    if escape:
        return f"{escape_html(start)} to {escape_html(end)}"
    return f"{start} to {end}"


def _summary_fields(submission: Submission) -> list[tuple[str, str, Optional[str]]]:
    """Optional fields as (label, raw text, pre-escaped html) triples."""
    fields = []
    if submission.destination:
        fields.append(("Destination", submission.destination, None))
    if submission.travel_date_start:
        fields.append(
            ("Travel Dates", _travel_dates(submission, False), _travel_dates(submission, True))
        )
    if submission.travelers:
        fields.append(("Number of Travelers", submission.travelers, None))
    if submission.phone:
        fields.append(("Phone", submission.phone, None))
    return fields


def render_customer_confirmation(
    submission: Submission, brand_name: str = "Travel with Ease", year: Optional[int] = None
) -> EmailContent:
    """Render the confirmation sent to the submitter.

    Args:
        submission: Stored submission
        brand_name: Business name used in the greeting and footer
        year: Copyright year (defaults to the current UTC year)

    Returns:
        EmailContent with subject, HTML and text bodies
    """
    if year is None:
        year = datetime.now(timezone.utc).year
    brand = escape_html(brand_name)
    fields = _summary_fields(submission)

    items = "\n".join(
        f"        <li><strong>{label}:</strong> {html_value or escape_html(text)}</li>"
        for label, text, html_value in fields
    )
    html_body = f"""<html>
  <head>
    <style>{CONFIRMATION_STYLE}    </style>
  </head>
  <body>
    <div class="container">
      <div class="header">
        <h1>{brand}</h1>
        <p style="margin: 10px 0 0 0;">Thank You for Your Travel Inquiry</p>
      </div>
      <div class="content">
        <p>Dear {escape_html(submission.name)},</p>
        <p>We have received your travel inquiry and are excited to help you plan your journey! Here's a summary of the information you provided:</p>
        <ul>
{items}
        </ul>
        <p><strong>Your Message:</strong></p>
        <div class="message">{html_message(submission.message or NO_MESSAGE)}</div>
        <p>A member of our travel team will review your inquiry and get back to you within 24 hours.</p>
        <div class="highlight">
          <strong>Your Reference Number:</strong> {escape_html(submission.id)}
        </div>
        <p>Best regards,<br><strong>The {brand} Team</strong></p>
      </div>
      <div class="footer">
        <p>This is an automated message. Please do not reply to this email.</p>
        <p>&copy; {year} {brand}. All rights reserved.</p>
      </div>
    </div>
  </body>
</html>
"""

    lines = [
        "Thank You for Your Travel Inquiry",
        "",
        f"Dear {submission.name},",
        "",
        "We have received your travel inquiry and are excited to help you plan your journey!",
        "",
        f"Your Reference Number: {submission.id}",
        "",
        "Summary of your inquiry:",
    ]
    lines.extend(f"{label}: {text}" for label, text, _ in fields)
    lines.extend(
        [
            "",
            "Your Message:",
            submission.message or NO_MESSAGE,
            "",
            "A member of our travel team will review your inquiry and get back to you within 24 hours.",
            "",
            "Best regards,",
            f"The {brand_name} Team",
            "",
            "---",
            "This is an automated message. Please do not reply to this email.",
            f"(c) {year} {brand_name}. All rights reserved.",
        ]
    )

    return EmailContent(
        subject=f"Thank You for Your Travel Inquiry - {brand_name}",
        html=html_body,
        text="\n".join(lines) + "\n",
    )


def render_business_notification(submission: Submission) -> EmailContent:
    """Render the notification sent to the business inbox.

    Args:
        submission: Stored submission

    Returns:
        EmailContent with subject, HTML and text bodies
    """
    submitted = format_display_time(submission.submitted_at)
    email = escape_html(submission.email)

    rows = [
        ("Reference ID", escape_html(submission.id)),
        ("Name", escape_html(submission.name)),
        ("Email", f'<a href="mailto:{email}">{email}</a>'),
    ]
    if submission.phone:
        phone = escape_html(submission.phone)
        rows.append(("Phone", f'<a href="tel:{phone}">{phone}</a>'))
    if submission.destination:
        rows.append(("Destination", escape_html(submission.destination)))
    if submission.travel_date_start:
        rows.append(("Travel Dates", _travel_dates(submission, True)))
    if submission.travelers:
        rows.append(("Travelers", escape_html(submission.travelers)))
    rows.append(("Message", html_message(submission.message or "No message provided")))
    rows.append(("Submitted At", escape_html(submitted)))

    table = "\n".join(
        f"          <tr><th>{label}</th><td>{value}</td></tr>" for label, value in rows
    )
    html_body = f"""<html>
  <head>
    <style>{NOTIFICATION_STYLE}    </style>
  </head>
  <body>
    <div class="container">
      <div class="header">
        <h1>New Travel Inquiry</h1>
      </div>
      <div style="padding: 20px; border: 1px solid #ddd; border-top: none;">
        <div class="priority">
          <strong>Action Required:</strong> New customer inquiry received. Please respond within 24 hours.
        </div>
        <table>
{table}
        </table>
      </div>
    </div>
  </body>
</html>
"""

    lines = [
        "NEW TRAVEL INQUIRY",
        "",
        "Action Required: New customer inquiry received. Please respond within 24 hours.",
        "",
        f"Reference ID: {submission.id}",
        f"Name: {submission.name}",
        f"Email: {submission.email}",
    ]
    if submission.phone:
        lines.append(f"Phone: {submission.phone}")
    if submission.destination:
        lines.append(f"Destination: {submission.destination}")
    if submission.travel_date_start:
        lines.append(f"Travel Dates: {_travel_dates(submission, False)}")
    if submission.travelers:
        lines.append(f"Travelers: {submission.travelers}")
    lines.extend(
        [
            "",
            "Message:",
            submission.message or "No message provided",
            "",
            f"Submitted At: {submitted}",
        ]
    )

    return EmailContent(
        subject=f"New Travel Inquiry - {submission.id}",
        html=html_body,
        text="\n".join(lines) + "\n",
    )
