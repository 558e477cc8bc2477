import string
import secrets
import resend
import logging
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime

from django.conf import settings
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def generate_reference():
    characters = string.ascii_letters + string.digits
    random_string = "".join(secrets.choice(characters) for _ in range(12))
    return random_string.upper()


def generate_member_number():
    year = datetime.now().year % 100  # Last two digits of year
    random_number = "".join(secrets.choice(string.digits) for _ in range(6))
    return f"MBR{year}{random_number}"


def to_decimal(value):
    """Parse an amount (string, int or Decimal) without going through float."""
    if isinstance(value, Decimal):
        amount = value
    else:
        amount = Decimal(str(value))
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format_amount(value):
    """Fixed 2-decimal string, the wire format for every amount."""
    return f"{to_decimal(value or 0):.2f}"


def send_notification_email(recipient, subject, template, context):
    """
    Resend email integration.
    Returns the Resend response, or None when skipped or failed.
    """
    if not recipient:
        return None
    if not settings.RESEND_API_KEY:
        logger.info(f"Email '{subject}' to {recipient} skipped: RESEND_API_KEY not set")
        return None

    resend.api_key = settings.RESEND_API_KEY
    context = {
        "current_year": datetime.now().year,
        "sacco_name": settings.SACCO_NAME,
        "currency": settings.SACCO_CURRENCY,
        "site_url": settings.DOMAIN,
        **context,
    }

    try:
        email_body = render_to_string(template, context)
        params = {
            "from": settings.DEFAULT_FROM_EMAIL,
            "to": [recipient],
            "subject": subject,
            "html": email_body,
        }
        response = resend.Emails.send(params)
        logger.info(f"Email sent to {recipient} with response: {response}")
        return response

    except Exception as e:
        logger.error(f"Error sending email to {recipient}: {str(e)}")
        return None


def send_registration_confirmation_email(user):
    return send_notification_email(
        user.email,
        "Registration Confirmation",
        "registration_confirmation.html",
        {"user": user},
    )
