import string
import secrets
import resend
import logging
from datetime import datetime

from django.conf import settings
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


def generate_reference():
    characters = string.ascii_letters + string.digits
    random_string = "".join(secrets.choice(characters) for _ in range(12))
    return random_string.upper()


def generate_member_number():
    year = datetime.now().year % 100  # Last two digits of year
    random_number = "".join(secrets.choice(string.digits) for _ in range(6))
    return f"MBR{year}{random_number}"


def send_member_email(member, subject, template_name, context=None):
    """
    Resend email integration.

    Returns the Resend response, or None when the member has no email, no API
    key is configured or sending failed.
    """
    if not member.email:
        return None

    if not resend.api_key:
        logger.info(f"Email '{subject}' to {member.email} skipped: no API key set")
        return None

    try:
        email_body = render_to_string(
            template_name,
            {
                "member": member,
                "sacco_name": settings.SACCO_NAME,
                "site_url": settings.DOMAIN,
                "current_year": datetime.now().year,
                **(context or {}),
            },
        )
        params = {
            "from": settings.DEFAULT_FROM_EMAIL,
            "to": [member.email],
            "subject": subject,
            "html": email_body,
        }
        response = resend.Emails.send(params)
        logger.info(f"Email sent to {member.email} with response: {response}")
        return response

    except Exception as e:
        logger.error(f"Error sending email to {member.email}: {str(e)}")
        return None
