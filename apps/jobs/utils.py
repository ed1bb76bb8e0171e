import logging
from django.conf import settings
from django.core.mail import send_mail
from twilio.rest import Client as TwilioClient

logger = logging.getLogger(__name__)


def send_notification(user, subject, email_message, sms_message):
    """
    Send notifications to users via email and SMS.

    SMS goes out only when Twilio credentials are configured and the user has
    a phone number. Failures are logged and never raised to the caller.

    Args:
        user: User object to send notification to
        subject: Email subject
        email_message: Email message content
        sms_message: SMS message content
    """
    if user.email:
        try:
            send_mail(
                subject=subject,
                message=email_message,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[user.email],
                fail_silently=False,
            )
            logger.info(f"Email notification sent to {user.email}")
        except Exception as e:
            logger.error(f"Failed to send email to {user.email}: {str(e)}")

    if user.phone and settings.TWILIO_ACCOUNT_SID:
        try:
            client = TwilioClient(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
            client.messages.create(
                body=sms_message,
                from_=settings.TWILIO_PHONE_NUMBER,
                to=user.phone
            )
            logger.info(f"SMS notification sent to {user.phone}")
        except Exception as e:
            logger.error(f"Failed to send SMS to {user.phone}: {str(e)}")
