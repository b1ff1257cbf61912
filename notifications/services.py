"""
Notification dispatch to guardians over EMAIL and SMS.

Dispatch is best-effort: delivery errors are logged and returned as a failed
DispatchResult, never raised. Every attempt is recorded in NotificationLog.
"""
import logging
from dataclasses import dataclass

from django.conf import settings
from django.core.mail import EmailMessage, make_msgid
from django.template.loader import render_to_string
from django.utils.module_loading import import_string

from notifications.models import NotificationLog

logger = logging.getLogger(__name__)

CHANNEL_EMAIL = NotificationLog.CHANNEL_EMAIL
CHANNEL_SMS = NotificationLog.CHANNEL_SMS
CHANNELS = (CHANNEL_EMAIL, CHANNEL_SMS)

TEMPLATED_STATUSES = ('ABSENT', 'LATE')


@dataclass
class DispatchResult:
    success: bool
    message_id: str = None
    message: str = ''

    def as_dict(self):
        return {'success': self.success, 'messageId': self.message_id, 'message': self.message}


def get_sms_backend(path=None):
    return import_string(path or settings.SMS_BACKEND)()


def render_notification(channel, template_data):
    """(subject, body) for the record's status; subject is empty for SMS."""
    status = str(template_data.get('status', '')).upper()
    if status not in TEMPLATED_STATUSES:
        raise ValueError(f'No notification template for status {status!r}')
    context = dict(template_data)
    context.setdefault('academy_name', settings.ACADEMY_DISPLAY_NAME)
    prefix = f'notifications/{status.lower()}'
    if channel == CHANNEL_EMAIL:
        subject = render_to_string(f'{prefix}_email_subject.txt', context).strip()
        return subject, render_to_string(f'{prefix}_email.txt', context).strip()
    return '', render_to_string(f'{prefix}_sms.txt', context).strip()


def template_data_for_record(record):
    """Context for one attendance record; expects session/class/student to be loadable."""
    session = record.session
    student = record.student
    return {
        'status': record.status,
        'student_name': student.name,
        'guardian_name': student.guardian_name,
        'class_name': session.recurring_class.name,
        'session_date': session.date.strftime('%d %b %Y'),
        'start_time': session.recurring_class.start_time.strftime('%H:%M'),
        'remarks': record.remarks or '',
        'attendance_record': record,
    }


class NotificationDispatcher:

    def __init__(self, sms_backend=None):
        self.sms_backend = sms_backend or get_sms_backend()

    def notify(self, channel, recipient, template_data):
        """Send one message on one channel. Always returns a DispatchResult."""
        if channel not in CHANNELS:
            raise ValueError(f'Unknown notification channel {channel!r}')

        record = template_data.get('attendance_record')
        recipient = (recipient or '').strip()
        subject = body = ''
        if not recipient:
            result = DispatchResult(False, message=f'No {channel.lower()} recipient on file')
        else:
            try:
                subject, body = render_notification(channel, template_data)
                if channel == CHANNEL_EMAIL:
                    message_id = self._send_email(recipient, subject, body)
                else:
                    message_id = self.sms_backend.send(recipient, body)
                result = DispatchResult(True, message_id=message_id, message='sent')
            except Exception as exc:
                logger.error(f'{channel} notification to {recipient} failed: {exc}', exc_info=True)
                result = DispatchResult(False, message=str(exc))

        NotificationLog.objects.create(
            channel=channel,
            recipient=recipient,
            subject=subject[:255],
            content=body,
            sent=result.success,
            error='' if result.success else result.message,
            message_id=result.message_id,
            attendance_record=record,
        )
        return result

    def _send_email(self, recipient, subject, body):
        message_id = make_msgid(domain='academy.local')
        email = EmailMessage(
            subject=subject,
            body=body,
            from_email=settings.NOTIFICATION_FROM_EMAIL,
            to=[recipient],
            headers={'Message-ID': message_id},
        )
        email.send(fail_silently=False)
        return message_id

    def notify_guardian(self, record):
        """Email and SMS the student's guardian about one attendance record."""
        data = template_data_for_record(record)
        student = record.student
        return {
            CHANNEL_EMAIL: self.notify(CHANNEL_EMAIL, student.guardian_email, data),
            CHANNEL_SMS: self.notify(CHANNEL_SMS, student.contact_number, data),
        }
