"""
SMS backends, selected by settings.SMS_BACKEND (dotted path).
Mirrors Django's mail backends: a console backend for development and a
locmem backend that collects messages in `outbox` for tests.
"""
import logging
import uuid

logger = logging.getLogger(__name__)

outbox = []


class BaseSMSBackend:

    def send(self, recipient, body):
        """Deliver one message; return a provider message id. Raise on failure."""
        raise NotImplementedError


class ConsoleSMSBackend(BaseSMSBackend):

    def send(self, recipient, body):
        message_id = f"console-{uuid.uuid4().hex[:12]}"
        logger.info(f"SMS to {recipient} [{message_id}]: {body}")
        return message_id


class LocmemSMSBackend(BaseSMSBackend):

    def send(self, recipient, body):
        message_id = f"locmem-{len(outbox) + 1}"
        outbox.append({"to": recipient, "body": body, "message_id": message_id})
        return message_id
