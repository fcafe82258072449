import logging

from ...application.ports.code_sender import CodeSender

logger = logging.getLogger(__name__)


class ChannelCodeSender(CodeSender):
    """Routes a code to the email or SMS variant based on the contact method."""

    def __init__(self, email: CodeSender, sms: CodeSender) -> None:
        self.email = email
        self.sms = sms

    def send_code(self, contact: str, code: str, method: str) -> bool:
        if method == "email":
            return self.email.send_code(contact, code, method)
        if method == "phone":
            return self.sms.send_code(contact, code, method)
        logger.error(f"Unsupported contact method: {method}")
        return False
