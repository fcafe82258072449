from typing import Protocol


class CodeSender(Protocol):
    def send_code(self, contact: str, code: str, method: str) -> bool:
        ...
