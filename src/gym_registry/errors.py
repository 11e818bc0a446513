"""Domain errors.

Services raise these; the entry points (FastAPI handlers and CLI
commands) turn them into explicit result values keyed by ``kind``.
"""


class RegistryError(Exception):
    """Base class for errors surfaced to the caller."""

    kind = "Error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {self.kind: self.message}


class NotFoundError(RegistryError):
    kind = "NotFound"
    status_code = 404


class InvalidPayloadError(RegistryError):
    kind = "InvalidPayload"
    status_code = 422


class AlreadyExistError(RegistryError):
    kind = "AlreadyExist"
    status_code = 409


class NotAuthorizedError(RegistryError):
    kind = "NotAuthorized"
    status_code = 403


class PaymentFailedError(RegistryError):
    kind = "PaymentFailed"
    status_code = 402
