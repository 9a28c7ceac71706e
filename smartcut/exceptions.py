"""Domain errors raised by the store and the domain services.

The HTTP layer maps each of these onto a status code in ``smartcut.main``.
"""


class SmartCutError(Exception):
    """Base class for all booking domain errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SmartCutError):
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(SmartCutError):
    status_code = 400


class PermissionDeniedError(SmartCutError):
    status_code = 403


class InconsistentDataError(SmartCutError):
    """A record references another record that is missing from the store"""

    status_code = 500

    def __init__(self, entity: str, entity_id: str, referenced_by: str):
        super().__init__(f"{entity} {entity_id} referenced by {referenced_by} is missing")
        self.entity = entity
        self.entity_id = entity_id
        self.referenced_by = referenced_by


class InvalidStatusTransitionError(SmartCutError):
    status_code = 409

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change appointment status from {current} to {requested}")
        self.current = current
        self.requested = requested


class BookingConflictError(SmartCutError):
    status_code = 409
