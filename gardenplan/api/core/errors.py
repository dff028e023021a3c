"""
Error taxonomy for the Garden Plan API

Every business-rule failure is raised as a subclass of GardenPlanError.
The application installs a handler that renders them as
{"error": <kind>, "detail": <message>} with the matching status code.
"""

from typing import Optional

from fastapi import status


class GardenPlanError(Exception):
    """Base class for errors surfaced to API callers"""

    kind: str = "Unexpected"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class UnauthorizedError(GardenPlanError):
    kind = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class InvalidInputError(GardenPlanError):
    kind = "ValidationError"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(GardenPlanError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class SuccessionNotEnabledError(GardenPlanError):
    kind = "SuccessionNotEnabled"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Succession planting is not enabled for this plant"


class MaxSuccessionsReachedError(GardenPlanError):
    kind = "MaxSuccessionsReached"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Maximum successions ({limit}) reached for this plant")


class NoSpaceAvailableError(GardenPlanError):
    kind = "NoSpaceAvailable"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No available space in bed for succession planting."


class ConstraintViolationError(GardenPlanError):
    kind = "ConstraintViolation"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Position is already occupied in that bed"
