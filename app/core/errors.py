from enum import Enum


class ErrorKind(str, Enum):
    origin_unresolved = "origin_unresolved"
    distance_service_error = "distance_service_error"
    distance_batch_rejected = "distance_batch_rejected"
    unexpected_error = "unexpected_error"


USER_MESSAGES = {
    ErrorKind.origin_unresolved: "Could not determine your location, please make sure the postal code is correct or full",
    ErrorKind.distance_service_error: "Something went wrong, please give it a try in a minute",
    ErrorKind.distance_batch_rejected: "There was a problem determining distance from you to closest clubs",
    ErrorKind.unexpected_error: "Something went terribly wrong. Apologies",
}


class ProximityError(Exception):
    """Base class for failures surfaced by the proximity pipeline."""
    kind: ErrorKind = ErrorKind.unexpected_error

    def __init__(self, detail: str = None):
        super().__init__(detail or self.message)
        self.detail = detail

    @property
    def message(self) -> str:
        return USER_MESSAGES[self.kind]


class OriginUnresolved(ProximityError):
    kind = ErrorKind.origin_unresolved


class DistanceServiceError(ProximityError):
    kind = ErrorKind.distance_service_error


class DistanceBatchRejected(ProximityError):
    kind = ErrorKind.distance_batch_rejected


class UnexpectedError(ProximityError):
    kind = ErrorKind.unexpected_error
