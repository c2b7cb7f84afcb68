from fastapi import status


class DomainError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_error_code: str = "domain_error"

    def __init__(self, message: str, *, error_code: str | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.field = field


class ValidationError(DomainError):
    status_code = 422
    default_error_code = "validation_error"


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_error_code = "conflict"


class ForbiddenError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    default_error_code = "forbidden"

    # The reason for a denial is never exposed to the caller.
    def __init__(self) -> None:
        super().__init__("Forbidden")


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_error_code = "not_found"


class StoreError(DomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_error_code = "store_error"
