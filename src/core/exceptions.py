"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Ownership errors (401, kept distinct from authentication)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Conflict errors
    ALREADY_LIKED = "ALREADY_LIKED"
    NOT_LIKED = "NOT_LIKED"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "No token, authorization denied",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ForbiddenError(AppException):
    """The caller does not own the resource it tries to change.

    Reported with status 401, the same code the clients already expect.
    """

    def __init__(self, message: str = "User not authorized") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=401,
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
            status_code=404,
            details={"user_id": user_id},
        )


class UserAlreadyExistsError(AppException):
    """A user with this email is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_ALREADY_EXISTS,
            message="User already exists",
            status_code=400,
            details={"email": email},
        )


class InvalidCredentialsError(AppException):
    """Email/password pair did not match."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid Credentials",
            status_code=400,
        )


class PostNotFoundError(AppException):
    """Post not found (also raised for malformed post ids)."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message="Post not found",
            status_code=404,
            details={"post_id": post_id},
        )


class CommentNotFoundError(AppException):
    """Comment not found on a post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message="Comment does not exist",
            status_code=404,
            details={"comment_id": comment_id},
        )


class ProfileNotFoundError(AppException):
    """No profile exists for the requested user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="There is no profile for this user",
            status_code=400,
            details={"user_id": user_id},
        )


class ExperienceNotFoundError(AppException):
    """Experience entry not found on the profile."""

    def __init__(self, experience_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EXPERIENCE_NOT_FOUND,
            message="Experience does not exist",
            status_code=404,
            details={"experience_id": experience_id},
        )


class EducationNotFoundError(AppException):
    """Education entry not found on the profile."""

    def __init__(self, education_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EDUCATION_NOT_FOUND,
            message="Education does not exist",
            status_code=404,
            details={"education_id": education_id},
        )


class AlreadyLikedError(AppException):
    """The user already liked this post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_LIKED,
            message="Post already liked",
            status_code=400,
            details={"post_id": post_id},
        )


class NotLikedError(AppException):
    """The user has no like on this post to remove."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_LIKED,
            message="Post has not yet been liked",
            status_code=400,
            details={"post_id": post_id},
        )


class ConcurrentModificationError(AppException):
    """Another request saved the same document first."""

    def __init__(self, document_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CONCURRENT_MODIFICATION,
            message="The document was modified by another request, try again",
            status_code=409,
            details={"document_id": document_id},
        )
