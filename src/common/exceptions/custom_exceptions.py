"""Custom application-wide exceptions."""


class ApplicationError(Exception):
    """Base class for application-specific errors."""

    def __init__(
        self, message: str = "An application error occurred", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original error: {self.original_exception})"
        return self.message


class APIError(ApplicationError):
    """Exception raised for errors during remote document store calls."""

    def __init__(
        self,
        message: str = "API call failed",
        original_exception: Exception | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, original_exception)
        self.status_code = status_code
        self.message = f"API Error: {message}"
        if status_code:
            self.message += f" (Status Code: {status_code})"


class StorageError(ApplicationError):
    """Exception raised for errors while reading or writing local storage."""

    def __init__(self, message: str = "Storage operation failed", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Storage Error: {message}"


class InsufficientStockError(ApplicationError):
    """Raised when a stock reduction would take a product below zero."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(f"Insufficient stock. Only {available} units available")
        self.requested = requested
        self.available = available
