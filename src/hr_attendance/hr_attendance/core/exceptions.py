class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, request or record does not exist."""


class StateConflictError(DomainError):
    """Raised when an operation violates a lifecycle guard.

    Callers should not retry these blindly: the stored state already
    reflects a previous action.
    """


class PolicyViolationError(DomainError):
    """Raised when a request breaks a leave policy (notice period, balance)."""


class DownstreamError(DomainError):
    """Raised when storage or an outbound collaborator fails."""


class InvalidRange(ValidationError):
    pass


class AlreadyPunchedIn(StateConflictError):
    pass


class NotPunchedIn(StateConflictError):
    pass


class AlreadyPunchedOut(StateConflictError):
    pass


class LunchAlreadyStarted(StateConflictError):
    pass


class LunchNotStarted(StateConflictError):
    pass


class LunchAlreadyEnded(StateConflictError):
    pass


class AlreadyProcessed(StateConflictError):
    pass


class InsufficientNotice(PolicyViolationError):
    def __init__(self, message: str, *, required_days: int, days_until_start: int):
        super().__init__(message)
        self.required_days = required_days
        self.days_until_start = days_until_start


class InsufficientPaidLeave(PolicyViolationError):
    def __init__(self, *, available: int, requested: int):
        super().__init__(
            f"Only {available} paid leave(s) available. Requested days: {requested} "
            f"(short by {requested - available})"
        )
        self.available = available
        self.requested = requested
        self.shortfall = requested - available
