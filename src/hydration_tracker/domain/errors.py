"""Domain errors for water intake tracking."""


class HydrationError(Exception):
    """Base error for hydration tracker failures."""

    code = "hydration_error"


class InvalidAmountError(HydrationError, ValueError):
    """Raised when an intake amount is not a positive integer."""

    code = "invalid_amount"

    def __init__(self, amount: object) -> None:
        super().__init__(f"Intake amount must be a positive integer, got {amount!r}")
        self.amount = amount


class InvalidGoalError(HydrationError, ValueError):
    """Raised when a daily goal is not a positive integer."""

    code = "invalid_goal"

    def __init__(self, goal: object) -> None:
        super().__init__(f"Daily goal must be a positive integer, got {goal!r}")
        self.goal = goal


class ClockUnavailableError(HydrationError):
    """Raised when the current time cannot be read."""

    code = "clock_unavailable"


class StorageError(HydrationError):
    """Raised when the intake log cannot be loaded or saved."""

    code = "storage_error"
