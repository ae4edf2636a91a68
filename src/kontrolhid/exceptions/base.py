"""Root of the kontrolhid exception hierarchy."""


class KontrolError(Exception):
    """
    Error the driver can explain to the person holding the keyboard.

    Every error carries two texts: `user_message` is printed by the CLI,
    `technical_message` goes to the log and may contain hidapi or
    pydantic details. `recovery_hint` tells the user what to try next.

    Attributes:
        user_message: Short description for display
        technical_message: Description for logs (defaults to user_message)
        recoverable: False if retrying cannot help
        recovery_hint: What to do about it, or None
    """

    def __init__(
        self,
        user_message: str,
        technical_message: str | None = None,
        recoverable: bool = False,
        recovery_hint: str | None = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if any."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
