"""Generation domain errors, each carrying a stable client-facing code."""


class GenerationError(Exception):
    """Base class for errors reported back to the generate caller."""

    code = "GenerationError"
    status_code = 500
    default_message = "Generation error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(GenerationError):
    """A required field is missing; raised before any side effect."""

    code = "InvalidRequest"
    status_code = 400
    default_message = "Missing required fields"


class UnknownUserError(GenerationError):
    """No profile exists for the requesting user."""

    code = "UnknownUser"
    status_code = 404
    default_message = "User not found"


class OutOfCreditsError(GenerationError):
    """The user has no credit left to spend."""

    code = "InsufficientCredit"
    status_code = 403
    default_message = "Insufficient credits"


class GenerationFailedError(GenerationError):
    """The provider rejected the request or the prediction failed."""

    code = "GenerationFailed"
    status_code = 500
    default_message = "AI generation failed. Please try again."


class JobNotFoundError(GenerationError):
    """Raised when the requested generation job does not exist."""

    code = "NotFound"
    status_code = 404
    default_message = "Generation not found"
