class ConstructionStagesError(Exception):
    """Base exception for the construction stages service.

    status_code is what the HTTP boundary responds with; the core never
    chooses a response itself.
    """

    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_payload(self) -> dict:
        return {"error": self.message}


class ValidationError(ConstructionStagesError):
    """Raised when one or more stage fields fail a format, range or enum rule.

    Carries every violated field at once, keyed by API field name.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {message}" for field, message in self.errors.items()))

    def to_payload(self) -> dict:
        return dict(self.errors)


class InvalidDateFormat(ConstructionStagesError):
    """Raised when a date string fails the strict ISO-8601 pattern during duration calculation."""

    pass


class NoDurationDerivable(ConstructionStagesError):
    """Raised when dates are well-formed but admit no positive duration."""

    pass


class InvalidStatusTransition(ConstructionStagesError):
    """Raised on update when the supplied status is not allowed."""

    pass


class StageNotFoundError(ConstructionStagesError):
    """Raised when no stage exists with the requested id."""

    status_code = 404

    def __init__(self, stage_id: int):
        self.stage_id = stage_id
        super().__init__(f"Construction stage {stage_id} not found.")
