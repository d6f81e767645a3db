"""Errors raised while generating a plan, each tied to the HTTP status it is reported with."""


class PlanServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ModelTimeoutError(PlanServiceError):
    """The model runtime did not answer within the configured bound."""
    status_code = 504


class ModelRuntimeError(PlanServiceError):
    """Transport failure or non-2xx answer from the model runtime."""
    status_code = 500


class MalformedOutputError(PlanServiceError):
    """The model answered but no JSON object could be recovered from it."""
    status_code = 500


class UnknownExerciseError(PlanServiceError):
    status_code = 502

    def __init__(self, names):
        self.names = list(names)
        super().__init__(f"Model used exercises outside the catalog: {', '.join(self.names)}")
