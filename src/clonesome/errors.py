class CloneSomeError(Exception):
    """Base class for every classified generation failure.

    ``status_code`` is the HTTP-equivalent code the outer boundary reports.
    """

    status_code = 500


class ValidationError(CloneSomeError):
    status_code = 400


class SubmissionError(CloneSomeError):
    def __init__(self, message: str, http_status=None, body: str = ""):
        super().__init__(message)
        self.http_status = http_status
        self.body = body


class TransportError(CloneSomeError):
    pass


class GenerationError(CloneSomeError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class EmptyArtifactError(CloneSomeError):
    pass


class PollTimeoutError(CloneSomeError, TimeoutError):
    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class GenerationCancelledError(CloneSomeError):
    pass
