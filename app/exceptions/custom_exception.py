class IngestionError(Exception):
    """Base exception for document ingestion errors."""


class UnknownPlanError(IngestionError, LookupError):
    """Raised when a plan value is outside the known plan set."""

    def __init__(self, plan):
        self.plan = plan
        super().__init__(f"Unknown subscription plan: {plan!r}")


class ContentProbeError(IngestionError):
    """Raised when a remote URL cannot be probed (network error, timeout, non-2xx)."""


class SinkError(IngestionError):
    """Base exception for failures reported by an external ingestion sink."""


class UploadSinkError(SinkError):
    """Raised when the binary upload sink rejects or fails to store a file."""


class RegistrationSinkError(SinkError):
    """Raised when the link registration sink fails to record a document."""
