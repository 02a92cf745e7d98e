"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class FeedError(ServiceError):
    """Base class for failures while resolving a query against the feed."""


class InvalidQueryError(FeedError):
    pass


class FeedTransportError(FeedError):
    """Network failure, timeout or an unsuccessful HTTP status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FeedDecodeError(FeedError):
    pass


class OrchestratorClosedError(ServiceError):
    pass
