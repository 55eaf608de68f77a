class JobFinderError(Exception):
    """Base class for errors raised by the aggregation service."""


class SearchValidationError(JobFinderError):
    """Search request is missing keywords or platforms."""


class QueryValidationError(JobFinderError):
    """Listing query has unusable paging parameters."""


class UnknownPlatformError(JobFinderError):
    def __init__(self, platform: str):
        super().__init__(f"Unknown platform: {platform}")
        self.platform = platform
