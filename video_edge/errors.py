class UpstreamFailure(Exception):
    """The backend could not be reached or failed before sending a response."""

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"upstream request to {url} failed: {cause}")
        self.url = url
        self.cause = cause
