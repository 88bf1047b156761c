"""Failure kinds of the trends pipeline.

Each error carries the HTTP status it maps to and a short message that is
safe to show to callers. Upstream details go to the log, never into
``message``.
"""


class TrendsError(Exception):
    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingInput(TrendsError):
    status_code = 400
    default_message = "Missing 'keyword' parameter"


class UpstreamUnavailable(TrendsError):
    status_code = 500
    default_message = "Error fetching data from Google Trends API"


class UpstreamMalformed(TrendsError):
    status_code = 500
    default_message = "Invalid/malformed response from Google Trends API"


class InsufficientData(TrendsError):
    status_code = 400
    default_message = "Insufficient trend data available for this keyword."


class Internal(TrendsError):
    status_code = 500
    default_message = "An unknown error occurred"
