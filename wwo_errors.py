"""Exception hierarchy for the WorldWeatherOnline client.

Every failure raised by the client derives from WWOError, so callers can
intercept any library error with a single except clause while still being
able to tell the three failure modes apart:

    - WWOTransportError: the provider could not be reached.
    - WWODecodeError: the payload did not match the report schema.
    - WWORemoteError: the provider answered with an error node.

The decode and remote kinds carry the (partially filled) report they were
decoding, so the caller receives both the error and whatever data arrived.

Example:
    try:
        forecast = weather.get_local("London")
    except WWORemoteError as e:
        logger.warning("Query %r rejected: %s", e.report.request.query, e)
"""

from typing import Any

import requests


class WWOError(Exception):
    """Base class for any exception raised by the WorldWeatherOnline client."""
    pass


class WWOTransportError(WWOError):
    """Raised when a network or protocol-level error occurs during a request.

        No report is available when this is raised.

        Attributes:
            error: The underlying requests exception that triggered this error.
    """
    def __init__(self, error: requests.exceptions.RequestException):
        """Initializes the error with the original requests exception.

                Args:
                    error: The source HTTPError or RequestException.
        """
        super().__init__(str(error))
        self.error = error

    def __repr__(self):
        """Returns a string representation of the WWOTransportError instance, including the wrapped error."""
        return f"{self.__class__.__name__}({repr(self.error)})"


class WWODecodeError(WWOError):
    """Raised when a payload cannot be decoded into the requested report type.

        Attributes:
            error: The underlying parse or value error.
            report: The report as far as it was filled in before the failure.
    """
    def __init__(self, error: Exception, report: Any):
        super().__init__(str(error))
        self.error = error
        self.report = report

    def __repr__(self):
        return f"{self.__class__.__name__}({repr(self.error)})"


class WWORemoteError(WWOError):
    """Raised when the provider reports an error inside an otherwise valid payload.

        str() of the exception is exactly the provider's message text.

        Attributes:
            message: The provider's error message.
            report: The decoded report, usually empty apart from the echoed request.
    """
    def __init__(self, message: str, report: Any):
        super().__init__(message)
        self.message = message
        self.report = report

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r})"
