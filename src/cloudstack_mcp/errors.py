"""Error types raised by the CloudStack MCP server.

Two families live here:

- ``CloudStackError`` and its subclasses describe a failed call to the
  CloudStack API (the remote system said no, or the HTTP call never completed).
- ``McpError`` instances built by the helpers below are the typed errors
  returned to the MCP caller (invalid request, unknown tool, internal error).
"""

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND, ErrorData


class ConfigurationError(Exception):
    """Required settings are missing; the server cannot start."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Missing required CloudStack configuration. Please set "
            + ", ".join(missing)
            + " environment variables."
        )


class CloudStackError(Exception):
    """A CloudStack API call failed.

    Attributes:
        errortext: The remote ``errortext`` field, when the API returned one
        errorcode: The remote ``errorcode`` field, when the API returned one
        status_code: HTTP status of the response, when one was received
    """

    def __init__(
        self,
        message: str,
        *,
        errortext: str | None = None,
        errorcode: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.errortext = errortext
        self.errorcode = errorcode
        self.status_code = status_code

    def has_code(self, code: int) -> bool:
        """True when ``code`` is the errorcode or HTTP status of this failure.

        Without a remote errorcode the message is searched as well, since
        CloudStack sometimes reports the code only in ``errortext``.
        """
        if code in (self.errorcode, self.status_code):
            return True
        return self.errorcode is None and str(code) in str(self)


class RemoteApiError(CloudStackError):
    """The API answered with an ``errortext`` in an otherwise successful response."""


class TransportError(CloudStackError):
    """The HTTP request failed (connection, timeout, non-2xx status, bad body)."""


def invalid_request(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_REQUEST, message=message))


def method_not_found(message: str) -> McpError:
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=message))


def internal_error(message: str) -> McpError:
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))
