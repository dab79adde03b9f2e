"""CloudStack request signing.

Every API call is authenticated by an HMAC-SHA1 signature over the sorted,
URL-encoded and lower-cased query string. The API recomputes the signature
server-side, so the parameters signed here must be exactly the parameters sent.
"""

import base64
import hashlib
import hmac
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

# URI-component encoding leaves these unescaped in addition to the
# alphanumerics and "_.-~" that quote() never escapes.
_URI_COMPONENT_SAFE = "!*'()"


def to_wire(value: Any) -> str:
    """Render a parameter value the way it is sent on the query string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_value(value: Any) -> str:
    return quote(to_wire(value), safe=_URI_COMPONENT_SAFE)


def canonical_query(params: Mapping[str, Any]) -> str:
    """Build the lower-cased ``key=value&...`` string that gets signed."""
    query = "&".join(f"{key}={encode_value(params[key])}" for key in sorted(params))
    return query.lower()


def sign(secret: str, params: Mapping[str, Any]) -> str:
    """Compute the base64 HMAC-SHA1 signature for a parameter set.

    Args:
        secret: The account's secret key
        params: Every query parameter except ``signature`` itself

    Returns:
        Base64-encoded signature
    """
    digest = hmac.new(
        secret.encode("utf-8"),
        canonical_query(params).encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")
