"""Credential encoding for HTTP Basic authentication."""

import base64


def encode_basic_auth(identity: str, secret: str) -> str:
    """Build the token for a ``Basic`` authorization header.

    Jira Cloud expects ``email:api_token``, Server/Data Center
    ``username:password``; both are encoded the same way.

    Args:
        identity: Email address or username
        secret: API token or password

    Returns:
        Base64 encoding of ``identity:secret``
    """
    return base64.b64encode(f"{identity}:{secret}".encode()).decode("ascii")


def basic_auth_header(token: str) -> str:
    """Render an encoded token as an ``Authorization`` header value."""
    return f"Basic {token}"
