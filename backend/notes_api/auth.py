"""
Notes Functions Backend - Bearer Credential Handling
======================================================

What:  Pulls the bearer token out of a request and resolves it to a uid.
How:   `extract_bearer_token` is a pure header parser; `authenticate` forwards
       the token to an `IdentityVerifier` and normalizes every failure into
       `AuthenticationError`.
Who:   Called at the start of /getUserNotes and /summarizeNote.
"""

import logging
import re
from typing import Mapping

from notes_api.exceptions import AuthenticationError, MissingCredentialError
from notes_api.services.base import IdentityVerifier

logger = logging.getLogger(__name__)

# "Bearer" in any case, one space, then the rest of the (single-line) value
_BEARER_PATTERN = re.compile(r"Bearer (.+)", re.IGNORECASE)


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """
    Return the token from an `Authorization: Bearer <token>` header.

    The header name is matched case-insensitively, so both Starlette's
    `Headers` and a plain dict work. Everything after "Bearer " is returned
    as-is, internal whitespace included.

    Raises:
        MissingCredentialError: header absent or not of the Bearer form.
    """
    value = ""
    for name, header_value in headers.items():
        if name.lower() == "authorization":
            value = header_value or ""
            break

    match = _BEARER_PATTERN.fullmatch(value)
    if match is None:
        raise MissingCredentialError()
    return match.group(1)


async def authenticate(
    headers: Mapping[str, str],
    verifier: IdentityVerifier,
    operation: str = "request",
) -> str:
    """
    Resolve the caller's uid from the request headers.

    Any failure (missing header, rejected token, verifier outage, empty uid)
    is logged with its detail and re-raised as a bare AuthenticationError.
    """
    try:
        token = extract_bearer_token(headers)
        uid = await verifier.verify_token(token)
        if not uid:
            raise ValueError("Verified token carries no uid")
        return uid
    except Exception as e:
        logger.error("Auth failure %s: %s", operation, str(e))
        raise AuthenticationError(context={"error_type": type(e).__name__}) from e
