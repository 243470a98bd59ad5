"""Composite identifier helpers for aggregation authorizations.

An authorization has no identifier of its own on the AWS side; it is
addressed by the authorized account and region, stored as
``account_id:region``.
"""

from typing import Tuple


ID_SEPARATOR = ":"


class MalformedIdentifierError(ValueError):
    """Raised when an identifier is not of the form account_id:region."""
    pass


def format_authorization_id(account_id: str, region: str) -> str:
    """Build the composite identifier for an authorization."""
    return f"{account_id}{ID_SEPARATOR}{region}"


def parse_authorization_id(authorization_id: str) -> Tuple[str, str]:
    """Split a composite identifier into account id and region.

    Args:
        authorization_id: Identifier such as '123456789012:us-east-1'

    Returns:
        Tuple of (account_id, region)

    Raises:
        MalformedIdentifierError: When the identifier does not have exactly
            two colon-separated parts
    """
    parts = authorization_id.split(ID_SEPARATOR)
    if len(parts) != 2:
        raise MalformedIdentifierError(
            "Please make sure the ID is in the form account_id:region "
            f"(i.e. 123456789012:us-east-1), got {authorization_id!r}"
        )
    return parts[0], parts[1]
