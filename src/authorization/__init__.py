"""AWS Config aggregation authorization resource.

Exports the lifecycle adapter, its remote client and the identifier
helpers.
"""

from src.authorization.identifier import (
    MalformedIdentifierError,
    format_authorization_id,
    parse_authorization_id,
)
from src.authorization.resource import (
    AggregationAuthorizationResource,
    RemoteCallError,
    ResourceData,
)
from src.authorization.schema import SchemaValidationError
from src.authorization.service import (
    AggregationAuthorization,
    ConfigServiceAuthorizations,
)

__all__ = [
    "AggregationAuthorization",
    "AggregationAuthorizationResource",
    "ConfigServiceAuthorizations",
    "MalformedIdentifierError",
    "RemoteCallError",
    "ResourceData",
    "SchemaValidationError",
    "format_authorization_id",
    "parse_authorization_id",
]
