"""Aggregation authorization resource lifecycle.

Create, read, delete and import for a single AWS Config aggregation
authorization. The remote service is the source of truth; ResourceData
is the local copy refreshed on every read.
"""

from typing import Any, Dict, Optional
import logging
from botocore.exceptions import BotoCoreError, ClientError

from src.authorization.identifier import (
    format_authorization_id,
    parse_authorization_id,
)
from src.authorization.schema import AUTHORIZATION_SCHEMA, ResourceSchema
from src.authorization.service import ConfigServiceAuthorizations


logger = logging.getLogger(__name__)


class RemoteCallError(Exception):
    """Raised when a Config service call fails."""
    pass


class ResourceData:
    """Identifier plus attributes for one authorization.

    An empty identifier means the authorization is absent.
    """

    def __init__(
        self, resource_id: str = "", attributes: Optional[Dict[str, Any]] = None
    ) -> None:
        self._id = resource_id
        self._attributes: Dict[str, Any] = dict(attributes or {})

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, resource_id: str) -> None:
        self._id = resource_id

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def is_present(self) -> bool:
        return bool(self._id)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self._id, **self._attributes}

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, attributes={self._attributes!r})"


class AggregationAuthorizationResource:
    """Lifecycle operations for aws_config_aggregate_authorization."""

    schema: ResourceSchema = AUTHORIZATION_SCHEMA

    def __init__(self, service: ConfigServiceAuthorizations) -> None:
        """Initialize resource with its remote client.

        Args:
            service: Object exposing put_authorization, list_authorizations
                and delete_authorization
        """
        self.service = service

    def create(self, data: ResourceData) -> None:
        """Put the authorization, then refresh it from AWS.

        Raises:
            RemoteCallError: When the put or the follow-up list fails
        """
        account_id = data.get("account_id")
        region = data.get("region")

        try:
            self.service.put_authorization(account_id, region)
        except (ClientError, BotoCoreError) as e:
            raise RemoteCallError(f"Error creating authorization: {e}") from e

        data.set_id(format_authorization_id(account_id, region))
        self.read(data)

    def read(self, data: ResourceData) -> None:
        """Refresh attributes from AWS, clearing the id on drift.

        Raises:
            MalformedIdentifierError: When the id cannot be parsed
            RemoteCallError: When listing authorizations fails
        """
        account_id, region = parse_authorization_id(data.id)
        data.set("account_id", account_id)
        data.set("region", region)

        try:
            authorizations = self.service.list_authorizations()
        except (ClientError, BotoCoreError) as e:
            raise RemoteCallError(
                f"Error retrieving list of authorizations: {e}"
            ) from e

        for authorization in authorizations:
            if authorization.matches(account_id, region):
                data.set("arn", authorization.arn)
                return

        logger.warning(f"Authorization not found, removing from state: {data.id}")
        data.set_id("")

    def delete(self, data: ResourceData) -> None:
        """Delete the authorization and clear the id.

        Raises:
            MalformedIdentifierError: When the id cannot be parsed
            RemoteCallError: When the delete call fails
        """
        account_id, region = parse_authorization_id(data.id)

        try:
            self.service.delete_authorization(account_id, region)
        except (ClientError, BotoCoreError) as e:
            raise RemoteCallError(f"Error deleting authorization: {e}") from e

        data.set_id("")

    def import_state(self, resource_id: str) -> ResourceData:
        """Adopt an existing authorization by its account_id:region id."""
        data = ResourceData(resource_id)
        self.read(data)
        return data
