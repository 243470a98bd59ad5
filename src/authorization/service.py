"""AWS Config service calls for aggregation authorizations.

Thin wrapper over the boto3 ``config`` client. Errors from botocore are
left to propagate; callers decide how to report them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging


logger = logging.getLogger(__name__)


@dataclass
class AggregationAuthorization:
    """Authorization record as returned by AWS Config."""

    account_id: str
    region: str
    arn: str
    creation_time: Optional[datetime] = None

    @classmethod
    def from_response(cls, item: Dict[str, Any]) -> "AggregationAuthorization":
        return cls(
            account_id=item["AuthorizedAccountId"],
            region=item["AuthorizedAwsRegion"],
            arn=item.get("AggregationAuthorizationArn", ""),
            creation_time=item.get("CreationTime"),
        )

    def matches(self, account_id: str, region: str) -> bool:
        return self.account_id == account_id and self.region == region


class ConfigServiceAuthorizations:
    """Put, list and delete aggregation authorizations."""

    def __init__(self, config_client) -> None:
        """Initialize with a boto3 Config service client.

        Args:
            config_client: boto3 client for the 'config' service
        """
        self.client = config_client

    def put_authorization(self, account_id: str, region: str) -> Dict[str, Any]:
        response = self.client.put_aggregation_authorization(
            AuthorizedAccountId=account_id,
            AuthorizedAwsRegion=region,
        )
        logger.info(f"Aggregation authorization put for {account_id} in {region}")
        return response.get("AggregationAuthorization", {})

    def list_authorizations(self) -> List[AggregationAuthorization]:
        """List every authorization in the client's region.

        Follows NextToken until the service stops returning one.
        """
        authorizations = []
        kwargs: Dict[str, Any] = {}
        while True:
            response = self.client.describe_aggregation_authorizations(**kwargs)
            authorizations.extend(
                AggregationAuthorization.from_response(item)
                for item in response.get("AggregationAuthorizations", [])
            )
            next_token = response.get("NextToken")
            if not next_token:
                break
            kwargs["NextToken"] = next_token
        return authorizations

    def delete_authorization(self, account_id: str, region: str) -> None:
        self.client.delete_aggregation_authorization(
            AuthorizedAccountId=account_id,
            AuthorizedAwsRegion=region,
        )
        logger.info(f"Aggregation authorization deleted for {account_id} in {region}")
