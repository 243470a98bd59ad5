"""Apply a declared set of aggregation authorizations.

This module drives the resource lifecycle for every authorization listed
in the configuration: refresh what exists, create what is missing, and
optionally delete authorizations nobody declared.
"""

from typing import Any, Dict, List
import logging
from botocore.exceptions import BotoCoreError, ClientError

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


logger = logging.getLogger(__name__)


class AuthorizationOrchestrationError(Exception):
    """Raised when applying or destroying authorizations fails."""
    pass


class AuthorizationOrchestrator:
    """Reconciles declared authorizations with AWS Config."""

    def __init__(self, resource: AggregationAuthorizationResource):
        """Initialize orchestrator.

        Args:
            resource: Resource adapter bound to a Config service client
        """
        self.resource = resource

    def validate(self, desired: List[Dict[str, Any]]) -> None:
        """Validate every declared authorization before touching AWS.

        Raises:
            AuthorizationOrchestrationError: When any entry is invalid
        """
        errors = []
        for index, attributes in enumerate(desired):
            try:
                self.resource.schema.validate(attributes)
            except SchemaValidationError as e:
                errors.extend(f"authorizations[{index}].{msg}" for msg in e.errors)

        if errors:
            raise AuthorizationOrchestrationError(
                "Invalid authorizations: " + "; ".join(errors)
            )

    def apply(self, desired: List[Dict[str, Any]], prune: bool = False) -> Dict[str, Any]:
        """Create missing authorizations and optionally prune extras.

        Args:
            desired: Declared authorizations (account_id, region)
            prune: Delete remote authorizations that are not declared

        Returns:
            Dict with created, unchanged and deleted ids plus overall status

        Raises:
            AuthorizationOrchestrationError: When validation or a call fails
        """
        self.validate(desired)
        results = {
            'created': [],
            'unchanged': [],
            'deleted': [],
            'overall_status': 'in_progress'
        }

        try:
            logger.info(f"Applying {len(desired)} aggregation authorizations")
            declared_ids = set()
            for attributes in desired:
                resource_id = format_authorization_id(
                    attributes['account_id'], attributes['region']
                )
                declared_ids.add(resource_id)

                data = ResourceData(resource_id)
                self.resource.read(data)
                if data.is_present():
                    results['unchanged'].append(resource_id)
                    continue

                data = ResourceData(attributes=attributes)
                self.resource.create(data)
                results['created'].append(data.id or resource_id)

            if prune:
                results['deleted'] = self._prune(declared_ids)

            results['overall_status'] = 'success'
            logger.info("Aggregation authorizations applied successfully")

        except (RemoteCallError, MalformedIdentifierError) as e:
            results['overall_status'] = 'failed'
            logger.error(f"Applying aggregation authorizations failed: {e}")
            raise AuthorizationOrchestrationError(f"Apply failed: {e}") from e

        return results

    def _prune(self, declared_ids: set) -> List[str]:
        """Delete remote authorizations missing from declared_ids."""
        try:
            remote = self.resource.service.list_authorizations()
        except (ClientError, BotoCoreError) as e:
            raise RemoteCallError(
                f"Error retrieving list of authorizations: {e}"
            ) from e

        deleted = []
        for authorization in remote:
            resource_id = format_authorization_id(
                authorization.account_id, authorization.region
            )
            if resource_id in declared_ids:
                continue
            self.resource.delete(ResourceData(resource_id))
            deleted.append(resource_id)
        return deleted

    def destroy(self, desired: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Delete every declared authorization that still exists.

        Raises:
            AuthorizationOrchestrationError: When a call fails
        """
        self.validate(desired)
        results = {'deleted': [], 'skipped': [], 'overall_status': 'in_progress'}

        try:
            for attributes in desired:
                resource_id = format_authorization_id(
                    attributes['account_id'], attributes['region']
                )
                data = ResourceData(resource_id)
                self.resource.read(data)
                if not data.is_present():
                    results['skipped'].append(resource_id)
                    continue
                self.resource.delete(data)
                results['deleted'].append(resource_id)

            results['overall_status'] = 'success'

        except (RemoteCallError, MalformedIdentifierError) as e:
            results['overall_status'] = 'failed'
            logger.error(f"Destroying aggregation authorizations failed: {e}")
            raise AuthorizationOrchestrationError(f"Destroy failed: {e}") from e

        return results

    def _prior_attributes(self, prior: ResourceData) -> Dict[str, Any]:
        """Force-new attributes of prior, filled from its id when unset."""
        attributes = {
            'account_id': prior.get('account_id'),
            'region': prior.get('region'),
        }
        if prior.is_present() and None in attributes.values():
            try:
                account_id, region = parse_authorization_id(prior.id)
            except MalformedIdentifierError as e:
                raise AuthorizationOrchestrationError(f"Replace failed: {e}") from e
            if attributes['account_id'] is None:
                attributes['account_id'] = account_id
            if attributes['region'] is None:
                attributes['region'] = region
        return attributes

    def replace(self, prior: ResourceData, desired: Dict[str, Any]) -> ResourceData:
        """Recreate an authorization whose force-new attributes changed.

        Returns:
            prior unchanged when nothing forces replacement, else the new data

        Raises:
            AuthorizationOrchestrationError: When validation or a call fails
        """
        self.validate([desired])
        changed = self.resource.schema.requires_replacement(
            self._prior_attributes(prior), desired
        )
        if not changed:
            return prior

        logger.info(f"Replacing authorization {prior.id}: {', '.join(changed)} changed")
        try:
            if prior.is_present():
                self.resource.delete(prior)
            data = ResourceData(attributes=desired)
            self.resource.create(data)
        except (RemoteCallError, MalformedIdentifierError) as e:
            raise AuthorizationOrchestrationError(f"Replace failed: {e}") from e
        return data
