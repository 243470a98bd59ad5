"""Unit tests for the Config service authorization client."""

import pytest
from datetime import datetime
from unittest.mock import Mock, call
from botocore.exceptions import ClientError

from src.authorization.service import (
    AggregationAuthorization,
    ConfigServiceAuthorizations,
)


def authorization_item(account_id, region):
    return {
        'AggregationAuthorizationArn': f'arn:aws:config:us-east-1:111111111111:aggregation-authorization/{account_id}/{region}',
        'AuthorizedAccountId': account_id,
        'AuthorizedAwsRegion': region,
        'CreationTime': datetime(2024, 1, 1),
    }


@pytest.fixture
def mock_config_client():
    return Mock()


@pytest.fixture
def service(mock_config_client):
    return ConfigServiceAuthorizations(mock_config_client)


class TestConfigServiceAuthorizations:

    def test_put_authorization(self, service, mock_config_client):
        """Test put passes account and region."""
        mock_config_client.put_aggregation_authorization.return_value = {
            'AggregationAuthorization': authorization_item('123456789012', 'us-west-2')
        }

        result = service.put_authorization('123456789012', 'us-west-2')

        mock_config_client.put_aggregation_authorization.assert_called_once_with(
            AuthorizedAccountId='123456789012',
            AuthorizedAwsRegion='us-west-2',
        )
        assert result['AuthorizedAccountId'] == '123456789012'

    def test_list_authorizations_single_page(self, service, mock_config_client):
        """Test single page listing issues one call."""
        mock_config_client.describe_aggregation_authorizations.return_value = {
            'AggregationAuthorizations': [authorization_item('123456789012', 'us-west-2')]
        }

        result = service.list_authorizations()

        assert result == [AggregationAuthorization(
            account_id='123456789012',
            region='us-west-2',
            arn='arn:aws:config:us-east-1:111111111111:aggregation-authorization/123456789012/us-west-2',
            creation_time=datetime(2024, 1, 1),
        )]
        mock_config_client.describe_aggregation_authorizations.assert_called_once_with()

    def test_list_authorizations_follows_next_token(self, service, mock_config_client):
        """Test listing walks every page."""
        mock_config_client.describe_aggregation_authorizations.side_effect = [
            {
                'AggregationAuthorizations': [authorization_item('123456789012', 'us-west-2')],
                'NextToken': 'page-2',
            },
            {
                'AggregationAuthorizations': [authorization_item('210987654321', 'eu-west-1')],
            },
        ]

        result = service.list_authorizations()

        assert [(a.account_id, a.region) for a in result] == [
            ('123456789012', 'us-west-2'),
            ('210987654321', 'eu-west-1'),
        ]
        assert mock_config_client.describe_aggregation_authorizations.call_args_list == [
            call(), call(NextToken='page-2')
        ]

    def test_list_authorizations_empty(self, service, mock_config_client):
        mock_config_client.describe_aggregation_authorizations.return_value = {}

        assert service.list_authorizations() == []

    def test_delete_authorization(self, service, mock_config_client):
        service.delete_authorization('123456789012', 'us-west-2')

        mock_config_client.delete_aggregation_authorization.assert_called_once_with(
            AuthorizedAccountId='123456789012',
            AuthorizedAwsRegion='us-west-2',
        )

    def test_errors_propagate(self, service, mock_config_client):
        """Test botocore errors are not swallowed."""
        mock_config_client.delete_aggregation_authorization.side_effect = ClientError(
            {'Error': {'Code': 'AccessDeniedException'}}, 'DeleteAggregationAuthorization'
        )

        with pytest.raises(ClientError):
            service.delete_authorization('123456789012', 'us-west-2')


class TestAggregationAuthorization:

    def test_from_response_without_optional_fields(self):
        authorization = AggregationAuthorization.from_response({
            'AuthorizedAccountId': '123456789012',
            'AuthorizedAwsRegion': 'us-west-2',
        })

        assert authorization.arn == ''
        assert authorization.creation_time is None

    def test_matches(self):
        authorization = AggregationAuthorization('123456789012', 'us-west-2', 'arn')

        assert authorization.matches('123456789012', 'us-west-2')
        assert not authorization.matches('123456789012', 'us-east-1')
        assert not authorization.matches('210987654321', 'us-west-2')
