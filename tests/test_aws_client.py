"""Unit tests for AWS Client Manager."""

import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError, NoCredentialsError, ProfileNotFound

from src.core.aws_client import AWSClientManager


def make_session(region_name="us-east-1"):
    mock_session = Mock()
    mock_session.region_name = region_name
    mock_sts_client = Mock()
    mock_sts_client.get_caller_identity.return_value = {
        "Account": "123456789012"
    }
    mock_config_client = Mock()

    def client_side_effect(service_name, region_name=None):
        if service_name == "sts":
            return mock_sts_client
        elif service_name == "config":
            return mock_config_client
        return Mock()

    mock_session.client.side_effect = client_side_effect
    return mock_session, mock_sts_client, mock_config_client


class TestAWSClientManager:
    """Test cases for AWSClientManager class."""

    @patch("src.core.aws_client.boto3.Session")
    def test_init_success(self, mock_session_class):
        """Test successful initialization."""
        mock_session, mock_sts_client, _ = make_session()
        mock_session_class.return_value = mock_session

        manager = AWSClientManager()

        assert manager._profile_name is None
        mock_sts_client.get_caller_identity.assert_called_once()

    @patch("src.core.aws_client.boto3.Session")
    def test_init_with_profile(self, mock_session_class):
        """Test initialization with profile."""
        mock_session, _, _ = make_session()
        mock_session_class.return_value = mock_session

        manager = AWSClientManager(profile_name="test-profile")

        assert manager._profile_name == "test-profile"
        mock_session_class.assert_called_with(profile_name="test-profile")

    @patch("src.core.aws_client.boto3.Session")
    def test_init_no_credentials(self, mock_session_class):
        """Test initialization with no credentials."""
        mock_session, mock_sts_client, _ = make_session()
        mock_sts_client.get_caller_identity.side_effect = NoCredentialsError()
        mock_session_class.return_value = mock_session

        with pytest.raises(NoCredentialsError):
            AWSClientManager()

    @patch("src.core.aws_client.boto3.Session")
    def test_init_expired_token(self, mock_session_class):
        """Test expired credentials surface as NoCredentialsError."""
        mock_session, mock_sts_client, _ = make_session()
        mock_sts_client.get_caller_identity.side_effect = ClientError(
            {"Error": {"Code": "ExpiredToken"}}, "GetCallerIdentity"
        )
        mock_session_class.return_value = mock_session

        with pytest.raises(NoCredentialsError) as exc_info:
            AWSClientManager()

        assert isinstance(exc_info.value.__cause__, ClientError)

    @patch("src.core.aws_client.boto3.Session")
    def test_init_profile_not_found(self, mock_session_class):
        """Test initialization with invalid profile."""
        mock_session_class.side_effect = ProfileNotFound(profile="invalid")

        with pytest.raises(ProfileNotFound):
            AWSClientManager(profile_name="invalid")

    @patch("src.core.aws_client.boto3.Session")
    def test_get_client_caching(self, mock_session_class):
        """Test client caching functionality."""
        mock_session, _, mock_config_client = make_session()
        mock_session_class.return_value = mock_session

        manager = AWSClientManager()

        client1 = manager.get_client("config", "us-east-1")
        client2 = manager.get_client("config", "us-east-1")

        assert client1 is client2
        assert client1 is mock_config_client

    @patch("src.core.aws_client.boto3.Session")
    def test_get_config_client_uses_explicit_region(self, mock_session_class):
        """Test Config client is created in the configured region."""
        mock_session, _, mock_config_client = make_session()
        mock_session_class.return_value = mock_session

        manager = AWSClientManager(region_name="eu-west-1")
        client = manager.get_config_client()

        assert client is mock_config_client
        mock_session.client.assert_called_with("config", region_name="eu-west-1")

    @patch("src.core.aws_client.boto3.Session")
    def test_get_current_region(self, mock_session_class):
        """Test getting current region."""
        mock_session, _, _ = make_session(region_name="us-west-2")
        mock_session_class.return_value = mock_session

        manager = AWSClientManager()

        assert manager.get_current_region() == "us-west-2"

    @patch("src.core.aws_client.boto3.Session")
    def test_get_current_region_default(self, mock_session_class):
        """Test getting current region with default fallback."""
        mock_session, _, _ = make_session(region_name=None)
        mock_session_class.return_value = mock_session

        manager = AWSClientManager()

        assert manager.get_current_region() == "us-east-1"
