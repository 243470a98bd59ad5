#!/usr/bin/env python3
"""AWS Config Aggregation Authorizations - Main Entry Point.

Command line tool to apply, inspect, import and delete AWS Config
aggregation authorizations.
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from src import __version__
from src.core.config import Configuration, ConfigurationError, DEFAULT_CONFIG_PATHS
from src.core.aws_client import AWSClientManager
from src.authorization.identifier import MalformedIdentifierError
from src.authorization.orchestrator import (
    AuthorizationOrchestrationError,
    AuthorizationOrchestrator,
)
from src.authorization.resource import (
    AggregationAuthorizationResource,
    RemoteCallError,
    ResourceData,
)
from src.authorization.service import ConfigServiceAuthorizations


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="aggregation-authorizations",
        description="Manage AWS Config aggregation authorizations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s apply                         # Apply authorizations from config.yaml
  %(prog)s apply config.yaml --prune     # Also delete undeclared authorizations
  %(prog)s show 123456789012:us-east-1   # Refresh and print one authorization
  %(prog)s delete 123456789012:us-east-1
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"AWS Config Aggregation Authorizations v{__version__}",
    )
    parser.add_argument("--profile", help="AWS profile name to use for credentials")
    parser.add_argument(
        "--region", help="AWS region to use (overrides configuration file)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable informational logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    apply_parser = subparsers.add_parser(
        "apply", help="Create declared authorizations that do not exist"
    )
    apply_parser.add_argument(
        "config_file", nargs="?", help="Path to configuration file"
    )
    apply_parser.add_argument(
        "--prune",
        action="store_true",
        help="Delete authorizations that are not declared",
    )

    destroy_parser = subparsers.add_parser(
        "destroy", help="Delete every declared authorization"
    )
    destroy_parser.add_argument(
        "config_file", nargs="?", help="Path to configuration file"
    )

    for name, help_text in (
        ("show", "Refresh and print one authorization"),
        ("import", "Adopt an existing authorization by id"),
        ("delete", "Delete one authorization"),
    ):
        id_parser = subparsers.add_parser(name, help=help_text)
        id_parser.add_argument("authorization_id", help="account_id:region")

    return parser.parse_args(argv)


def auto_detect_config() -> Optional[str]:
    """Auto-detect configuration file in current directory."""
    for candidate in DEFAULT_CONFIG_PATHS:
        if Path(candidate).exists():
            return candidate
    return None


def build_resource(
    profile: Optional[str], region: Optional[str]
) -> AggregationAuthorizationResource:
    """Build the resource adapter bound to a Config client."""
    aws_client = AWSClientManager(profile_name=profile, region_name=region)
    service = ConfigServiceAuthorizations(aws_client.get_config_client())
    return AggregationAuthorizationResource(service)


def print_resource(data: ResourceData) -> None:
    if not data.is_present():
        print("❌ Authorization not found")
        return
    for key, value in data.to_dict().items():
        print(f"   {key}: {value}")


def run_configured(args: argparse.Namespace) -> int:
    """Handle apply and destroy."""
    config_path = args.config_file or auto_detect_config()
    if not config_path:
        print("❌ No configuration file found.")
        print("   Please create config.yaml or specify a configuration file.")
        return 1

    print(f"📄 Using configuration file: {config_path}")
    config = Configuration(config_path)

    resource = build_resource(
        args.profile or config.get_profile_name(),
        args.region or config.get_home_region(),
    )
    orchestrator = AuthorizationOrchestrator(resource)
    desired = config.get_authorizations()

    if args.command == "apply":
        results = orchestrator.apply(desired, prune=args.prune)
        for resource_id in results["created"]:
            print(f"✅ Created {resource_id}")
        for resource_id in results["unchanged"]:
            print(f"   Unchanged {resource_id}")
        for resource_id in results["deleted"]:
            print(f"🗑️  Deleted {resource_id}")
    else:
        results = orchestrator.destroy(desired)
        for resource_id in results["deleted"]:
            print(f"🗑️  Deleted {resource_id}")
        for resource_id in results["skipped"]:
            print(f"   Already absent {resource_id}")
    return 0


def run_single(args: argparse.Namespace) -> int:
    """Handle show, import and delete."""
    resource = build_resource(args.profile, args.region)

    if args.command == "delete":
        data = ResourceData(args.authorization_id)
        resource.delete(data)
        print(f"🗑️  Deleted {args.authorization_id}")
        return 0

    data = resource.import_state(args.authorization_id)
    print_resource(data)
    if args.command == "import" and data.is_present():
        print(f"✅ Imported {args.authorization_id}")
    return 0 if data.is_present() else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        args = parse_arguments(argv)
        logging.basicConfig(
            level=logging.INFO if args.verbose else logging.WARNING,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        if args.command in ("apply", "destroy"):
            return run_configured(args)
        return run_single(args)

    except ConfigurationError as e:
        print(f"❌ Configuration error: {e}")
        return 1

    except MalformedIdentifierError as e:
        print(f"❌ Invalid authorization id: {e}")
        return 1

    except (RemoteCallError, AuthorizationOrchestrationError) as e:
        print(f"❌ {e}")
        return 1

    except KeyboardInterrupt:
        print("\n\n👋 Operation cancelled by user.")
        return 130

    except Exception as e:
        print(f"\n❌ Unexpected error: {e}")
        print("   Please check your configuration and try again.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
