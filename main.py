"""
=========================================================
Command-line entry point for the MySQL tenant add-on.
=========================================================

Runs one add-on workflow outside the hosting platform, which is handy for
operators checking a server or cleaning up after a failed provision.

Admin properties default to the MYSQL_* environment variables (or .env file)
and can be overridden with --property KEY=VALUE.

Usage:
    # Check connectivity and admin rights
    python main.py --test --team acme --instance prod1

    # Create a tenant database
    python main.py --provision --team acme --instance prod1

    # Remove it again
    python main.py --deprovision --team acme --instance prod1

    # Override a property, drop partial results on failure
    python main.py --provision --team acme --instance prod1 \\
        --property mysqlServer=db.internal --rollback-on-failure

Exit Codes:
    0: Success
    1: Workflow failed
    2: Invalid arguments
    130: User interrupt (Ctrl+C)
"""

import argparse
import sys
from typing import List, Optional, Sequence

from core.config import config
from core.logger import get_logger, setup_logging_from_config
from models.addon_models import (
    AddonProperty,
    DeprovisionRequest,
    ProvisionRequest,
    TenantIdentity,
    TestRequest,
)
from provisioning.addon_orchestrator import MySQLAddon

logger = get_logger(__name__)


def parse_property(raw: str) -> AddonProperty:
    """Parse a KEY=VALUE argument into an AddonProperty."""
    key, sep, value = raw.partition('=')
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{raw}'")
    return AddonProperty(key, value)


def merge_properties(
    defaults: Sequence[AddonProperty],
    overrides: Sequence[AddonProperty]
) -> List[AddonProperty]:
    """Overrides first so they win the first-match lookup, defaults after."""
    return list(overrides) + list(defaults)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MySQL tenant database add-on",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --test --team acme --instance prod1
  python main.py --provision --team acme --instance prod1
  python main.py --deprovision --team acme --instance prod1
        """
    )

    operation = parser.add_mutually_exclusive_group(required=True)
    operation.add_argument(
        '--provision',
        action='store_true',
        help='Create the tenant database and account, print its connection string'
    )
    operation.add_argument(
        '--deprovision',
        action='store_true',
        help='Drop the tenant database and account'
    )
    operation.add_argument(
        '--test',
        action='store_true',
        help='Create and drop a tenant database to check the admin account'
    )

    parser.add_argument('--team', required=True, help='Development team alias')
    parser.add_argument('--instance', required=True, help='Application instance alias')
    parser.add_argument(
        '--property',
        dest='properties',
        action='append',
        type=parse_property,
        default=[],
        metavar='KEY=VALUE',
        help='Admin property (mysqlServer, mysqlServerPort, mysqlAdminDatabase, '
             'mysqlAdminUser, mysqlAdminPassword); repeatable'
    )
    parser.add_argument(
        '--rollback-on-failure',
        action='store_true',
        default=None,
        help='Drop resources created by a provision or test that fails midway'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level)'
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one workflow from the command line and return the exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 2

    setup_logging_from_config(log_level='DEBUG' if args.verbose else None)

    tenant = TenantIdentity(team_alias=args.team, instance_alias=args.instance)
    properties = merge_properties(config.default_admin_properties(), args.properties)

    try:
        addon = MySQLAddon(rollback_on_failure=args.rollback_on_failure)

        if args.provision:
            result = addon.provision(ProvisionRequest(tenant=tenant, properties=properties))
        elif args.deprovision:
            result = addon.deprovision(DeprovisionRequest(tenant=tenant, properties=properties))
        else:
            result = addon.test(TestRequest(tenant=tenant, properties=properties))

    except KeyboardInterrupt:
        logger.warning("⚠️  Operation interrupted by user")
        return 130

    if not result.success:
        kind = result.error_kind.value if result.error_kind else 'unknown'
        logger.error(f"❌ {kind} error: {result.message}")
        return 1

    logger.info(f"✅ {result.message}")
    if args.provision:
        print(result.connection_string)
    return 0


if __name__ == '__main__':
    sys.exit(main())
