"""
AWS SSH - SSH config fragments for tagged EC2 instances

This tool prints SSH config entries for the EC2 instances of an environment:
1. Finding the environment's single bastion (tags env=<env>, role=bastion)
2. Listing the running instances matching the env/role tags
3. Rendering a bastion Host block and one Host block per instance, with a
   ProxyCommand that jumps through the bastion

Usage:
    aws-ssh -e prod -r web >> ~/.ssh/config
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from rich.logging import RichHandler

from .client import EC2InventoryClient
from .exceptions import AwsSshError
from .models import (
    BASTION_ROLE,
    DEFAULT_ENVIRONMENT,
    DEFAULT_REGION,
    DEFAULT_SKIP_ROLES,
    RunConfig,
)
from .resolver import parse_skip_roles, resolve_instances, select_bastion
from .utils.config import load_run_config
from .utils.display import console, display_bastion, display_hosts, display_warning
from .utils.ssh_config_generator import write_ssh_config

logger = logging.getLogger(__name__)

SUFFIX_FLAGS = ("-s", "--suffix")


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)


def _join_suffix_values(argv: Optional[List[str]]) -> List[str]:
    """Attach the value after -s/--suffix to the flag so values like "-foo" parse."""
    if argv is None:
        argv = sys.argv[1:]

    joined = []
    tokens = iter(argv)
    for token in tokens:
        if token in SUFFIX_FLAGS:
            value = next(tokens, None)
            if value is not None:
                token = f"--suffix={value}"
        joined.append(token)
    return joined


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="aws-ssh",
        description="Outputs fragments of SSH config file of AWS instances",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  aws-ssh -e prod -r web
  aws-ssh -e staging -s -stg -skiproles nat,vpn
  aws-ssh -e dev -region eu-west-1 --direct-proxy
        """
    )

    parser.add_argument(
        '-e', '--environment',
        help=f'environment (default: {DEFAULT_ENVIRONMENT})'
    )

    parser.add_argument(
        '-r', '--role',
        help='role (default: all roles)'
    )

    parser.add_argument(
        '-s', '--suffix',
        help='suffix to append to host name (may start with "-")'
    )

    parser.add_argument(
        '-region', '--region',
        help=f'AWS region (default: {DEFAULT_REGION})'
    )

    parser.add_argument(
        '-skiproles', '--skip-roles',
        dest='skip_roles',
        type=parse_skip_roles,
        help=f'comma-delimited roles to skip (default: {DEFAULT_SKIP_ROLES})'
    )

    parser.add_argument(
        '--profile',
        help='AWS named profile (default: standard credential chain)'
    )

    parser.add_argument(
        '--direct-proxy',
        action='store_const',
        const=True,
        help='omit the bastion block and proxy through its public DNS name'
    )

    parser.add_argument(
        '--config-file',
        help='YAML file with defaults and allow-lists (default: ~/.aws-ssh.yaml if present)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='debug logging and a host summary on stderr'
    )

    return parser.parse_args(_join_suffix_values(argv))


def run(
    config: RunConfig,
    client: Optional[EC2InventoryClient] = None,
    stream: Optional[TextIO] = None,
) -> int:
    """
    Query the bastion and the role instances, then write their SSH config.

    Returns:
        Number of SSH config blocks written
    """
    client = client or EC2InventoryClient(region=config.region, profile_name=config.profile)

    bastions = resolve_instances(
        client.list_instances(config.environment, BASTION_ROLE),
        config.environment,
        BASTION_ROLE,
    )
    bastion = select_bastion(bastions, config.environment)

    instances = resolve_instances(
        client.list_instances(config.environment, config.role),
        config.environment,
        config.role,
        config.skip_roles,
    )
    hosts = [instance for instance in instances if instance.instance_id != bastion.instance_id]

    if config.verbose:
        display_bastion(bastion)
        display_hosts(config, hosts)
    elif not hosts:
        display_warning(
            f"No hosts found for role '{config.role or '*'}' in {config.environment}"
        )

    return write_ssh_config(bastion, hosts, config, stream)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function for the aws-ssh command."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    overrides = {
        'environment': args.environment,
        'role': args.role,
        'suffix': args.suffix,
        'region': args.region,
        'skip_roles': args.skip_roles,
        'profile': args.profile,
        'direct_proxy': args.direct_proxy,
        'verbose': args.verbose or None,
    }

    try:
        config = load_run_config(overrides, args.config_file)
        run(config)
    except AwsSshError as e:
        logger.error(str(e))
        return 1

    return 0


def cli() -> None:
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n[yellow]Program interrupted by user.[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
