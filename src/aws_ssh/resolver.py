"""
Selection and naming rules for EC2 instance records.

Raw ``describe_instances`` records are turned into ``InstanceInfo`` objects in
two passes per record: first the skip decision is taken from the ``role`` tag,
then the display name is computed from the ``Name`` tag. Skipped records are
never named.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import BastionCountError
from .models import BASTION_ROLE, InstanceInfo, split_roles

logger = logging.getLogger(__name__)


def tags_to_dict(tags: Optional[Iterable[Dict[str, str]]]) -> Dict[str, str]:
    """Convert an EC2 tag list into a key/value mapping."""
    return {tag["Key"]: tag.get("Value", "") for tag in tags or [] if "Key" in tag}


def parse_skip_roles(value: str) -> List[str]:
    """Parse a comma-delimited skip-role string (e.g. 'nat,vpn')."""
    return split_roles(value)


def should_skip(tags: Dict[str, str], skip_roles: Iterable[str]) -> bool:
    """Check if the instance's role tag is in the skip list."""
    role = tags.get("role")
    return role is not None and role in set(skip_roles)


def resolve_display_name(
    instance_id: str, tags: Dict[str, str], environment: str, role: str
) -> str:
    """
    Resolve the host label for an instance.

    Args:
        instance_id: EC2 instance id, used when there is no Name tag
        tags: Instance tags as a mapping
        environment: Environment the query was made for
        role: Role the query was made for

    Returns:
        ``bastion-<environment>`` for bastion queries, otherwise the Name tag
        or the instance id
    """
    if role == BASTION_ROLE:
        return f"{BASTION_ROLE}-{environment}"
    return tags.get("Name") or instance_id


def resolve_instance(record: Dict[str, Any], environment: str, role: str) -> InstanceInfo:
    """Build an InstanceInfo from a raw describe_instances record."""
    tags = tags_to_dict(record.get("Tags"))
    instance_id = record["InstanceId"]
    return InstanceInfo(
        instance_id=instance_id,
        display_name=resolve_display_name(instance_id, tags, environment, role),
        private_ip=record.get("PrivateIpAddress", ""),
        public_dns_name=record.get("PublicDnsName", ""),
        key_name=record.get("KeyName", ""),
        role=tags.get("role"),
        tags=tags,
    )


def resolve_instances(
    records: Iterable[Dict[str, Any]],
    environment: str,
    role: str,
    skip_roles: Iterable[str] = (),
) -> List[InstanceInfo]:
    """
    Filter and name raw instance records, keeping their order.

    Args:
        records: Raw records in provider order
        environment: Environment the query was made for
        role: Role the query was made for
        skip_roles: Roles whose instances are excluded

    Returns:
        List of resolved instances
    """
    skip_roles = list(skip_roles)
    instances = []
    for record in records:
        tags = tags_to_dict(record.get("Tags"))
        if should_skip(tags, skip_roles):
            logger.debug(f"Skipping {record['InstanceId']} with role '{tags.get('role')}'")
            continue
        instances.append(resolve_instance(record, environment, role))
    return instances


def select_bastion(instances: List[InstanceInfo], environment: str) -> InstanceInfo:
    """
    Return the single bastion of an environment.

    Raises:
        BastionCountError: If there is not exactly one bastion
    """
    if len(instances) != 1:
        raise BastionCountError(environment, len(instances))
    return instances[0]
