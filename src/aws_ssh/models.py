"""Data models for the AWS SSH config generator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

BASTION_ROLE = "bastion"
DEFAULT_USER = "ec2-user"
DEFAULT_ENVIRONMENT = "dev"
DEFAULT_REGION = "us-east-1"
DEFAULT_SKIP_ROLES = "nat"


class InstanceState(str, Enum):
    """EC2 instance state names."""
    PENDING = "pending"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting-down"
    TERMINATED = "terminated"
    STOPPING = "stopping"
    STOPPED = "stopped"


@dataclass(frozen=True)
class InstanceInfo:
    """A running EC2 instance with its resolved host label."""
    instance_id: str
    display_name: str
    private_ip: str = ""
    public_dns_name: str = ""
    key_name: str = ""
    role: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict, compare=False)


def split_roles(value):
    """Split a comma-delimited role list, dropping blanks.

    Anything other than a string or a list is returned unchanged for the
    model to reject.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return value
    return [
        item.strip() if isinstance(item, str) else item
        for item in value
        if not isinstance(item, str) or item.strip()
    ]


class RunConfig(BaseModel):
    """Settings for a single run, built once at startup."""
    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    environment: str = DEFAULT_ENVIRONMENT
    role: str = ""
    region: str = DEFAULT_REGION
    suffix: str = ""
    skip_roles: List[str] = [DEFAULT_SKIP_ROLES]
    user: str = DEFAULT_USER
    profile: Optional[str] = None
    direct_proxy: bool = False
    verbose: bool = False
    allowed_environments: List[str] = []
    allowed_roles: List[str] = []

    @field_validator("skip_roles", "allowed_environments", "allowed_roles", mode="before")
    @classmethod
    def _split_comma_list(cls, value):
        return split_roles(value)
