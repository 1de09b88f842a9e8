"""
SSH config rendering for bastion-routed EC2 hosts.
"""

import logging
import sys
from typing import Iterator, List, Optional, TextIO

from ..exceptions import RenderError
from ..models import DEFAULT_USER, InstanceInfo, RunConfig

logger = logging.getLogger(__name__)

BASTION_TEMPLATE = """
Host {host}
    Hostname {public_dns_name}
    IdentityFile {identity_file}
    ForwardAgent yes
    User {user}
    StrictHostKeyChecking no
"""

HOST_TEMPLATE = """
Host {host}
    IdentityFile {identity_file}
    Hostname {private_ip}
    User {user}
    StrictHostKeyChecking no
    ProxyCommand ssh {user}@{bastion_host} -W %h:%p
"""

# Hosts proxied straight through the bastion's public DNS name, no bastion block.
DIRECT_HOST_TEMPLATE = """
Host {host}
    IdentityFile {identity_file}
    ForwardAgent yes
    Hostname {private_ip}
    User {user}
    ProxyCommand ssh {user}@{bastion_host} -W %h:%p
"""


def identity_file_path(key_name: str) -> str:
    """Map an EC2 key pair name to its local private key path."""
    return f"~/.ssh/{key_name}.pem"


def _render(name: str, template: str, **values: str) -> str:
    try:
        return template.format(**values)
    except (KeyError, IndexError, ValueError) as e:
        raise RenderError(name, e) from e


def render_bastion_block(bastion: InstanceInfo, user: str = DEFAULT_USER) -> str:
    """Render the Host block for the bastion itself."""
    return _render(
        "bastion",
        BASTION_TEMPLATE,
        host=bastion.display_name,
        public_dns_name=bastion.public_dns_name,
        identity_file=identity_file_path(bastion.key_name),
        user=user,
    )


def render_host_block(
    instance: InstanceInfo,
    bastion_host: str,
    suffix: str = "",
    user: str = DEFAULT_USER,
    template: str = HOST_TEMPLATE,
) -> str:
    """
    Render the Host block for a host reached through the bastion.

    Args:
        instance: Resolved instance
        bastion_host: Bastion alias or address used in the ProxyCommand
        suffix: String appended to the host alias
        user: SSH user for both the host and the bastion
        template: Host template to render

    Returns:
        Rendered SSH config block
    """
    return _render(
        "host",
        template,
        host=f"{instance.display_name}{suffix}",
        identity_file=identity_file_path(instance.key_name),
        private_ip=instance.private_ip,
        user=user,
        bastion_host=bastion_host,
    )


def generate_ssh_config_entries(
    bastion: InstanceInfo, instances: List[InstanceInfo], config: RunConfig
) -> Iterator[str]:
    """
    Yield SSH config blocks in output order.

    The bastion block comes first and host blocks proxy through its alias.
    In direct-proxy mode the bastion block is omitted and hosts proxy
    through the bastion's public DNS name instead.
    """
    if config.direct_proxy:
        bastion_host = bastion.public_dns_name
        template = DIRECT_HOST_TEMPLATE
    else:
        yield render_bastion_block(bastion, config.user)
        bastion_host = bastion.display_name
        template = HOST_TEMPLATE

    for instance in instances:
        yield render_host_block(instance, bastion_host, config.suffix, config.user, template)


def write_ssh_config(
    bastion: InstanceInfo,
    instances: List[InstanceInfo],
    config: RunConfig,
    stream: Optional[TextIO] = None,
) -> int:
    """
    Write SSH config blocks to a stream, one block at a time.

    Blocks already written stay written if a later block fails to render.

    Args:
        bastion: The environment's bastion
        instances: Hosts to route through the bastion
        config: Run configuration
        stream: Output stream (defaults to stdout)

    Returns:
        Number of blocks written
    """
    if stream is None:
        stream = sys.stdout
    count = 0
    for block in generate_ssh_config_entries(bastion, instances, config):
        stream.write(block)
        stream.flush()
        count += 1
    logger.debug(f"Wrote {count} SSH config block(s)")
    return count
