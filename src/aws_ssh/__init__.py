"""
AWS SSH - SSH config fragments for tagged EC2 instances

Prints SSH config entries for the EC2 instances of an environment, routing
every host through the environment's bastion with a ProxyCommand.
"""

__version__ = "1.0.0"
__description__ = "SSH config generator for bastion-routed EC2 instances"

from .ssh_config import main

__all__ = ["main"]
