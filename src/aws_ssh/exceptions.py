"""
Exception hierarchy for the AWS SSH config generator.

    AwsSshError
    ├── InventoryQueryError
    ├── BastionCountError
    ├── RenderError
    └── ConfigError
        └── ConfigNotFoundError

Every error is fatal: library code raises, the entry point logs the message
and exits with a non-zero status.
"""

from typing import Optional


class AwsSshError(Exception):
    """Base class for all errors raised by aws_ssh."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class InventoryQueryError(AwsSshError):
    """The EC2 describe-instances call failed."""

    def __init__(self, region: str, cause: Exception):
        super().__init__(f"Failed to list instances in {region}", cause=cause)
        self.region = region


class BastionCountError(AwsSshError):
    """The bastion query did not return exactly one instance."""

    def __init__(self, environment: str, found: int):
        super().__init__(
            f"expected 1 bastion host instance in the {environment} environment, found {found}"
        )
        self.environment = environment
        self.found = found


class RenderError(AwsSshError):
    """An SSH config template could not be rendered."""

    def __init__(self, template: str, cause: Exception):
        super().__init__(f"Failed to render {template} template", cause=cause)
        self.template = template


class ConfigError(AwsSshError):
    """Invalid configuration file or settings."""


class ConfigNotFoundError(ConfigError):
    """An explicitly requested configuration file does not exist."""
