"""Shared pytest fixtures."""

from typing import Dict, Optional

import pytest


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Keep boto3 away from real credentials."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture(autouse=True)
def no_default_config_file(monkeypatch, tmp_path):
    """Point the default config file somewhere that does not exist."""
    monkeypatch.setattr(
        "aws_ssh.utils.config.DEFAULT_CONFIG_FILE", tmp_path / "missing.yaml"
    )


def make_record(
    instance_id: str,
    tags: Optional[Dict[str, str]] = None,
    private_ip: str = "10.0.0.1",
    public_dns_name: str = "",
    key_name: str = "k1",
    state: str = "running",
) -> Dict:
    """Build a describe_instances instance record."""
    return {
        "InstanceId": instance_id,
        "State": {"Name": state},
        "Tags": [{"Key": key, "Value": value} for key, value in (tags or {}).items()],
        "PrivateIpAddress": private_ip,
        "PublicDnsName": public_dns_name,
        "KeyName": key_name,
    }


@pytest.fixture
def record_factory():
    """Factory for raw instance records."""
    return make_record


@pytest.fixture
def bastion_record():
    """Raw record of a prod bastion."""
    return make_record(
        "i-bastion",
        tags={"Name": "bastion1", "env": "prod", "role": "bastion"},
        private_ip="10.0.0.2",
        public_dns_name="b.example.com",
    )


@pytest.fixture
def web_record():
    """Raw record of a prod web host."""
    return make_record(
        "i-web1",
        tags={"Name": "web1", "env": "prod", "role": "web"},
        private_ip="10.0.0.5",
    )
