"""Tests for SSH config rendering."""

import io
from unittest.mock import patch

import pytest

from aws_ssh.exceptions import RenderError
from aws_ssh.models import InstanceInfo, RunConfig
from aws_ssh.utils.ssh_config_generator import (
    generate_ssh_config_entries,
    identity_file_path,
    render_bastion_block,
    render_host_block,
    write_ssh_config,
)

BASTION_BLOCK = (
    "\n"
    "Host bastion-prod\n"
    "    Hostname b.example.com\n"
    "    IdentityFile ~/.ssh/k1.pem\n"
    "    ForwardAgent yes\n"
    "    User ec2-user\n"
    "    StrictHostKeyChecking no\n"
)

WEB_BLOCK = (
    "\n"
    "Host web1\n"
    "    IdentityFile ~/.ssh/k1.pem\n"
    "    Hostname 10.0.0.5\n"
    "    User ec2-user\n"
    "    StrictHostKeyChecking no\n"
    "    ProxyCommand ssh ec2-user@bastion-prod -W %h:%p\n"
)


@pytest.fixture
def bastion():
    return InstanceInfo(
        instance_id="i-bastion",
        display_name="bastion-prod",
        private_ip="10.0.0.2",
        public_dns_name="b.example.com",
        key_name="k1",
    )


@pytest.fixture
def web():
    return InstanceInfo(
        instance_id="i-web1", display_name="web1", private_ip="10.0.0.5", key_name="k1"
    )


class TestBlocks:
    """Test single block rendering."""

    def test_identity_file_path(self):
        assert identity_file_path("deploy") == "~/.ssh/deploy.pem"

    def test_bastion_block(self, bastion):
        assert render_bastion_block(bastion) == BASTION_BLOCK

    def test_host_block(self, web):
        assert render_host_block(web, "bastion-prod") == WEB_BLOCK

    def test_host_block_suffix(self, web):
        block = render_host_block(web, "bastion-prod", suffix="-foo")
        assert "Host web1-foo\n" in block
        assert "Hostname 10.0.0.5\n" in block

    def test_braces_in_data_are_not_templates(self):
        odd = InstanceInfo(instance_id="i-x", display_name="{user}", private_ip="10.0.0.9")
        block = render_host_block(odd, "bastion-prod")
        assert "Host {user}\n" in block

    def test_malformed_template(self, web):
        with pytest.raises(RenderError) as exc_info:
            render_host_block(web, "bastion-prod", template="Host {missing}\n")
        assert exc_info.value.template == "host"


class TestGenerate:
    """Test block ordering and modes."""

    def test_bastion_first(self, bastion, web):
        blocks = list(generate_ssh_config_entries(bastion, [web], RunConfig(environment="prod")))
        assert blocks == [BASTION_BLOCK, WEB_BLOCK]

    def test_direct_proxy(self, bastion, web):
        config = RunConfig(environment="prod", direct_proxy=True)

        blocks = list(generate_ssh_config_entries(bastion, [web], config))

        assert len(blocks) == 1
        assert "ProxyCommand ssh ec2-user@b.example.com -W %h:%p\n" in blocks[0]
        assert "ForwardAgent yes\n" in blocks[0]
        assert "StrictHostKeyChecking" not in blocks[0]

    def test_no_hosts(self, bastion):
        blocks = list(generate_ssh_config_entries(bastion, [], RunConfig(environment="prod")))
        assert blocks == [BASTION_BLOCK]


class TestWrite:
    """Test writing to a stream."""

    def test_write(self, bastion, web):
        stream = io.StringIO()

        count = write_ssh_config(bastion, [web], RunConfig(environment="prod"), stream)

        assert count == 2
        assert stream.getvalue() == BASTION_BLOCK + WEB_BLOCK

    def test_deterministic(self, bastion, web):
        config = RunConfig(environment="prod", suffix="-p")
        first, second = io.StringIO(), io.StringIO()

        write_ssh_config(bastion, [web, web], config, first)
        write_ssh_config(bastion, [web, web], config, second)

        assert first.getvalue() == second.getvalue()

    def test_render_failure_keeps_written_blocks(self, bastion, web):
        stream = io.StringIO()

        with patch(
            "aws_ssh.utils.ssh_config_generator.HOST_TEMPLATE", "Host {missing}\n"
        ):
            with pytest.raises(RenderError):
                write_ssh_config(bastion, [web], RunConfig(environment="prod"), stream)

        assert stream.getvalue() == BASTION_BLOCK
