"""Tests for the stderr display helpers."""

from aws_ssh.models import InstanceInfo, RunConfig
from aws_ssh.utils.display import display_bastion, display_hosts, display_warning


class TestDisplay:
    """Test that user and tag values are printed literally."""

    def test_warning_with_markup_like_text(self, capsys):
        display_warning("No hosts found for role '[/x]' in prod")

        captured = capsys.readouterr()
        assert "[/x]" in captured.err
        assert captured.out == ""

    def test_hosts_table_with_markup_like_values(self, capsys):
        config = RunConfig(environment="[red]prod", suffix="[/x]")
        instance = InstanceInfo(
            instance_id="i-1", display_name="web[b]", private_ip="10.0.0.5", role="web"
        )

        display_hosts(config, [instance])

        captured = capsys.readouterr()
        assert "web[b][/x]" in captured.err
        assert captured.out == ""

    def test_bastion_with_markup_like_name(self, capsys):
        display_bastion(InstanceInfo(instance_id="i-b", display_name="[/bastion]"))

        assert "[/bastion]" in capsys.readouterr().err
