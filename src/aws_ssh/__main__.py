from .ssh_config import cli

cli()
