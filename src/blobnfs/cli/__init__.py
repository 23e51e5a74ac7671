import logging

import click

from blobnfs.cli.shares import list_shares, mount, unmount
from blobnfs.cli.system import install, install_systemd, setup_account

@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to the configuration file.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx, config_path, verbose):
    """Mount NFSv3 Blob exports and share them over Samba."""
    from blobnfs.config.settings import load_config
    ctx.ensure_object(dict)

    try:
        settings = load_config(config_path)
    except (OSError, ValueError) as e:
        raise click.FileError(config_path or "config", hint=str(e))

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

main.add_command(install_systemd)
main.add_command(install)
main.add_command(setup_account)
main.add_command(mount)
main.add_command(unmount)
main.add_command(list_shares)

@main.command()
def version():
    """Show the blobnfs version."""
    from blobnfs.version import get_version
    click.echo(get_version())
