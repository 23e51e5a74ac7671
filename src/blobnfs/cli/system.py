import click

from blobnfs.exceptions import ShareOpsError

@click.command(name="install-systemd")
def install_systemd():
    """Enable systemd in wsl.conf."""
    from blobnfs.setup.manager import install_systemd as enable_systemd
    if enable_systemd():
        click.echo("systemd enabled, restart the distro to apply it.")
    else:
        click.echo("systemd is already enabled.")

@click.command(name="install")
def install():
    """Install the NFS client and Samba."""
    from blobnfs.setup.manager import install_prerequisites
    try:
        install_prerequisites()
    except Exception as e:
        raise click.ClickException(f"Error installing prerequisites: {e}")
    click.echo("NFS client and Samba installed.")

@click.command(name="setup-account")
@click.argument("username")
def setup_account(username):
    """Create the Samba user USERNAME (password is the user name)."""
    from blobnfs.setup.manager import setup_account as create_account
    try:
        create_account(username)
    except (ShareOpsError, ValueError) as e:
        raise click.ClickException(str(e))
    click.echo(f"Samba user '{username}' is ready.")
