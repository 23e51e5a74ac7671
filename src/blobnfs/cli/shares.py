import click

from blobnfs.exceptions import ShareOpsError
from blobnfs.shares.models import MountMode, TeardownOutcome

@click.command(name="mount")
@click.argument("mode", type=click.Choice([m.value for m in MountMode]))
@click.argument("parameter")
@click.argument("result_file", type=click.Path(dir_okay=False))
def mount(mode, parameter, result_file):
    """
    Mount an NFSv3 export and share it over Samba.

    MODE is "command" (PARAMETER is a full mount command ending in the mount
    point) or "remotehost" (PARAMETER is <account>.blob.core.windows.net:/<account>/<container>).
    The share name is written to RESULT_FILE.
    """
    from blobnfs.shares.lifecycle import ShareLifecycleManager
    manager = ShareLifecycleManager()
    try:
        spec = manager.mount_and_export(mode, parameter, result_file)
    except ShareOpsError as e:
        raise click.ClickException(e.message)
    click.echo(f"Share '{spec.share_name}' exported from {spec.mount_path}.")

@click.command(name="unmount")
@click.argument("share_name")
def unmount(share_name):
    """Remove the Samba share SHARE_NAME and unmount its NFS mount."""
    from blobnfs.shares.lifecycle import ShareLifecycleManager
    manager = ShareLifecycleManager()
    try:
        result = manager.unmount_share(share_name)
    except ShareOpsError as e:
        raise click.ClickException(e.message)

    click.echo(result.message)
    if result.outcome == TeardownOutcome.UNMOUNTED:
        click.echo("Removed SMB share and unmounted NFS share.")

@click.command(name="list")
def list_shares():
    """List Samba shares."""
    from blobnfs.shares.lifecycle import ShareLifecycleManager
    manager = ShareLifecycleManager()
    shares = manager.list_shares()
    if not shares:
        click.echo("No shares found.")
        return

    for share in shares:
        click.echo(f"Name: {share.name}")
        click.echo(f"  Path: {share.path}")
        click.echo(f"  Comment: {share.comment}")
        click.echo(f"  Read Only: {share.read_only}")
        click.echo(f"  Mounted: {share.mounted}")
        click.echo("-" * 20)
