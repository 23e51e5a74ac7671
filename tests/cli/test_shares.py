from unittest.mock import patch

from click.testing import CliRunner
from blobnfs.cli import main
from blobnfs.exceptions import InvalidMountPathError
from blobnfs.shares.models import MountMode, MountSpec, SMBShare, TeardownOutcome, TeardownResult

def test_main_help():
    runner = CliRunner()
    result = runner.invoke(main, ['--help'])
    assert result.exit_code == 0
    assert "Mount NFSv3 Blob exports" in result.output

def test_mount_requires_all_arguments():
    runner = CliRunner()
    result = runner.invoke(main, ['mount', 'command', 'mount host:/x /mnt/x'])
    assert result.exit_code == 2

def test_mount_rejects_unknown_mode():
    runner = CliRunner()
    result = runner.invoke(main, ['mount', 'bogus', 'host:/x', '/tmp/out'])
    assert result.exit_code == 2

@patch('blobnfs.shares.lifecycle.ShareLifecycleManager.mount_and_export')
def test_mount(mock_mount):
    mock_mount.return_value = MountSpec(
        mode=MountMode.REMOTE_HOST,
        command=["mount"],
        mount_path="/mnt/nfsv3share-9",
        share_name="nfsv3share-9",
    )
    runner = CliRunner()
    result = runner.invoke(main, ['mount', 'remotehost', 'acct.blob.core.windows.net:/acct/c', '/tmp/out'])
    assert result.exit_code == 0
    assert "nfsv3share-9" in result.output
    mock_mount.assert_called_once_with('remotehost', 'acct.blob.core.windows.net:/acct/c', '/tmp/out')

@patch('blobnfs.shares.lifecycle.ShareLifecycleManager.mount_and_export',
       side_effect=InvalidMountPathError("Mount point x is not a path"))
def test_mount_invalid_path(mock_mount):
    runner = CliRunner()
    result = runner.invoke(main, ['mount', 'command', 'mount host:/x x', '/tmp/out'])
    assert result.exit_code == 1
    assert "Mount point x is not a path" in result.output

@patch('blobnfs.shares.lifecycle.ShareLifecycleManager.unmount_share')
def test_unmount_missing_share(mock_unmount):
    mock_unmount.return_value = TeardownResult(
        share_name="nope", outcome=TeardownOutcome.NOT_FOUND, message="No SMB share found for nope.")
    runner = CliRunner()
    result = runner.invoke(main, ['unmount', 'nope'])
    assert result.exit_code == 0
    assert "No SMB share found for nope." in result.output

@patch('blobnfs.shares.lifecycle.ShareLifecycleManager.unmount_share')
def test_unmount(mock_unmount):
    mock_unmount.return_value = TeardownResult(
        share_name="s", outcome=TeardownOutcome.UNMOUNTED, path="/mnt/s", message="Unmounted NFS mount at: /mnt/s")
    runner = CliRunner()
    result = runner.invoke(main, ['unmount', 's'])
    assert result.exit_code == 0
    assert "Removed SMB share and unmounted NFS share." in result.output

@patch('blobnfs.shares.lifecycle.ShareLifecycleManager.list_shares')
def test_list(mock_list):
    mock_list.return_value = [SMBShare(name="nfsv3share-1", path="/mnt/nfsv3share-1", mounted=True)]
    runner = CliRunner()
    result = runner.invoke(main, ['list'])
    assert result.exit_code == 0
    assert "Name: nfsv3share-1" in result.output
    assert "Mounted: True" in result.output

@patch('blobnfs.shares.lifecycle.ShareLifecycleManager.list_shares', return_value=[])
def test_list_empty(mock_list):
    runner = CliRunner()
    result = runner.invoke(main, ['list'])
    assert result.exit_code == 0
    assert "No shares found." in result.output
