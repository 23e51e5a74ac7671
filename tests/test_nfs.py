import os
from unittest.mock import MagicMock, patch

import pytest
from blobnfs.exceptions import CommandError
from blobnfs.shares.models import MountMode, MountSpec
from blobnfs.shares.nfs import READ_AHEAD_KB, NFSMounter

def make_spec(mount_path):
    return MountSpec(
        mode=MountMode.REMOTE_HOST,
        command=["mount", "-t", "nfs", "-o", "vers=3,proto=tcp", "host:/export", str(mount_path)],
        mount_path=str(mount_path),
        share_name="nfsv3share-1",
    )

def bdi_dir(sysfs, mount_path):
    dev = os.stat(mount_path).st_dev
    path = sysfs / f"{os.major(dev)}:{os.minor(dev)}"
    path.mkdir(parents=True)
    return path

@patch('blobnfs.shares.nfs.run_command')
def test_mount_sets_read_ahead(mock_run, tmp_path):
    mount_path = tmp_path / "mnt"
    mount_path.mkdir()
    sysfs = tmp_path / "bdi"
    bdi = bdi_dir(sysfs, mount_path)

    NFSMounter(sysfs_bdi_root=str(sysfs)).mount(make_spec(mount_path))

    mock_run.assert_called_once_with(make_spec(mount_path).command)
    assert READ_AHEAD_KB == 16384
    assert (bdi / "read_ahead_kb").read_text() == "16384"

@patch('blobnfs.shares.nfs.run_command')
def test_mount_failure_skips_read_ahead(mock_run, tmp_path):
    mock_run.side_effect = CommandError("mount failed")
    mount_path = tmp_path / "mnt"
    mount_path.mkdir()
    mounter = NFSMounter(sysfs_bdi_root=str(tmp_path / "bdi"))

    with patch.object(mounter, 'set_read_ahead') as mock_read_ahead:
        with pytest.raises(CommandError):
            mounter.mount(make_spec(mount_path))

    mock_read_ahead.assert_not_called()

def test_set_read_ahead_missing_tunable(tmp_path):
    mounter = NFSMounter(sysfs_bdi_root=str(tmp_path / "no-sysfs"))

    assert mounter.set_read_ahead(str(tmp_path)) is False

@patch('blobnfs.shares.nfs.run_command')
def test_unmount(mock_run):
    NFSMounter().unmount("/mnt/nfsv3share-1")

    mock_run.assert_called_once_with(["umount", "/mnt/nfsv3share-1"])

@patch('psutil.disk_partitions')
def test_is_mounted(mock_partitions):
    part = MagicMock()
    part.mountpoint = '/mnt/nfsv3share-1'
    mock_partitions.return_value = [part]

    mounter = NFSMounter()

    assert mounter.is_mounted('/mnt/nfsv3share-1/') is True
    assert mounter.is_mounted('/mnt/other') is False
    mock_partitions.assert_called_with(all=True)
