from unittest.mock import patch

import pytest
from blobnfs.pkgs.arch import ArchPackageManager
from blobnfs.pkgs.debian import DebianPackageManager
from blobnfs.pkgs.manager import get_package_manager
from blobnfs.runner.models import CommandResult

@patch('blobnfs.pkgs.manager.get_os_info', return_value={'id': 'ubuntu', 'id_like': 'debian'})
def test_get_package_manager_debian(mock_os_info):
    pm = get_package_manager()

    assert isinstance(pm, DebianPackageManager)
    assert pm.nfs_client_package == "nfs-common"

@patch('blobnfs.pkgs.manager.get_os_info', return_value={'id': 'manjaro', 'id_like': 'arch'})
def test_get_package_manager_id_like(mock_os_info):
    pm = get_package_manager()

    assert isinstance(pm, ArchPackageManager)
    assert pm.nfs_client_package == "nfs-utils"

@patch('blobnfs.pkgs.manager.get_os_info', return_value={'id': 'plan9'})
def test_get_package_manager_unsupported(mock_os_info):
    with pytest.raises(Exception, match="Unsupported distribution"):
        get_package_manager()

@patch('blobnfs.pkgs.debian.run_command')
def test_debian_is_installed(mock_run):
    mock_run.return_value = CommandResult(args=["dpkg-query"], returncode=0, stdout="install ok installed")

    assert DebianPackageManager().is_installed("samba") is True
    mock_run.assert_called_once_with(["dpkg-query", "-W", "-f=${Status}", "samba"], check=False)

@patch('blobnfs.pkgs.debian.run_command')
def test_debian_install(mock_run):
    DebianPackageManager().install("nfs-common")

    mock_run.assert_called_once_with(["apt-get", "install", "-y", "nfs-common"])
