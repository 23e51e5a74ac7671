import platform

from blobnfs.pkgs.arch import ArchPackageManager
from blobnfs.pkgs.debian import DebianPackageManager
from blobnfs.pkgs.fedora import FedoraPackageManager


def get_os_info() -> dict:
    """Return /etc/os-release as a dict with lower-case keys."""
    try:
        release = platform.freedesktop_os_release()
    except OSError:
        return {}
    return {key.lower(): value for key, value in release.items()}


def get_package_manager():
    os_info = get_os_info()
    distros = [os_info.get('id', '')] + os_info.get('id_like', '').split()
    for distro in distros:
        if distro in ["arch"]:
            return ArchPackageManager()
        elif distro in ["debian", "ubuntu"]:
            return DebianPackageManager()
        elif distro in ["fedora", "centos", "rhel"]:
            return FedoraPackageManager()
    raise Exception(f"Unsupported distribution: {os_info.get('id')}")
