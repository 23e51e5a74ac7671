import logging
import os
from typing import Optional

from blobnfs.config.settings import config
from blobnfs.exceptions import CommandError
from blobnfs.pkgs.manager import get_package_manager
from blobnfs.runner.command import run_command
from blobnfs.shares.smb import SMBManager
from blobnfs.shares.smbconf import SmbConf

logger = logging.getLogger(__name__)

WSL_BOOT_SECTION = "boot"


def install_systemd(wsl_conf_path: Optional[str] = None) -> bool:
    """Enable systemd for the WSL distro. Returns False if nothing had to change."""
    wsl_conf = SmbConf(wsl_conf_path or config.wsl_conf_path).load()
    block = wsl_conf.find_last_block(WSL_BOOT_SECTION)
    if not block.found:
        wsl_conf.append_block(WSL_BOOT_SECTION, {"systemd": "true"})
    else:
        value = wsl_conf.read_attribute(block.start, block.end, "systemd")
        if value == "true":
            logger.info("systemd is already enabled in wsl.conf")
            return False
        if value is not None:
            logger.warning(f"wsl.conf sets systemd={value}, leaving it unchanged")
            return False
        wsl_conf.insert_attribute("systemd", "true", section=WSL_BOOT_SECTION)

    wsl_conf.save()
    logger.info(f"Enabled systemd in {wsl_conf.path}, restart the WSL distro to apply it")
    return True


def install_prerequisites():
    """Install the NFS client and samba, then open samba in the firewall."""
    pm = get_package_manager()
    pm.update()

    for package in (pm.nfs_client_package, pm.samba_package):
        if pm.is_installed(package):
            logger.info(f"{package} is already installed")
            continue
        logger.info(f"Installing {package}")
        pm.install(package)

    SMBManager().restart_service()

    result = run_command(["ufw", "allow", "samba"], check=False)
    if not result.ok:
        logger.warning(f"Could not open samba in the firewall: {result.diagnostic}")


def setup_account(username: str, smb_conf: Optional[SmbConf] = None, quota_script: Optional[str] = None):
    """
    Create the samba user and hook the quota script into [global].

    The samba password is set to the user name so shares can be mounted
    from the host without prompting.
    """
    if not username:
        raise ValueError("A samba user name is required.")

    logger.info(f"Note: Samba password for {username} is same as the username.")
    try:
        run_command(["smbpasswd", "-a", "-s", username], input=f"{username}\n{username}\n")
    except CommandError as e:
        logger.error(f"Could not add samba user {username}: {e.message}")
        raise

    quota_script = quota_script or config.quota_script
    conf = smb_conf or SmbConf()
    with conf.locked():
        if conf.insert_attribute("get quota command", quota_script):
            conf.save()
            logger.info("Added quota command to the samba [global] section")
    if not os.path.exists(quota_script):
        logger.warning(f"Quota script {quota_script} does not exist yet")
