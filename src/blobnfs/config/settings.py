import logging
import os
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_LOCATIONS = [
    "blobnfs.yaml",
    "~/.config/blobnfs/config.yaml",
    "/etc/blobnfs/config.yaml",
]


class Config:
    smb_conf_path = os.getenv("BLOBNFS_SMB_CONF_PATH", "/etc/samba/smb.conf")
    lock_path = os.getenv("BLOBNFS_LOCK_PATH", "/run/lock/blobnfs-smbconf.lock")
    mount_root = os.getenv("BLOBNFS_MOUNT_ROOT", "/mnt")
    share_prefix = os.getenv("BLOBNFS_SHARE_PREFIX", "nfsv3share")
    max_path_attempts = int(os.getenv("BLOBNFS_MAX_PATH_ATTEMPTS", "100"))

    # sysfs root holding the per-device read_ahead_kb tunables
    sysfs_bdi_root = os.getenv("BLOBNFS_SYSFS_BDI_ROOT", "/sys/class/bdi")

    # Samba service
    smb_service_names = os.getenv("BLOBNFS_SMB_SERVICE_NAMES", "smbd,samba,smb").split(",")
    smb_reload_action = os.getenv("BLOBNFS_SMB_RELOAD_ACTION", "restart")
    share_comment = os.getenv(
        "BLOBNFS_SHARE_COMMENT", "Samba on NFSv3 WSL2 setup by Blob NFS scripts"
    )
    quota_script = os.getenv(
        "BLOBNFS_QUOTA_SCRIPT", "/usr/local/lib/blobnfs/query_quota.sh"
    )

    wsl_conf_path = os.getenv("BLOBNFS_WSL_CONF_PATH", "/etc/wsl.conf")
    log_level = os.getenv("BLOBNFS_LOG_LEVEL", "INFO")

    def update(self, values: dict):
        """Override settings with values read from a config file."""
        for key, value in values.items():
            if key.startswith("_") or not hasattr(Config, key) or callable(getattr(Config, key)):
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue
            if key == "smb_service_names" and isinstance(value, str):
                value = value.split(",")
            setattr(self, key, value)


def find_config_file(path: Optional[str] = None) -> Optional[str]:
    if path:
        return path
    for candidate in DEFAULT_CONFIG_LOCATIONS:
        candidate = os.path.expanduser(candidate)
        if os.path.exists(candidate):
            return candidate
    return None


def load_config(path: Optional[str] = None) -> Config:
    """Load overrides from a YAML file into the shared config object."""
    config_path = find_config_file(path)
    if not config_path:
        return config

    with open(config_path, "r") as f:
        try:
            values = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid configuration file {config_path}: {e}")

    if not isinstance(values, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping.")

    logger.debug(f"Loaded configuration from {config_path}")
    config.update(values)
    return config


config = Config()
