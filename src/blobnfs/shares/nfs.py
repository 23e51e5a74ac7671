import logging
import os
from typing import Optional

import psutil

from blobnfs.config.settings import config
from blobnfs.runner.command import run_command
from blobnfs.shares.models import MountSpec

logger = logging.getLogger(__name__)

# 16MB, applied to every NFS mount
READ_AHEAD_KB = 16384


class NFSMounter:
    def __init__(self, sysfs_bdi_root: Optional[str] = None):
        self.sysfs_bdi_root = sysfs_bdi_root or config.sysfs_bdi_root

    def mount(self, spec: MountSpec):
        """Mount the NFS export and tune read-ahead on the new mount."""
        logger.info(f"Mounting NFS share on {spec.mount_path}")
        run_command(spec.command)
        self.set_read_ahead(spec.mount_path)
        logger.info("Mounted NFS share.")

    def set_read_ahead(self, mount_path: str) -> bool:
        """
        Write read_ahead_kb for the backing device of `mount_path`.

        NFS mounts get an anonymous device, whose bdi entry is named after the
        major:minor pair of st_dev.
        """
        dev = os.stat(mount_path).st_dev
        bdi = f"{os.major(dev)}:{os.minor(dev)}"
        tunable = os.path.join(self.sysfs_bdi_root, bdi, "read_ahead_kb")

        logger.info(f"Setting read ahead to {READ_AHEAD_KB // 1024}MB")
        try:
            with open(tunable, "w") as f:
                f.write(str(READ_AHEAD_KB))
        except OSError as e:
            logger.warning(f"Could not set read ahead for {mount_path} via {tunable}: {e}")
            return False
        return True

    def unmount(self, mount_path: str):
        run_command(["umount", mount_path])
        logger.info(f"Unmounted NFS mount at: {mount_path}")

    def is_mounted(self, mount_path: str) -> bool:
        target = os.path.normpath(mount_path)
        for part in psutil.disk_partitions(all=True):
            if os.path.normpath(part.mountpoint) == target:
                return True
        return False
