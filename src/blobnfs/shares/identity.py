import logging
import os
import random
from typing import Optional

from blobnfs.config.settings import config
from blobnfs.exceptions import InvalidMountPathError, NamespaceExhaustedError
from blobnfs.shares.models import MountMode, MountSpec

logger = logging.getLogger(__name__)

# Same range as bash $RANDOM
MAX_SUFFIX = 32767


def share_name_for_path(mount_path: str) -> str:
    """Map /mnt/a/b to mnt-a-b. The same path always gives the same name."""
    return mount_path[1:].replace("/", "-")


def nfsv3_mount_command(remote: str, mount_path: str):
    return ["mount", "-t", "nfs", "-o", "vers=3,proto=tcp", remote, mount_path]


class ShareIdentityDeriver:
    def __init__(self, mount_root: Optional[str] = None, share_prefix: Optional[str] = None,
                 max_attempts: Optional[int] = None, rng: Optional[random.Random] = None):
        self.mount_root = mount_root or config.mount_root
        self.share_prefix = share_prefix or config.share_prefix
        self.max_attempts = max_attempts or config.max_path_attempts
        self.rng = rng or random.Random()

    def derive(self, mode, parameter: str) -> MountSpec:
        spec = self.plan(mode, parameter)
        self.ensure_mount_point(spec)
        return spec

    def plan(self, mode, parameter: str) -> MountSpec:
        """
        Work out the mount spec. Only remote-host mode touches the disk, since
        creating the generated directory is what reserves its suffix.
        """
        mode = MountMode(mode)
        if mode == MountMode.COMMAND:
            return self.from_command(parameter)
        return self.from_remote(parameter)

    def from_command(self, command: str) -> MountSpec:
        """
        Use the last token of a full mount command as the mount point.

        e.g. mount -t nfs -o vers=3,proto=tcp <account>.blob.core.windows.net:/<account>/<container> /mnt/<path>

        The command is split on whitespace only, quotes are not interpreted.
        """
        tokens = command.split()
        mount_path = tokens[-1] if tokens else ""
        if not mount_path.startswith("/"):
            raise InvalidMountPathError(f"Mount point {mount_path} is not a path")

        return MountSpec(
            mode=MountMode.COMMAND,
            command=tokens,
            mount_path=mount_path,
            share_name=share_name_for_path(mount_path),
        )

    def ensure_mount_point(self, spec: MountSpec):
        if spec.mode != MountMode.COMMAND:
            return
        if not os.path.isdir(spec.mount_path):
            os.makedirs(spec.mount_path)
            logger.info(f"Created {spec.mount_path}")
        else:
            logger.info(f"Mount point {spec.mount_path} already exists")

    def from_remote(self, remote: str) -> MountSpec:
        """Mount <account>.blob.core.windows.net:/<account>/<container> on a fresh path."""
        for _ in range(self.max_attempts):
            suffix = self.rng.randint(0, MAX_SUFFIX)
            share_name = f"{self.share_prefix}-{suffix}"
            mount_path = os.path.join(self.mount_root, share_name)
            if os.path.lexists(mount_path):
                logger.debug(f"{mount_path} is taken, trying another suffix")
                continue

            os.makedirs(mount_path)
            logger.info(f"Created {mount_path}")
            return MountSpec(
                mode=MountMode.REMOTE_HOST,
                command=nfsv3_mount_command(remote, mount_path),
                mount_path=mount_path,
                share_name=share_name,
            )

        raise NamespaceExhaustedError(
            f"No unused mount path under {self.mount_root} after {self.max_attempts} attempts"
        )
