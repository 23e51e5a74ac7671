import logging
import os
from typing import List, Optional

from blobnfs.exceptions import CommandError, ShareExistsError, ShareOpsError
from blobnfs.shares.identity import ShareIdentityDeriver
from blobnfs.shares.models import MountSpec, SMBShare, TeardownOutcome, TeardownResult
from blobnfs.shares.nfs import NFSMounter
from blobnfs.shares.smb import SMBManager

logger = logging.getLogger(__name__)


class ShareLifecycleManager:
    """
    Mounts NFSv3 exports and re-exports them through samba, and undoes it.

    Ordering is fixed: the NFS mount happens before the share is added, and
    samba is reloaded after a share is removed and before the unmount.
    """

    def __init__(self, deriver: Optional[ShareIdentityDeriver] = None,
                 mounter: Optional[NFSMounter] = None, smb: Optional[SMBManager] = None):
        self.deriver = deriver or ShareIdentityDeriver()
        self.mounter = mounter or NFSMounter()
        self.smb = smb or SMBManager()

    def mount_and_export(self, mode, parameter: str, result_file: Optional[str] = None) -> MountSpec:
        spec = self.deriver.plan(mode, parameter)
        logger.info(f"Mount command is: {' '.join(spec.command)}")

        if self.smb.share_exists(spec.share_name):
            raise ShareExistsError(
                f"Share '{spec.share_name}' already exists, unmount it before mounting {spec.mount_path} again."
            )
        self.deriver.ensure_mount_point(spec)

        self.mounter.mount(spec)
        logger.info("Done NFS mounting.")

        try:
            self.smb.export_share(spec.share_name, spec.mount_path)
        except CommandError:
            logger.error(
                f"Share {spec.share_name} was written to smb.conf but reloading samba failed; "
                f"NFS share stays mounted at {spec.mount_path}"
            )
            raise
        except ShareOpsError:
            logger.error(
                f"NFS share is mounted at {spec.mount_path} but could not be exported as {spec.share_name}"
            )
            raise
        logger.info("Done Samba exporting.")

        if result_file:
            with open(result_file, "w") as f:
                f.write(f"{spec.share_name}\n")
            logger.info(f"Saved the share name ({spec.share_name}) to {result_file}")
        return spec

    def unmount_share(self, share_name: str) -> TeardownResult:
        removed = self.smb.remove_share(share_name)
        if removed is None:
            return TeardownResult(
                share_name=share_name,
                outcome=TeardownOutcome.NOT_FOUND,
                message=f"No SMB share found for {share_name}.",
            )

        mount_path = removed.path or ""
        if not mount_path:
            return self._report(share_name, TeardownOutcome.INVALID_PATH, mount_path,
                                f"Share {share_name} has no mount path")
        if not mount_path.startswith("/"):
            return self._report(share_name, TeardownOutcome.INVALID_PATH, mount_path,
                                f"Mount point {mount_path} is not a path")
        if not os.path.isdir(mount_path):
            return self._report(share_name, TeardownOutcome.MISSING_MOUNT_POINT, mount_path,
                                f"Mount point {mount_path} does not exist")

        # TODO: queue a background retry when umount reports the target busy
        self.mounter.unmount(mount_path)
        return TeardownResult(
            share_name=share_name,
            outcome=TeardownOutcome.UNMOUNTED,
            path=mount_path,
            message=f"Unmounted NFS mount at: {mount_path}",
        )

    def list_shares(self) -> List[SMBShare]:
        shares = self.smb.list_shares()
        for share in shares:
            if share.path.startswith("/"):
                share.mounted = self.mounter.is_mounted(share.path)
        return shares

    def _report(self, share_name, outcome, path, message) -> TeardownResult:
        logger.warning(message)
        return TeardownResult(share_name=share_name, outcome=outcome, path=path or None, message=message)
