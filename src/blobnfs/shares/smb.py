import logging
import shutil
from typing import List, Optional

from blobnfs.config.settings import config
from blobnfs.exceptions import CommandError, ShareExistsError
from blobnfs.runner.command import COMMAND_NOT_FOUND, run_command
from blobnfs.shares.models import ExportBlock, SMBShare
from blobnfs.shares.smbconf import SmbConf

logger = logging.getLogger(__name__)


class SMBManager:
    def __init__(self, conf: Optional[SmbConf] = None, service_names: Optional[List[str]] = None,
                 reload_action: Optional[str] = None, comment: Optional[str] = None):
        self.conf = conf or SmbConf()
        self.service_names = service_names or config.smb_service_names
        self.reload_action = reload_action or config.smb_reload_action
        self.comment = comment or config.share_comment

    def check_installed(self):
        """Check if samba is installed."""
        return shutil.which("smbd") is not None or shutil.which("samba") is not None

    def _str_to_bool(self, val: str) -> bool:
        return val.lower() in ('yes', 'true', '1', 'on')

    def share_exists(self, name: str) -> bool:
        return self.conf.load().find_last_block(name).found

    def list_shares(self) -> List[SMBShare]:
        """List all samba shares."""
        shares = []
        for block in self.conf.load().blocks():
            attrs = block.attributes
            shares.append(SMBShare(
                name=block.name,
                path=attrs.get('path', 'N/A'),
                comment=attrs.get('comment', ''),
                read_only=self._str_to_bool(attrs.get('read only', 'yes')),
                browsable=self._str_to_bool(attrs.get('browseable', attrs.get('browsable', 'yes'))),
                guest_ok=self._str_to_bool(attrs.get('guest ok', 'no'))
            ))
        return shares

    def export_share(self, name: str, path: str):
        """Append a share section for `path` and reload samba."""
        with self.conf.locked() as conf:
            if conf.find_last_block(name).found:
                raise ShareExistsError(f"Share '{name}' already exists.")

            conf.append_block(name, {
                'comment': self.comment,
                'path': path,
                'read only': 'no',
                'guest ok': 'yes',
                'browseable': 'yes',
            })
            conf.save()
            logger.info(f"Added SMB share {name} for {path}")
            self.reload_service()

    def remove_share(self, name: str) -> Optional[ExportBlock]:
        """
        Remove the last section named `name` and reload samba.

        Returns the removed block, or None when there was no such share. The
        reload happens here so the mount point is released before any unmount.
        """
        with self.conf.locked() as conf:
            block = conf.find_last_block(name)
            if not block.found:
                logger.info(f"No SMB share found for {name}.")
                return None

            removed = ExportBlock(name=name)
            path = conf.read_attribute(block.start, block.end, 'path')
            if path is not None:
                removed.attributes['path'] = path

            conf.delete_range(block.start, block.end)
            conf.save()
            logger.info(f"Removed SMB share with: {name}.")
            self.reload_service()
            return removed

    def restart_service(self):
        """Restart the samba service."""
        self._manage_service("restart")

    def reload_service(self):
        """Make samba re-read smb.conf."""
        self._manage_service(self.reload_action)

    def get_status(self):
        """Get the status of the samba service."""
        for service in self.service_names:
            result = run_command(["systemctl", "is-active", service], check=False)
            if result.returncode == COMMAND_NOT_FOUND:
                break
            status = result.stdout.strip()
            if status and status != "unknown":
                return status
        return "not found"

    def _manage_service(self, action):
        """
        Manage the samba service state.

        Tries each known unit name with systemctl, falling back to the
        `service` wrapper on guests booted without systemd.
        """
        last = None
        for service in self.service_names:
            result = run_command(["systemctl", action, service], check=False)
            if result.returncode == COMMAND_NOT_FOUND:
                result = run_command(["service", service, action], check=False)
            if result.ok:
                logger.debug(f"Samba service {service}: {action} done")
                return result
            last = result

        raise CommandError(
            f"Could not {action} samba service (tried {', '.join(self.service_names)}): "
            f"{last.diagnostic if last else 'no service names configured'}",
            last,
        )
