from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

class MountMode(str, Enum):
    COMMAND = "command"
    REMOTE_HOST = "remotehost"

class MountSpec(BaseModel):
    mode: MountMode
    command: List[str]
    mount_path: str
    share_name: str

class BlockRange(BaseModel):
    """1-based, inclusive line range of a section in smb.conf."""
    start: int = 0
    end: int = 0
    found: bool = False

class ExportBlock(BaseModel):
    name: str
    attributes: Dict[str, str] = Field(default_factory=dict)

    @property
    def path(self) -> Optional[str]:
        return self.attributes.get("path")

class SMBShare(BaseModel):
    name: str
    path: str
    comment: Optional[str] = None
    read_only: bool = False
    browsable: bool = True
    guest_ok: bool = False
    mounted: bool = False

class TeardownOutcome(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_PATH = "invalid_path"
    MISSING_MOUNT_POINT = "missing_mount_point"
    UNMOUNTED = "unmounted"

class TeardownResult(BaseModel):
    share_name: str
    outcome: TeardownOutcome
    path: Optional[str] = None
    message: str = ""
