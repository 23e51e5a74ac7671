import fcntl
import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from blobnfs.config.settings import config
from blobnfs.shares.models import BlockRange, ExportBlock

logger = logging.getLogger(__name__)

GLOBAL_SECTION = "global"


@dataclass
class ConfigLine:
    """A line that belongs to no section header or attribute (blank, comment, junk)."""
    text: str


@dataclass
class HeaderLine(ConfigLine):
    name: str = ""


@dataclass
class AttributeLine(ConfigLine):
    key: str = ""
    value: str = ""


def parse_line(text: str) -> ConfigLine:
    stripped = text.strip()
    if stripped.startswith("[") and stripped.endswith("]") and len(stripped) > 1:
        return HeaderLine(text=text, name=stripped[1:-1])
    if "=" in stripped and not stripped.startswith(("#", ";")):
        key, value = stripped.split("=", 1)
        return AttributeLine(text=text, key=key.strip(), value=value.strip())
    return ConfigLine(text=text)


def format_attribute(key: str, value: str) -> AttributeLine:
    return AttributeLine(text=f"{key} = {value}", key=key, value=value)


class SmbConf:
    """
    Line-preserving view of smb.conf.

    The file is parsed once into typed lines that keep their original text,
    so unrelated sections and operator edits are written back untouched.
    Line numbers used by the block helpers are 1-based and inclusive.
    """

    def __init__(self, path: Optional[str] = None, lock_path: Optional[str] = None):
        self.path = path or config.smb_conf_path
        self.lock_path = lock_path or config.lock_path
        self.lines: List[ConfigLine] = []

    def load(self) -> "SmbConf":
        if not os.path.exists(self.path):
            logger.info(f"Samba configuration {self.path} not found, starting empty")
            self.lines = []
            return self

        with open(self.path, "r") as f:
            self.lines = [parse_line(line) for line in f.read().splitlines()]
        return self

    def save(self):
        """Write the file atomically next to the original, keeping its mode."""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix=".smb.conf.", dir=directory)
        try:
            with os.fdopen(fd, "w") as f:
                f.write(self.text)
            if os.path.exists(self.path):
                shutil.copymode(self.path, tmp_path)
            else:
                os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    @property
    def text(self) -> str:
        if not self.lines:
            return ""
        return "\n".join(line.text for line in self.lines) + "\n"

    @contextmanager
    def locked(self) -> Iterator["SmbConf"]:
        """Hold an exclusive advisory lock for a read-modify-write cycle."""
        lock_dir = os.path.dirname(os.path.abspath(self.lock_path))
        os.makedirs(lock_dir, exist_ok=True)
        with open(self.lock_path, "w") as lf:
            fcntl.flock(lf, fcntl.LOCK_EX)
            try:
                yield self.load()
            finally:
                fcntl.flock(lf, fcntl.LOCK_UN)

    def find_last_block(self, name: str) -> BlockRange:
        """
        Locate the last section named `name`.

        A new occurrence always restarts the range, any section header closes
        an open range, and a range still open at end of file ends on the last
        line.
        """
        result = BlockRange()
        inside = False
        for linenum, line in enumerate(self.lines, start=1):
            if isinstance(line, HeaderLine) and line.name == name:
                inside = True
                result = BlockRange(start=linenum, end=0, found=True)
            elif inside and isinstance(line, HeaderLine):
                inside = False
                result.end = linenum - 1

        if inside:
            result.end = len(self.lines)
        return result

    def read_attribute(self, start: int, end: int, key: str) -> Optional[str]:
        value = None
        for line in self.lines[max(start, 1) - 1:end]:
            if isinstance(line, AttributeLine) and line.key == key:
                value = line.value
        return value

    def delete_range(self, start: int, end: int) -> bool:
        if start < 1 or end < start:
            logger.info(f"No section to remove between lines {start} and {end}")
            return False
        del self.lines[start - 1:end]
        return True

    def append_block(self, name: str, attributes: Dict[str, str]):
        self.lines.append(HeaderLine(text=f"[{name}]", name=name))
        for key, value in attributes.items():
            self.lines.append(format_attribute(key, value))

    def blocks(self) -> List[ExportBlock]:
        """All sections except [global]; a repeated name keeps its last block."""
        blocks: Dict[str, ExportBlock] = {}
        current = None
        for line in self.lines:
            if isinstance(line, HeaderLine):
                current = ExportBlock(name=line.name)
                if line.name.lower() != GLOBAL_SECTION:
                    blocks.pop(line.name, None)
                    blocks[line.name] = current
            elif isinstance(line, AttributeLine) and current is not None:
                current.attributes[line.key] = line.value
        return list(blocks.values())

    def insert_attribute(self, key: str, value: str, section: str = GLOBAL_SECTION) -> bool:
        """
        Insert `key = value` right after the [section] header.

        Returns False without changing anything when the section already has
        the key, so setup steps can be repeated.
        """
        block = self.find_last_block(section)
        if not block.found:
            raise ValueError(f"Section [{section}] not found in {self.path}")

        if self.read_attribute(block.start, block.end, key) is not None:
            logger.info(f"[{section}] already defines '{key}', leaving it unchanged")
            return False

        self.lines.insert(block.start, format_attribute(key, value))
        return True
