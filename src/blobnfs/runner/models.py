from typing import List
from pydantic import BaseModel

class CommandResult(BaseModel):
    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """Best available text explaining the outcome."""
        return (self.stderr or self.stdout).strip()
