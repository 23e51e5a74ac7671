import logging
import subprocess
from typing import List, Optional

from blobnfs.exceptions import CommandError
from blobnfs.runner.models import CommandResult

logger = logging.getLogger(__name__)

# Shell convention for "command not found"
COMMAND_NOT_FOUND = 127


def run_command(args: List[str], input: Optional[str] = None, check: bool = True) -> CommandResult:
    """
    Run an external command and capture its outcome.

    A missing executable is reported as a failed result rather than an
    OSError, so callers only ever deal with CommandResult/CommandError.
    """
    logger.debug(f"Running command: {' '.join(args)}")
    try:
        proc = subprocess.run(args, input=input, capture_output=True, text=True)
        result = CommandResult(
            args=list(args),
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
    except FileNotFoundError as e:
        result = CommandResult(args=list(args), returncode=COMMAND_NOT_FOUND, stderr=str(e))

    if check and not result.ok:
        raise CommandError(
            f"Command '{' '.join(args)}' failed with exit code {result.returncode}: {result.diagnostic}",
            result,
        )
    return result
