"""
Command execution for the AppArmor loader helper

The loader talks to apparmor_parser through a CommandRunner so that argument
construction and error wrapping can be exercised without spawning processes.
"""

import signal
import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol

logger = logging.getLogger('snapmac.runner')


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one helper invocation"""
    argv: List[str]
    returncode: Optional[int]  # None when the command could not be started
    output: str = ""           # combined stdout and stderr
    start_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and self.start_error is None

    @property
    def error(self) -> Optional[str]:
        """Describe the failure, or None on success"""
        if self.start_error is not None:
            return self.start_error
        if self.returncode == 0:
            return None
        if self.returncode is None:
            return "command was not started"
        if self.returncode < 0:
            try:
                name = signal.strsignal(-self.returncode)
            except ValueError:
                name = None
            return f"signal: {(name or str(-self.returncode)).lower()}"
        return f"exit status {self.returncode}"


class CommandRunner(Protocol):
    """Anything that can run a command and report its combined output"""

    def run(self, argv: List[str]) -> CommandResult:
        ...


class SubprocessRunner:
    """Run commands with subprocess, blocking until the child exits"""

    def run(self, argv: List[str]) -> CommandResult:
        logger.debug(f"Running {' '.join(argv)}")
        try:
            proc = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.error(f"Cannot start {argv[0]}: {e}")
            return CommandResult(argv=list(argv), returncode=None, start_error=str(e))

        output = proc.stdout.decode('utf-8', errors='replace')
        return CommandResult(argv=list(argv), returncode=proc.returncode, output=output)
