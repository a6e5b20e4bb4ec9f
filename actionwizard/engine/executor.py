"""Executor interface - all external commands go here."""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from .errors import SpawnFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of one finished command."""

    command: str
    exit_code: int
    stdout: str = ''
    stderr: str = ''

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class Executor(ABC):
    """Interface for running resolved command lines."""

    @abstractmethod
    def execute(self, command: str, cwd: Optional[str] = None, capture: bool = True) -> ExecutionOutcome:
        """Run a command and wait for it to finish.

        Args:
            command: Fully resolved command line
            cwd: Working directory, None for the current one
            capture: Capture stdout/stderr instead of streaming them

        Returns:
            ExecutionOutcome, also for non-zero exit codes

        Raises:
            SpawnFailed: The command could not be launched
        """
        pass


class ShellExecutor(Executor):
    """Real implementation - runs commands through the system shell."""

    def __init__(self, verbose: bool = False):
        """Initialize with optional verbose mode.

        Args:
            verbose: If True, log every command and its working directory
        """
        self.verbose = verbose
        # Check for verbose environment variable as well
        if os.environ.get('ACTIONWIZARD_VERBOSE'):
            self.verbose = True

    def execute(self, command: str, cwd: Optional[str] = None, capture: bool = True) -> ExecutionOutcome:
        if self.verbose:
            logger.debug("Running command: %s", command)
            logger.debug("Working directory: %s", cwd or os.getcwd())

        if cwd and not os.path.isdir(cwd):
            raise SpawnFailed(command, f"working directory does not exist: {cwd}")

        try:
            if capture:
                result = subprocess.run(command, shell=True, cwd=cwd, capture_output=True, text=True, encoding='utf-8', errors='replace')
            else:
                # Let output flow to the terminal
                result = subprocess.run(command, shell=True, cwd=cwd, text=True, encoding='utf-8', errors='replace')
        except OSError as e:
            logger.error("Could not launch %r: %s", command, e)
            raise SpawnFailed(command, str(e)) from e

        if self.verbose:
            logger.debug("Command exited with %d", result.returncode)

        return ExecutionOutcome(
            command=command,
            exit_code=result.returncode,
            stdout=result.stdout or '',
            stderr=result.stderr or '',
        )


class DryRunExecutor(Executor):
    """Reports commands without running them."""

    def __init__(self):
        self.commands: List[str] = []

    def execute(self, command: str, cwd: Optional[str] = None, capture: bool = True) -> ExecutionOutcome:
        logger.info("[dry-run] %s%s", command, f" (in {cwd})" if cwd else '')
        self.commands.append(command)
        return ExecutionOutcome(command=command, exit_code=0)


class MockExecutor(Executor):
    """Mock for testing - records calls."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.responses: Dict[str, dict] = {}  # command -> {'stdout', 'stderr', 'returncode'}
        self.spawn_failures: Set[str] = set()

    def execute(self, command: str, cwd: Optional[str] = None, capture: bool = True) -> ExecutionOutcome:
        self.calls.append(('execute', command, cwd, capture))

        if command in self.spawn_failures:
            raise SpawnFailed(command, "No such file or directory")

        response = self.responses.get(command, {})
        return ExecutionOutcome(
            command=command,
            exit_code=response.get('returncode', 0),
            stdout=response.get('stdout', ''),
            stderr=response.get('stderr', ''),
        )

    @property
    def commands(self) -> List[str]:
        return [call[1] for call in self.calls]
