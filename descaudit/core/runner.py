"""
Subprocess Runner Module

This module launches external linters, captures what they print and
classifies the exit status of each run.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)


class RunOutcome(Enum):
    """How a linter run ended."""
    CLEAN = "clean"
    VIOLATIONS = "violations"
    EXECUTION_ERROR = "execution_error"


@dataclass
class RunCapture:
    """Exit status and output of a single linter invocation."""
    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.command)

    def __repr__(self):
        return f"RunCapture(command='{self.command_line}', returncode={self.returncode})"


def classify_outcome(returncode: Optional[int],
                     payload: Optional[str] = None,
                     expected: Tuple[int, ...] = (0, 1),
                     min_payload: int = 2) -> RunOutcome:
    """
    Classify a finished run.

    Args:
        returncode: Exit status, None if the process never reported one
        payload: Structured output to sanity-check, None in human-readable mode
        expected: Exit statuses that mean the linter itself worked
        min_payload: Shortest structured payload that can be trusted

    Returns:
        RunOutcome for the run
    """
    if returncode is None or returncode not in expected:
        return RunOutcome.EXECUTION_ERROR
    if payload is not None and len(payload) < min_payload:
        return RunOutcome.EXECUTION_ERROR
    if returncode == 0:
        return RunOutcome.CLEAN
    return RunOutcome.VIOLATIONS


class SubprocessRunner:
    """
    Runs external executables with environment overrides.

    Each call blocks until the process exits; there is no retry and no
    timeout.
    """

    def which(self, executable: str, path: Optional[str] = None) -> Optional[str]:
        """Locate an executable on PATH, or on the given search path."""
        return shutil.which(executable, path=path)

    def run(self,
            executable: str,
            args: Sequence[str],
            env: Optional[Dict[str, str]] = None,
            capture: bool = True) -> RunCapture:
        """
        Run an executable to completion.

        Args:
            executable: Name or path of the program
            args: Arguments passed after the executable
            env: Variables overriding the current environment
            capture: Capture stdout/stderr instead of letting them reach the terminal

        Returns:
            RunCapture with the exit status and any captured output
        """
        command = [str(executable)] + [str(arg) for arg in args]
        run_env = dict(os.environ)
        if env:
            run_env.update(env)

        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                capture_output=capture,
                text=True,
                env=run_env
            )
        except OSError as e:
            logger.error(f"Error running {executable}: {e}")
            return RunCapture(-1, "", str(e), command)

        return RunCapture(result.returncode, result.stdout or "", result.stderr or "", command)
