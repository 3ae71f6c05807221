import os
import subprocess
from typing import Callable, Optional

from brew_provisioner.logging_service import LoggingService

log = LoggingService.get_logger(__name__)

# Called with (exit_code, error_output) when a command exits non-zero
ErrorCallback = Callable[[int, str], None]

def user() -> str:
    """
    Returns the name of the non-root user that invoked the tool.
    Under sudo this is SUDO_USER; otherwise the current USER.
    """
    return os.environ.get('SUDO_USER') or os.environ.get('USER', '')

class CommandLine:
    """Runs shell commands for the provisioning services."""

    def quietly(self, command: str):
        """Runs a command with all output discarded. The exit status is ignored."""
        log.debug(f"Running quietly: {command}")
        subprocess.run(command, shell=True, stdout=subprocess.DEVNULL,
                       stderr=subprocess.DEVNULL, check=False)

    def quietly_as_user(self, command: str):
        """Runs a command as the invoking user with all output discarded."""
        self.quietly(f"sudo -u {user()} {command}")

    def passthru(self, command: str) -> int:
        """
        Runs a command with its output streamed straight to the terminal.
        Returns:
            int: The exit code of the command.
        """
        log.debug(f"Running (passthru): {command}")
        result = subprocess.run(command, shell=True, check=False)
        return result.returncode

    def run_as_user(self, command: str, on_error: Optional[ErrorCallback] = None) -> str:
        """Runs a command as the invoking user. See run()."""
        return self.run(f"sudo -u {user()} {command}", on_error)

    def run(self, command: str, on_error: Optional[ErrorCallback] = None) -> str:
        """
        Runs a command and captures its output.
        Args:
            command (str): The shell command line.
            on_error (callable, optional): Invoked with (exit_code, stderr) when the
                command exits non-zero. Anything it raises propagates to the caller.
        Returns:
            str: The captured standard output.
        """
        log.debug(f"Running: {command}")
        result = subprocess.run(command, shell=True, capture_output=True, text=True, check=False)

        if result.returncode != 0:
            log.debug(f"Command exited with status {result.returncode}: {command}")
            if on_error is not None:
                on_error(result.returncode, result.stderr)

        return result.stdout
