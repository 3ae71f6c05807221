import os
from pathlib import Path

from brew_provisioner.logging_service import LoggingService

log = LoggingService.get_logger(__name__)

class Filesystem:
    """Thin filesystem accessor so services can be exercised against a fake in tests."""

    def is_dir(self, path) -> bool:
        return Path(path).is_dir()

    def exists(self, path) -> bool:
        return Path(path).exists()

    def is_link(self, path) -> bool:
        return Path(path).is_symlink()

    def read_link(self, path) -> str:
        """Returns the target of a symbolic link, as stored in the link."""
        return os.readlink(path)

    def ensure_dir_exists(self, path, mode: int = 0o755):
        """Creates the directory (and its parents) if it is missing."""
        directory = Path(path)
        if not directory.is_dir():
            log.debug(f"Creating directory {directory}")
            directory.mkdir(mode=mode, parents=True, exist_ok=True)

    def get(self, path) -> str:
        with open(path, 'r') as f:
            return f.read()

    def put(self, path, contents: str):
        """Writes contents to a file, replacing whatever was there."""
        log.debug(f"Writing {len(contents)} characters to {path}")
        with open(path, 'w') as f:
            f.write(contents)
