from pathlib import PurePosixPath
from typing import Iterable, Optional, Sequence

from brew_provisioner import cli_interface
from brew_provisioner.cli_interface import output
from brew_provisioner.command_line import CommandLine, user
from brew_provisioner.config_service import ConfigurationService, DEFAULT_RUNTIME_CANDIDATES
from brew_provisioner.exceptions import InstallationFailed, RuntimeResolutionFailed
from brew_provisioner.filesystem import Filesystem
from brew_provisioner.logging_service import LoggingService

log = LoggingService.get_logger(__name__)

SUDOERS_ENTRY_TEMPLATE = "Cmnd_Alias BREW = {binary} *\n%{group} ALL=(root) NOPASSWD: BREW\n"

def _names(values: Iterable[str], argument: str) -> list:
    # A bare string would otherwise be iterated one character at a time
    if isinstance(values, str):
        raise TypeError(f"{argument} must be a sequence of names, not a str")
    return list(values)

class PackageServiceManager:
    """
    Installs Homebrew formulas, registers taps, drives `brew services` and
    resolves which PHP build is currently linked.
    """

    def __init__(self, cli: CommandLine, files: Filesystem, config_service: Optional[ConfigurationService] = None):
        """
        Args:
            cli (CommandLine): Runs the brew commands.
            files (Filesystem): Reads the runtime symlink and writes the sudoers entry.
            config_service (ConfigurationService, optional): Deployment paths and the
                runtime candidate list. A default instance is created when omitted.
        """
        self.cli = cli
        self.files = files
        self.config = config_service if config_service else ConfigurationService()

        self.brew_binary = self.config.get('brew', 'binary_path', default='/usr/local/bin/brew')
        self.runtime_link_path = self.config.get('runtime', 'link_path', default='/usr/local/bin/php')
        self.runtime_candidates = tuple(self.config.get('runtime', 'candidates', default=DEFAULT_RUNTIME_CANDIDATES))
        self.sudoers_directory = self.config.get('sudoers', 'directory', default='/etc/sudoers.d')
        self.sudoers_file_name = self.config.get('sudoers', 'file_name', default='brew')
        self.sudoers_group = self.config.get('sudoers', 'group', default='admin')

    # --- Formulas ---

    def installed(self, formula: str) -> bool:
        """
        Determines if the given formula is installed.
        grep filters by substring, so the result is matched against whole lines:
        `php7` is not installed just because `php71` is.
        """
        listing = self.cli.run_as_user(f"brew list | grep {formula}")
        entries = [line.strip() for line in listing.splitlines() if line.strip()]
        return formula in entries

    def has_supported_runtime(self) -> bool:
        """Determines if any supported PHP build is installed via Brew."""
        return any(self.installed(candidate) for candidate in self.runtime_candidates)

    def ensure_installed(self, formula: str, options: Optional[Sequence[str]] = None,
                         taps: Optional[Sequence[str]] = None):
        """
        Installs the formula unless it is already installed.
        Returns:
            bool: True if an install was run, False if the formula was already present.
        """
        if self.installed(formula):
            log.debug(f"[{formula}] is already installed, skipping.")
            return False

        self.install_or_fail(formula, options, taps)
        return True

    def install_or_fail(self, formula: str, options: Optional[Sequence[str]] = None,
                        taps: Optional[Sequence[str]] = None):
        """
        Installs the formula, registering any taps it needs first.
        Raises:
            InstallationFailed: If `brew install` exits non-zero. The captured
                error output is shown to the user before raising.
        """
        options = _names(options or [], "options")
        taps = _names(taps or [], "taps")

        if taps:
            self.tap(taps)

        output(cli_interface.INSTALLING_FORMULA_INFO.format(formula))

        def on_error(exit_code, error_output):
            output(error_output)
            log.error(f"brew install {formula} exited with status {exit_code}")
            raise InstallationFailed(formula, exit_code, error_output)

        command = f"brew install {formula} {' '.join(options)}".strip()
        self.cli.run_as_user(command, on_error)

    def tap(self, formulas: Sequence[str]):
        """Registers each tap, in order, as the invoking (non-root) user."""
        for formula in _names(formulas, "formulas"):
            self.cli.passthru(f"sudo -u {user()} brew tap {formula}")

    # --- Services ---

    def restart_service(self, services: Sequence[str]):
        """Restarts the given Homebrew services. Failures are not reported."""
        for service in _names(services, "services"):
            self.cli.quietly(f"sudo brew services restart {service}")

    def stop_service(self, services: Sequence[str]):
        """Stops the given Homebrew services. Failures are not reported."""
        for service in _names(services, "services"):
            self.cli.quietly(f"sudo brew services stop {service}")

    # --- Linked runtime ---

    def linked_runtime(self) -> str:
        """
        Determines which PHP build is linked in Homebrew by inspecting where
        the php symlink points. Candidates are tested newest first and the
        first one contained in the link target wins.
        Raises:
            RuntimeResolutionFailed: If the path is not a symlink or its target
                matches none of the supported builds.
        """
        if not self.files.is_link(self.runtime_link_path):
            raise RuntimeResolutionFailed()

        resolved_path = self.files.read_link(self.runtime_link_path)

        for candidate in self.runtime_candidates:
            if candidate in resolved_path:
                log.debug(f"{self.runtime_link_path} -> {resolved_path} resolved to {candidate}")
                return candidate

        raise RuntimeResolutionFailed()

    def restart_linked_runtime(self):
        """Restarts the PHP-FPM service of the linked PHP build and returns its name."""
        runtime = self.linked_runtime()
        self.restart_service([runtime])
        return runtime

    # --- sudoers ---

    def sudoers_entry_path(self) -> str:
        return str(PurePosixPath(self.sudoers_directory) / self.sudoers_file_name)

    def create_privilege_entry(self):
        """Writes the sudoers.d entry that lets the admin group run brew as root without a password."""
        self.files.ensure_dir_exists(self.sudoers_directory)
        self.files.put(
            self.sudoers_entry_path(),
            SUDOERS_ENTRY_TEMPLATE.format(binary=self.brew_binary, group=self.sudoers_group),
        )
