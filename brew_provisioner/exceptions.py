from brew_provisioner import cli_interface

class BrewProvisionerError(Exception):
    """Base class for failures that abort the current provisioning step."""

class InstallationFailed(BrewProvisionerError):
    """Raised when `brew install` exits non-zero."""

    def __init__(self, formula: str, exit_code: int | None = None, error_output: str = ""):
        super().__init__(cli_interface.INSTALL_FAILED_ERROR.format(formula))
        self.formula = formula
        self.exit_code = exit_code
        self.error_output = error_output

class RuntimeResolutionFailed(BrewProvisionerError):
    """Raised when the linked PHP symlink is missing or points at an unsupported build."""

    def __init__(self, message: str = cli_interface.LINKED_RUNTIME_UNKNOWN_ERROR):
        super().__init__(message)
