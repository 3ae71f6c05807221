import yaml
import logging
from pathlib import Path

log = logging.getLogger(__name__)

VERSION_FILE_NAME = "VERSION"

# Supported PHP builds, newest first. The order is the tie-break used when
# resolving the linked runtime.
DEFAULT_RUNTIME_CANDIDATES = ["php71", "php70", "php56", "php55"]

class ConfigurationService:
    _config = None
    _config_path = None

    def __init__(self, config_file_name="config.yaml", app_name="brew_provisioner"):
        """
        Initializes the ConfigurationService.
        Args:
            config_file_name (str): The name of the configuration file.
            app_name (str): The name of the application, used for the home directory config path.
        """
        self._determine_config_path(config_file_name, app_name)
        self._load_config()

    def _determine_config_path(self, config_file_name, app_name):
        """Determines the config path, checking the working directory first, then the user's home app directory."""
        local_config_path = Path(config_file_name)

        home_config_dir = Path.home() / f".{app_name.lower().replace(' ', '_')}"
        home_config_path = home_config_dir / config_file_name

        if local_config_path.exists():
            self._config_path = local_config_path
            log.info(f"Using local configuration file: {self._config_path}")
        else:
            self._config_path = home_config_path
            log.debug(f"Local config not found. Using home directory configuration path: {self._config_path}")
            home_config_dir.mkdir(parents=True, exist_ok=True)

    def _load_config(self):
        """Loads configuration from the determined YAML file path."""
        try:
            if not self._config_path.exists():
                log.warning(f"Config file {self._config_path} not found. Loading default values.")
                self._config = self._get_default_config()
                self._save_default_config()
                return

            with open(self._config_path, 'r') as f:
                self._config = yaml.safe_load(f)
            if self._config is None: # Empty file
                log.warning(f"Config file {self._config_path} was empty or invalid. Loading default values.")
                self._config = self._get_default_config()
                self._save_default_config()
            else:
                log.debug(f"Configuration loaded from {self._config_path}")

        except (OSError, yaml.YAMLError) as e:
            log.error(f"Error loading configuration from {self._config_path}: {e}. Using default values.")
            self._config = self._get_default_config()
            if not self._config_path.exists():
                self._save_default_config()

    def _save_default_config(self):
        """Saves the current (default) configuration to the config path."""
        if self._config is None:
            log.error("Attempted to save an empty configuration. Defaulting first.")
            self._config = self._get_default_config()

        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, 'w') as f:
                yaml.dump(self._config, f, default_flow_style=False)
            log.info(f"Default configuration saved to {self._config_path}")
        except OSError as e:
            log.error(f"Error saving default configuration to {self._config_path}: {e}")

    def _get_default_config(self):
        """Returns a dictionary of default configuration values."""
        return {
            'brew': {
                'binary_path': '/usr/local/bin/brew',
            },
            'runtime': {
                'link_path': '/usr/local/bin/php',
                'candidates': list(DEFAULT_RUNTIME_CANDIDATES),
            },
            'sudoers': {
                'directory': '/etc/sudoers.d',
                'file_name': 'brew',
                'group': 'admin',
            },
        }

    def get_config(self):
        """Returns the entire configuration dictionary."""
        if self._config is None:
            self._load_config()
        return self._config

    def get(self, *keys, default=None):
        """
        Retrieves a configuration value using a sequence of keys.
        Args:
            *keys: A sequence of strings representing the path to the desired value.
            default: The value to return if the keys are not found.
        Returns:
            The configuration value or the default.
        """
        if self._config is None:
            self._load_config()

        value = self._config
        try:
            for key in keys:
                if isinstance(value, dict):
                    value = value[key]
                else: # Key path is deeper than the structure at this point
                    return default
            return value
        except KeyError:
            return default

    @staticmethod
    def get_application_version() -> str | None:
        """
        Reads the application version from the VERSION file at the project root,
        falling back to the current working directory.
        """
        version_file_path = Path(__file__).resolve().parent.parent / VERSION_FILE_NAME
        for candidate in (version_file_path, Path.cwd() / VERSION_FILE_NAME):
            if candidate.exists():
                with open(candidate, "r") as f:
                    version = f.read().strip()
                log.debug(f"Application version '{version}' loaded from {candidate}")
                return version

        log.error(f"Version file not found at: {version_file_path}")
        return None
