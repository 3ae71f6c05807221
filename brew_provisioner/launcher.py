import argparse
import logging
import sys

from brew_provisioner import cli_interface
from brew_provisioner.cli_interface import output
from brew_provisioner.command_line import CommandLine
from brew_provisioner.config_service import ConfigurationService
from brew_provisioner.exceptions import BrewProvisionerError
from brew_provisioner.filesystem import Filesystem
from brew_provisioner.logging_service import LoggingService
from brew_provisioner.package_service import PackageServiceManager

log = LoggingService.get_logger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="brew-provisioner",
                                     description="Install Homebrew formulas and manage brew services")
    parser.add_argument('--verbose', '-v', action='store_true', help="Log every command that is run")
    parser.add_argument('--version', action='store_true', help="Print the application version and exit")

    subparsers = parser.add_subparsers(dest='command')

    install = subparsers.add_parser('install', help="Install a formula unless it is already installed")
    install.add_argument('formula')
    install.add_argument('--option', dest='options', action='append', default=[],
                         help="Extra argument passed to brew install (repeatable)")
    install.add_argument('--tap', dest='taps', action='append', default=[],
                         help="Tap to register before installing (repeatable)")
    install.add_argument('--force', action='store_true', help="Install even if the formula is listed")

    installed = subparsers.add_parser('installed', help="Exit 0 if the formula is installed")
    installed.add_argument('formula')

    tap = subparsers.add_parser('tap', help="Register one or more taps")
    tap.add_argument('taps', nargs='+')

    restart = subparsers.add_parser('restart', help="Restart brew services")
    restart.add_argument('services', nargs='+')

    stop = subparsers.add_parser('stop', help="Stop brew services")
    stop.add_argument('services', nargs='+')

    subparsers.add_parser('linked-php', help="Print the linked PHP build")
    subparsers.add_parser('restart-php', help="Restart the service of the linked PHP build")
    subparsers.add_parser('has-php', help="Exit 0 if a supported PHP build is installed")
    subparsers.add_parser('sudoers', help="Allow the admin group to run brew as root without a password")

    return parser

def run_command(args, brew: PackageServiceManager) -> int:
    """Dispatches a parsed command line to the manager. Returns the exit status."""
    if args.command == 'install':
        if args.force:
            brew.install_or_fail(args.formula, args.options, args.taps)
        elif not brew.ensure_installed(args.formula, args.options, args.taps):
            output(cli_interface.ALREADY_INSTALLED_INFO.format(args.formula))
        return 0

    if args.command == 'installed':
        return 0 if brew.installed(args.formula) else 1

    if args.command == 'tap':
        brew.tap(args.taps)
        cli_interface.display_messages([cli_interface.TAPPED_INFO.format(t) for t in args.taps])
        return 0

    if args.command == 'restart':
        brew.restart_service(args.services)
        cli_interface.display_messages([cli_interface.SERVICE_RESTARTED_INFO.format(s) for s in args.services])
        return 0

    if args.command == 'stop':
        brew.stop_service(args.services)
        cli_interface.display_messages([cli_interface.SERVICE_STOPPED_INFO.format(s) for s in args.services])
        return 0

    if args.command == 'linked-php':
        output(brew.linked_runtime())
        return 0

    if args.command == 'restart-php':
        runtime = brew.restart_linked_runtime()
        output(cli_interface.SERVICE_RESTARTED_INFO.format(runtime))
        return 0

    if args.command == 'has-php':
        if brew.has_supported_runtime():
            return 0
        output(cli_interface.NO_SUPPORTED_RUNTIME_WARNING)
        return 1

    if args.command == 'sudoers':
        brew.create_privilege_entry()
        output(cli_interface.SUDOERS_WRITTEN_INFO.format(brew.sudoers_entry_path()))
        return 0

    raise ValueError(f"Unknown command: {args.command}")

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    LoggingService.setup_root_logger(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.version:
        app_version = ConfigurationService.get_application_version()
        output(app_version or "unknown")
        return 0

    if args.command is None:
        parser.print_help()
        return 2

    brew = PackageServiceManager(CommandLine(), Filesystem(), ConfigurationService())

    try:
        return run_command(args, brew)
    except BrewProvisionerError as e:
        log.error(str(e))
        return 1

if __name__ == '__main__':
    sys.exit(main())
