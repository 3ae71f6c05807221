import re

from rich.console import Console
from rich.markup import escape

# --- Messages ---
INSTALLING_FORMULA_INFO = "<info>[{}] is not installed, installing it now via Brew...</info> 🍻"
INSTALL_FAILED_ERROR = "Brew was unable to install [{}]."
LINKED_RUNTIME_UNKNOWN_ERROR = "Unable to determine linked PHP."
ALREADY_INSTALLED_INFO = "<info>[{}] is already installed.</info>"
TAPPED_INFO = "<info>Tapped [{}].</info>"
SERVICE_RESTARTED_INFO = "<info>Restarted [{}].</info>"
SERVICE_STOPPED_INFO = "<info>Stopped [{}].</info>"
SUDOERS_WRITTEN_INFO = "<info>Wrote sudoers entry to [{}].</info>"
NO_SUPPORTED_RUNTIME_WARNING = "<comment>No supported PHP version is installed via Brew.</comment>"

# Symfony-console style tags used in the messages above, mapped to rich styles
TAG_STYLES = {
    "info": "green",
    "comment": "yellow",
    "error": "bold red",
}

_TAG_PATTERN = re.compile(r"<(/?)(info|comment|error)>")

console = Console(highlight=False)

def to_markup(message: str) -> str:
    """Translates <info>/<comment>/<error> tags into rich markup, escaping everything else."""
    parts = []
    position = 0
    for match in _TAG_PATTERN.finditer(message):
        parts.append(escape(message[position:match.start()]))
        closing, tag = match.groups()
        parts.append(f"[/{TAG_STYLES[tag]}]" if closing else f"[{TAG_STYLES[tag]}]")
        position = match.end()
    parts.append(escape(message[position:]))
    return "".join(parts)

def output(message=""):
    """Writes a user-visible message to the console."""
    console.print(to_markup(str(message)))

def display_messages(messages):
    """Helper to output multiple messages."""
    if isinstance(messages, str):
        output(messages)
    elif isinstance(messages, list):
        for msg in messages:
            output(msg)
