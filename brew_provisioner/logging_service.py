import logging
from rich.logging import RichHandler # Rich gives readable console logs during provisioning runs

class LoggingService:
    _loggers = {}

    @staticmethod
    def get_logger(name: str, level: int = logging.INFO):
        """
        Retrieves a logger instance. If it doesn't exist, it's created and configured.
        Args:
            name (str): The name for the logger (e.g., __name__ of the calling module).
            level (int): The logging level (e.g., logging.INFO, logging.DEBUG).
        Returns:
            logging.Logger: The configured logger instance.
        """
        if name in LoggingService._loggers:
            return LoggingService._loggers[name]

        logger = logging.getLogger(name)
        logger.setLevel(level)

        LoggingService._loggers[name] = logger
        return logger

    @staticmethod
    def set_level(level: int):
        """Applies a level to every logger handed out so far (used by --verbose)."""
        for logger in LoggingService._loggers.values():
            logger.setLevel(level)

    @staticmethod
    def setup_root_logger(level: int = logging.INFO, handler=None):
        """
        Configures the root logger.
        Args:
            level (int): The logging level for the root logger.
            handler (logging.Handler, optional): A specific handler to add to the root logger.
                                                If None, a RichHandler is used.
        """
        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        # Drop handlers from earlier calls so messages are not printed twice
        for h in root_logger.handlers[:]:
            root_logger.removeHandler(h)
            h.close()

        if handler is None:
            rich_handler = RichHandler(rich_tracebacks=True, markup=True, show_path=False)
            rich_handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
            root_logger.addHandler(rich_handler)
        else:
            root_logger.addHandler(handler)

        LoggingService.set_level(level)
        logging.debug(f"Root logger configured with level {logging.getLevelName(level)}.")
