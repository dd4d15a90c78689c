import logging
import sys

_NOISY_LOGGERS = ("httpx", "httpcore")


class Log:
    """Application-wide logging facade.

    Every module logs through this class so that the CLI configures a single
    handler and level for the whole package.
    """

    _logger: logging.Logger = logging.getLogger("billboard_reporter")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Attach a stdout handler at the given level.

        The HTTP client libraries log every request at INFO; they are capped
        at WARNING unless the application itself runs at DEBUG.
        """
        level = log_level.upper()
        cls._logger.setLevel(level)
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(
                logging.DEBUG if level == "DEBUG" else logging.WARNING
            )

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
