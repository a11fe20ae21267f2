import logging
import sys

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class KeyValueFormatter(logging.Formatter):
    """Appends ``extra`` fields to the line as sorted ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES
        }
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        return f"{line} {pairs}"


class Log:
    """Service-wide logging facade over the ``docsummary`` logger.

    Keyword arguments become structured fields, e.g.
    ``Log.info("Stored blob", document_id=doc.id)``. Field names must not
    clash with LogRecord attributes such as ``filename`` or ``module``.
    """

    _logger: logging.Logger = logging.getLogger("docsummary")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a stdout handler once per process."""
        cls._logger.setLevel(log_level.upper())
        cls._logger.propagate = False
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(KeyValueFormatter("%(asctime)s [%(levelname)s] %(message)s"))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._logger.info(message, extra=fields)

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._logger.warning(message, extra=fields)

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        cls._logger.error(message, extra=fields)

    @classmethod
    def exception(cls, message: str, **fields: object) -> None:
        """Log at error level with the traceback of the exception being handled."""
        cls._logger.exception(message, extra=fields)

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._logger.debug(message, extra=fields)
