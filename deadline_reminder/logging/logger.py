import logging
import sys


class WorkflowCommandFormatter(logging.Formatter):
    """Render warnings and errors as GitHub Actions workflow commands.

    ``::warning file=lib/a.dart,line=3::message`` makes the runner attach the
    message to the source line in the job summary.
    """

    _COMMANDS = {logging.WARNING: "warning", logging.ERROR: "error"}

    def format(self, record: logging.LogRecord) -> str:
        command = self._COMMANDS.get(record.levelno)
        if command is None:
            return super().format(record)
        params = []
        source_file = getattr(record, "file", None)
        if source_file:
            params.append(f"file={source_file}")
            source_line = getattr(record, "line", None)
            if source_line:
                params.append(f"line={source_line}")
        head = f"::{command} {','.join(params)}" if params else f"::{command}"
        return f"{head}::{record.getMessage()}"


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("deadline_reminder")

    @classmethod
    def configure(cls, log_level: str, workflow_commands: bool = False) -> None:
        """Configure the logger with the specified level and stdout handler.

        With ``workflow_commands`` enabled, warnings and errors are emitted in
        the GitHub Actions annotation format.
        """
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            fmt = "%(asctime)s [%(levelname)s] %(message)s"
            if workflow_commands:
                handler.setFormatter(WorkflowCommandFormatter(fmt))
            else:
                handler.setFormatter(logging.Formatter(fmt))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a warning message. Pass ``file``/``line`` to point at source."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=kwargs)
