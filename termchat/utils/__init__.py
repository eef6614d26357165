from .ansi import (
    Ansi,
    USER_LABEL,
    ASSISTANT_LABEL,
    ERROR_LABEL,
    WARNING_LABEL,
    INFO_LABEL,
    SUCCESS_LABEL,
    console,
    err_console,
    info,
    success,
    warning,
    error,
    to_ansi,
    wants_color,
)
from .log import TRACE, LOG_LEVELS, init_logger
from .readline import LineEditor, readline_safe_prompt
from .spinner import Spinner

__all__ = [
    "Ansi",
    "USER_LABEL",
    "ASSISTANT_LABEL",
    "ERROR_LABEL",
    "WARNING_LABEL",
    "INFO_LABEL",
    "SUCCESS_LABEL",
    "console",
    "err_console",
    "info",
    "success",
    "warning",
    "error",
    "to_ansi",
    "wants_color",
    "TRACE",
    "LOG_LEVELS",
    "init_logger",
    "LineEditor",
    "readline_safe_prompt",
    "Spinner",
]
