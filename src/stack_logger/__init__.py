__version__ = "0.1.0"

from stack_logger.base import LoggerConfig
from stack_logger.formatting import format_messages, inspect_value, text_color_options
from stack_logger.logger import StackLogger, TextRequest

__all__ = [
    "StackLogger",
    "LoggerConfig",
    "TextRequest",
    "format_messages",
    "inspect_value",
    "text_color_options",
    "__version__",
]
