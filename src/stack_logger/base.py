"""
stack_logger: Indented, stacking console output.

Installation:
    pip install stack-logger

Module Version:
    __version__ = "0.1.0"

Usage Example:
    from stack_logger import StackLogger

    root = StackLogger(indentor='-', indent_size=2)
    child = root.log("Build start")        # "Build start"
    grandchild = child.log("Compiling")    # "--Compiling"
    grandchild.write(" done")              # continues the line, no pad
    child.warn("%d warnings", 3)           # "--3 warnings" on stderr

    # Scoped derivation
    with root as nested:
        nested.log("Indented once")

"""
import logging
import sys
from typing import Any, Dict, Final, Literal, Mapping, Optional, TextIO

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

SPACE: Final[Literal[" "]] = " "

_logger = logging.getLogger(__name__)


def is_count(value: Any) -> bool:
    """True for non-negative ints. Bools are rejected."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class LoggerConfig(BaseModel):
    """
    Immutable configuration of a single logger instance.

    Non-conforming values are replaced by the field default instead of
    raising. Fields accept either their snake_case name or camelCase alias.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    indent: int = Field(0, alias="indent")
    indent_size: int = Field(2, alias="indentSize")
    indentor: Any = Field(SPACE, alias="indentor")
    auto_tick: bool = Field(True, alias="autoTick")

    @classmethod
    def _default_for(cls, field_name: str, value: Any) -> Any:
        default = cls.model_fields[field_name].default
        _logger.debug("Ignoring %s=%r, falling back to %r", field_name, value, default)
        return default

    @field_validator("indent", "indent_size", mode="before")
    @classmethod
    def _count_or_default(cls, value: Any, info: ValidationInfo) -> Any:
        return value if is_count(value) else cls._default_for(info.field_name, value)

    @field_validator("indentor", mode="before")
    @classmethod
    def _truthy_or_default(cls, value: Any, info: ValidationInfo) -> Any:
        return value if value else cls._default_for(info.field_name, value)

    @field_validator("auto_tick", mode="before")
    @classmethod
    def _bool_or_default(cls, value: Any, info: ValidationInfo) -> Any:
        return value if isinstance(value, bool) else cls._default_for(info.field_name, value)

    @classmethod
    def field_updates(cls, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> Dict[str, Any]:
        """Collect known fields from `options` and `overrides`, keyed by field name. None means absent."""
        names = {}
        for name, info in cls.model_fields.items():
            names[name] = name
            if info.alias:
                names[info.alias] = name

        updates: Dict[str, Any] = {}
        sources = [options if isinstance(options, Mapping) else {}, overrides]
        for source in sources:
            for key, value in source.items():
                if key in names and value is not None:
                    updates[names[key]] = value
        return updates

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> "LoggerConfig":
        return cls.model_validate(cls.field_updates(options, **overrides))

    def merged(self, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> "LoggerConfig":
        """Return a new config with `options` laid over this one, field by field."""
        return type(self).model_validate({**self.model_dump(), **self.field_updates(options, **overrides)})


class BaseStackLogger:
    """
    Mutable handle around an immutable `LoggerConfig`.

    The accessors below are the only operations that change an existing
    handle; they do so by swapping in an updated copy of the config.
    """

    def __init__(
        self,
        config: LoggerConfig,
        stream: Optional[TextIO] = None,
        error_stream: Optional[TextIO] = None
    ) -> None:
        self._config: LoggerConfig = config
        self._stream: Optional[TextIO] = stream
        self._error_stream: Optional[TextIO] = error_stream

    @property
    def config(self) -> LoggerConfig:
        return self._config

    def _set(self, field_name: str, value: Any) -> None:
        self._config = self._config.model_copy(update={field_name: value})

    def indentation(self, value: Optional[int] = None) -> int:
        """Get the current indentation, or set it when `value` is a positive int."""
        if value and is_count(value):
            self._set("indent", value)
        return self._config.indent

    def indentor(self, indentor: Any = None) -> Any:
        """Get the indentation fill, or replace it with a truthy `indentor`."""
        if indentor:
            self._set("indentor", indentor)
        return self._config.indentor

    def indent_size(self, size: Optional[int] = None) -> int:
        """Get the step used for derived loggers, or set it when `size` is a positive int."""
        if size and is_count(size):
            self._set("indent_size", size)
        return self._config.indent_size

    indentSize = indent_size

    def _get_indent_str(self, indent: Optional[int] = None) -> str:
        count = self._config.indent if indent is None else indent
        return str(self._config.indentor) * max(0, count)

    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _err(self) -> TextIO:
        return self._error_stream if self._error_stream is not None else sys.stderr
