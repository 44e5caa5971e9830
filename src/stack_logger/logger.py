from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, TextIO, Union, overload

from stack_logger.base import BaseStackLogger, LoggerConfig
from stack_logger.formatting import format_messages


def _as_list(msgs: Any) -> List[Any]:
    if msgs is None:
        return []
    if isinstance(msgs, (list, tuple)):
        return list(msgs)
    return [msgs]


class CallShape(Enum):
    mapping = "mapping"
    messages = "messages"
    text = "text"
    indent = "indent"


@dataclass(frozen=True)
class TextRequest:
    """
    Indentation and messages for a single `get_text` call.

    `indent` of None (or any non-int) means "use the logger's indentation".
    """
    shape: CallShape
    msgs: List[Any] = field(default_factory=list)
    indent: Optional[int] = None

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "TextRequest":
        return cls(CallShape.mapping, _as_list(record.get("msgs")), record.get("indent"))

    @classmethod
    def from_messages(cls, msgs: Union[list, tuple], indent: Optional[int] = None) -> "TextRequest":
        return cls(CallShape.messages, list(msgs), indent)

    @classmethod
    def from_text(cls, text: str, indent: Optional[int] = None) -> "TextRequest":
        return cls(CallShape.text, [text], indent)

    @classmethod
    def from_indent(cls, indent: Optional[int] = None, msgs: Any = None) -> "TextRequest":
        return cls(CallShape.indent, _as_list(msgs), indent)

    @classmethod
    def coerce(cls, indent_or_msgs: Any = None, msgs: Any = None) -> "TextRequest":
        if isinstance(indent_or_msgs, TextRequest):
            return indent_or_msgs
        if isinstance(indent_or_msgs, Mapping):
            return cls.from_mapping(indent_or_msgs)
        if isinstance(indent_or_msgs, (list, tuple)):
            return cls.from_messages(indent_or_msgs, msgs)
        if isinstance(indent_or_msgs, str):
            return cls.from_text(indent_or_msgs, msgs)
        return cls.from_indent(indent_or_msgs, msgs)


class StackLogger(BaseStackLogger):
    """
    Console logger whose indentation stacks across derived instances.

    Every output method except `write` returns a logger one `indent_size`
    deeper when `auto_tick` is on, so chained calls nest naturally:

        StackLogger().log("a").log("b")   # "a\\n" then "  b\\n"

    Parameters:
        options (Mapping): Initial settings (`indent`, `indentor`, `indent_size`, `auto_tick`;
            camelCase keys are accepted too).
        stream (TextIO): Sink for `write`, `print` and `log` (default: sys.stdout).
        error_stream (TextIO): Sink for `warn` and `error` (default: sys.stderr).
    """

    def __init__(
        self,
        options: Union[LoggerConfig, Mapping[str, Any], None] = None,
        *,
        stream: Optional[TextIO] = None,
        error_stream: Optional[TextIO] = None,
        **overrides: Any
    ) -> None:
        if isinstance(options, LoggerConfig):
            config = options.merged(**overrides) if overrides else options
        else:
            config = LoggerConfig.from_options(options, **overrides)
        super().__init__(config, stream, error_stream)

    def __repr__(self) -> str:
        c = self._config
        return (
            f"{type(self).__name__}(indent={c.indent}, indent_size={c.indent_size}, "
            f"indentor={c.indentor!r}, auto_tick={c.auto_tick})"
        )

    def extend(self, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> "StackLogger":
        """Return a new logger with this one's settings, overridden by `options`."""
        return type(self)(
            self._config.merged(options, **overrides),
            stream=self._stream,
            error_stream=self._error_stream,
        )

    def tick(self, indent: Optional[int] = None, indent_size: Optional[int] = None) -> "StackLogger":
        """
        Return a logger indented further than this one.

        Without `indent` the step is this logger's `indent_size`. A numeric
        `indent_size` is added to the size carried by the new logger.
        """
        c = self._config
        step = indent if _is_int(indent) else c.indent_size
        size_step = indent_size if _is_int(indent_size) else 0
        return self.extend(
            indent=max(0, c.indent + step),
            indent_size=max(0, c.indent_size + size_step),
        )

    def _next(self) -> "StackLogger":
        return self.tick(self._config.indent_size) if self._config.auto_tick else self

    def _emit(self, sink: TextIO, text: str) -> None:
        sink.write(text)
        sink.flush()

    def write(self, *msgs: Any) -> "StackLogger":
        """Write `msgs` to stdout with no indentation and no newline. Never ticks."""
        self._emit(self._out(), self.get_text(0, list(msgs)))
        return self

    def print(self, *msgs: Any) -> "StackLogger":
        """Write indented `msgs` to stdout without a newline."""
        self._emit(self._out(), self.get_text(self._config.indent, list(msgs)))
        return self._next()

    def log(self, *msgs: Any) -> "StackLogger":
        """Write an indented line to stdout."""
        self._emit(self._out(), self.get_text(self._config.indent, list(msgs)) + "\n")
        return self._next()

    def warn(self, *msgs: Any) -> "StackLogger":
        """Write an indented line to stderr."""
        self._emit(self._err(), self.get_text(self._config.indent, list(msgs)) + "\n")
        return self._next()

    def error(self, *msgs: Any) -> "StackLogger":
        return self.warn(*msgs)

    @overload
    def get_text(self, indent_or_msgs: TextRequest) -> str: ...

    @overload
    def get_text(self, indent_or_msgs: Mapping[str, Any]) -> str: ...

    @overload
    def get_text(self, indent_or_msgs: Union[list, tuple, str], msgs: Optional[int] = None) -> str: ...

    @overload
    def get_text(self, indent_or_msgs: Optional[int] = None, msgs: Any = None) -> str: ...

    def get_text(self, indent_or_msgs=None, msgs=None):
        """
        Build the text for one output call.

        Accepts a `TextRequest` or any of the shapes `TextRequest.coerce`
        understands: `{"indent": n, "msgs": [...]}`, `([...], n)`,
        `("text", n)` or `(n, [...])`. The pad goes in front of the first
        message; the rest of the list is formatted after it.
        """
        request = TextRequest.coerce(indent_or_msgs, msgs)
        indent = request.indent if _is_int(request.indent) else self._config.indent
        messages = list(request.msgs)
        if indent:
            pad = self._get_indent_str(indent)
            if messages:
                messages[0] = pad + format_messages(messages[0], colors=False)
            else:
                messages = [pad]
        return format_messages(*messages, colors=True)

    def __enter__(self) -> "StackLogger":
        return self.tick()

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        return False


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
