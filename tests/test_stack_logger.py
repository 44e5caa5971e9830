"""Test indentation stacking and output of StackLogger"""

import io

import pytest

from stack_logger import StackLogger, TextRequest, text_color_options


class _ClosedSink(io.StringIO):
    def write(self, text):
        raise ValueError("I/O operation on closed file")


def _make(**options):
    out, err = io.StringIO(), io.StringIO()
    return StackLogger(options, stream=out, error_stream=err), out, err


def test_log_emits_line_and_returns_ticked_logger():
    logger, out, _ = _make(indent=0, indentSize=2, indentor="-", autoTick=True)
    child = logger.log("hi")
    assert out.getvalue() == "hi\n"
    assert child is not logger
    assert child.indentation() == 2
    assert logger.indentation() == 0


def test_chained_logs_stack_indentation():
    logger, out, _ = _make(indentor="-")
    logger.log("x").log("y").log("z")
    assert out.getvalue() == "x\n--y\n----z\n"


def test_print_pads_without_newline():
    logger, out, _ = _make(indent=3, indentor=".")
    logger.print("a")
    assert out.getvalue() == "...a"


def test_non_string_indentor_is_converted_to_text():
    logger, out, _ = _make(indentor=7, autoTick=False)
    logger.indentation(2)
    logger.log("a")
    logger.extend(indentor=0.5, indent=1).log("b")
    assert out.getvalue() == "77a\n0.5b\n"


def test_write_never_pads_nor_ticks():
    logger, out, _ = _make(indent=4)
    assert logger.write("x") is logger
    assert logger.indentation() == 4
    assert out.getvalue() == "x"


def test_warn_and_error_go_to_error_stream():
    logger, out, err = _make(indentor="*", autoTick=False)
    logger.indentation(1)
    assert logger.warn("careful") is logger
    assert logger.error("broken") is logger
    assert out.getvalue() == ""
    assert err.getvalue() == "*careful\n*broken\n"


def test_without_auto_tick_same_instance_is_returned():
    logger, out, _ = _make(autoTick=False)
    assert logger.log("a") is logger
    assert logger.print("b") is logger
    assert logger.indentation() == 0
    assert out.getvalue() == "a\nb"


def test_auto_tick_law():
    logger, _, _ = _make(indent=1, indent_size=3)
    assert logger.log("a").indentation() == logger.indentation() + logger.indent_size()
    assert logger.print("a").indentation() == 4
    assert logger.warn("a").indentation() == 4


def test_default_streams_are_stdout_and_stderr(capsys):
    logger = StackLogger()
    logger.log("out").warn("err")
    captured = capsys.readouterr()
    assert captured.out == "out\n"
    assert captured.err == "  err\n"


def test_extend_copies_configuration():
    logger, _, _ = _make(indent=2, indent_size=4, indentor="#", autoTick=False)
    copy = logger.extend({})
    assert copy is not logger
    assert copy.config == logger.config
    copy.indentation(7)
    assert logger.indentation() == 2


def test_extend_overrides_fields():
    logger, _, _ = _make(indent=2, indentor="#")
    child = logger.extend({"indentor": "=", "indentSize": 5})
    assert child.indentor() == "="
    assert child.indent_size() == 5
    assert child.indentation() == 2
    assert logger.indentor() == "#"


def test_extend_ignores_none_and_normalises_bad_values():
    logger, _, _ = _make(indent=6, indent_size=4)
    child = logger.extend(indent=None, indent_size="wide")
    assert child.indentation() == 6
    assert child.indent_size() == 2


def test_extend_keeps_streams():
    logger, out, _ = _make()
    logger.extend(indent=2).log("deep")
    assert out.getvalue() == "  deep\n"


def test_tick_without_arguments_uses_indent_size():
    logger, _, _ = _make(indent=1, indent_size=3)
    child = logger.tick()
    assert child.indentation() == 4
    assert child.indent_size() == 3


def test_tick_with_explicit_deltas():
    logger, _, _ = _make(indent=1, indent_size=3)
    child = logger.tick(5, 1)
    assert child.indentation() == 6
    assert child.indent_size() == 4


def test_tick_never_goes_below_zero():
    logger, _, _ = _make(indent=1)
    assert logger.tick(-5).indentation() == 0


def test_accessors_mutate_in_place():
    logger, _, _ = _make()
    assert logger.indentation(5) == 5
    assert logger.indentation() == 5
    assert logger.indentation(0) == 5
    assert logger.indentation("7") == 5
    assert logger.indent_size(4) == 4
    assert logger.indentSize() == 4
    assert logger.indent_size(0) == 4
    assert logger.indentor("~") == "~"
    assert logger.indentor("") == "~"


def test_constructor_accepts_zero_and_ignores_bad_options():
    logger = StackLogger({"indent": "deep", "indentSize": 0, "indentor": None, "autoTick": "yes"})
    assert logger.indentation() == 0
    assert logger.indent_size() == 0
    assert logger.indentor() == " "
    assert logger.config.auto_tick is True


def test_constructor_ignores_non_mapping_options():
    logger = StackLogger("nonsense")
    assert logger.indentation() == 0
    assert logger.indent_size() == 2


def test_get_text_call_shapes():
    logger, _, _ = _make(indent=2, indentor="-")
    assert logger.get_text({"indent": 1, "msgs": ["a"]}) == "-a"
    assert logger.get_text(["a", "b"], 3) == "---a b"
    assert logger.get_text("a", 1) == "-a"
    assert logger.get_text(1, "a") == "-a"
    assert logger.get_text(None, ["a"]) == "--a"
    assert logger.get_text(TextRequest.from_messages(["a"], 0)) == "a"


def test_get_text_pad_is_prefix_of_format_string():
    logger, _, _ = _make(indentor=" ")
    with text_color_options(use_colors=False):
        assert logger.get_text(2, ["%s items, %d%%", "three", 50]) == "  three items, 50%"
        assert logger.get_text(2, [42, "x"]) == "  42 x"


def test_get_text_without_messages_is_just_the_pad():
    logger, _, _ = _make(indent=3)
    assert logger.get_text() == "   "


def test_context_manager_yields_ticked_logger():
    logger, out, _ = _make(indentor="-")
    with logger as nested:
        nested.log("inside")
    assert out.getvalue() == "--inside\n"


def test_sink_errors_propagate():
    logger = StackLogger(stream=_ClosedSink())
    with pytest.raises(ValueError):
        logger.log("lost")


if __name__ == "__main__":
    test_log_emits_line_and_returns_ticked_logger()
    test_chained_logs_stack_indentation()
