import pytest
from devtool import grammar

from arclet.docopt.base import (
    Argument,
    Command,
    Either,
    OneOrMore,
    Option,
    OptionRef,
    Optional,
    OptionsShortcut,
    Required,
)
from arclet.docopt.exceptions import GrammarError, GrammarWarning


def test_simple_line():
    assert grammar("prog add <file>").pattern == Either(Required(Command("add"), Argument("<file>")))
    assert grammar("prog NAME").pattern == Either(Required(Argument("NAME")))
    assert grammar("prog").pattern == Either(Required())


def test_groups_and_repeats():
    pattern = grammar("prog (add | rm) <file>...").pattern
    assert pattern == Either(
        Required(
            Required(Either(Command("add"), Command("rm"))),
            OneOrMore(Argument("<file>")),
        )
    )
    pattern1 = grammar("prog [<x> <y>]...").pattern
    assert pattern1 == Either(Required(OneOrMore(Optional(Argument("<x>"), Argument("<y>")))))
    pattern2 = grammar("prog go | stop now").pattern
    assert pattern2 == Either(Required(Either(Command("go"), Required(Command("stop"), Command("now")))))


def test_multiple_lines():
    gram = grammar("prog add <file>\n       prog rm <file>")
    assert gram.program == "prog"
    assert gram.pattern == Either(
        Required(Command("add"), Argument("<file>")),
        Required(Command("rm"), Argument("<file>")),
    )


def test_options_from_table():
    gram = grammar("prog [--speed=<kn>] [-vo FILE]", "  --speed=<kn>  Speed [default: 10]\n  -v  Verbose.\n  -o FILE  Output.")
    speed = Option(None, "--speed", 1, "10")
    assert gram.pattern == Either(
        Required(
            Optional(OptionRef(speed)),
            Optional(OptionRef(Option("-v")), OptionRef(Option("-o", None, 1))),
        )
    )
    assert gram.options["--speed"] == speed


def test_long_option_placeholder():
    gram = grammar("prog --speed <kn>", "  --speed=<kn>  Speed.")
    assert gram.pattern == Either(Required(OptionRef(Option(None, "--speed", 1))))


def test_free_standing_options():
    gram = grammar("prog --flag --out=<f> -x")
    assert gram.pattern == Either(
        Required(
            OptionRef(Option(None, "--flag")),
            OptionRef(Option(None, "--out", 1)),
            OptionRef(Option("-x")),
        )
    )
    assert list(gram.options) == ["--flag", "--out", "-x"]
    assert len(gram.section) == 0


def test_options_shortcut():
    gram = grammar("prog [options] -a <x>", "  -a  A.\n  -b  B.\n  --cee=<c>  C.")
    assert gram.pattern == Either(
        Required(
            Optional(OptionsShortcut(OptionRef(Option("-b")), OptionRef(Option(None, "--cee", 1)))),
            OptionRef(Option("-a")),
            Argument("<x>"),
        )
    )
    # 每条用法各自计算
    gram1 = grammar("prog [options]\n       prog -a", "  -a  A.")
    assert gram1.pattern.children[0] == Required(Optional(OptionsShortcut(OptionRef(Option("-a")))))


def test_marker_command():
    gram = grammar("prog [--] <x>")
    assert gram.pattern == Either(Required(Optional(Command("--")), Argument("<x>")))
    assert gram.uses_marker
    assert not grammar("prog <x>").uses_marker


def test_grammar_errors():
    with pytest.raises(GrammarError) as e:
        grammar("prog (add")
    assert (e.value.line, e.value.column) == (1, 12)
    with pytest.raises(GrammarError):
        grammar("prog add)")
    with pytest.raises(GrammarError):
        grammar("prog ...")
    with pytest.raises(GrammarError):
        grammar("prog [...]")
    with pytest.raises(GrammarError):
        grammar("prog --flag=<v>", "  --flag  A flag.")
    with pytest.raises(GrammarError):
        grammar("prog [-o]", "  -o FILE  Output.")
    with pytest.raises(GrammarError):
        grammar("prog -v", "  -v, --verbose  V.\n  -v, --version  W.")


def test_error_position_on_later_line():
    with pytest.raises(GrammarError) as e:
        grammar("prog add\n       prog (rm")
    assert (e.value.line, e.value.column) == (2, 12)


def test_duplicated_line_warning():
    with pytest.warns(GrammarWarning):
        grammar("prog a\n       prog a")


if __name__ == "__main__":
    pytest.main([__file__, "-vs"])
