import pytest

from arclet.docopt._internal._argv import Argv, tokenize
from arclet.docopt._internal._options import OptionTable
from arclet.docopt.base import Option
from arclet.docopt.exceptions import UserInputError
from arclet.docopt.model import Token, TokenKind

verbose = Option("-v", "--verbose")
output = Option("-o", "--output", 1)
speed = Option(None, "--speed", 1, "10")
quiet = Option("-q", "--quiet")
version = Option(None, "--version")
table = OptionTable([verbose, output, speed, quiet, version])


def test_short_cluster():
    tokens = tokenize(["-voresult.txt"], table)
    assert tokens == [
        Token.of_option(verbose, "-voresult.txt", True),
        Token.of_option(output, "-voresult.txt", "result.txt"),
    ]
    assert tokenize(["-vq"], table) == [Token.of_option(verbose, "-vq", True), Token.of_option(quiet, "-vq", True)]
    assert tokenize(["-o", "a.txt"], table)[0].value == "a.txt"


def test_long_option():
    assert tokenize(["--speed=20"], table) == [Token.of_option(speed, "--speed=20", "20")]
    assert tokenize(["--speed", "20"], table) == [Token.of_option(speed, "--speed", "20")]
    assert tokenize(["--spe", "5"], table)[0].option == speed
    assert tokenize(["--verb"], table) == [Token.of_option(verbose, "--verb", True)]
    # 值可以为空字符串或以 `-` 开头
    assert tokenize(["--speed="], table)[0].value == ""
    assert tokenize(["--output", "-x"], table)[0].value == "-x"


def test_prefix_not_unique():
    with pytest.raises(UserInputError) as e:
        tokenize(["--ver"], table)
    assert "--verbose" in str(e.value)
    assert "--version" in str(e.value)
    assert e.value.token == "--ver"


def test_unknown_option():
    with pytest.raises(UserInputError):
        tokenize(["--nope"], table)
    with pytest.raises(UserInputError):
        tokenize(["-x"], table)
    with pytest.raises(UserInputError):
        tokenize(["-vx"], table)


def test_fuzzy_suggestion():
    argv = Argv(table, fuzzy_match=True).build(["--vrebose"])
    with pytest.raises(UserInputError) as e:
        argv.tokenize()
    assert "--verbose" in str(e.value)
    argv1 = Argv(table).build(["--vrebose"])
    with pytest.raises(UserInputError) as e1:
        argv1.tokenize()
    assert "--verbose" not in str(e1.value)


def test_value_errors():
    with pytest.raises(UserInputError):
        tokenize(["-o"], table)
    with pytest.raises(UserInputError):
        tokenize(["-o", "--"], table)
    with pytest.raises(UserInputError):
        tokenize(["--speed"], table)
    with pytest.raises(UserInputError):
        tokenize(["--quiet=1"], table)


def test_marker():
    tokens = tokenize(["--", "-v", "--speed"], table)
    assert [tk.kind for tk in tokens] == [TokenKind.MARKER, TokenKind.PLAIN, TokenKind.PLAIN]
    assert [tk.raw for tk in tokens] == ["--", "-v", "--speed"]
    tokens1 = tokenize(["a", "--", "-v"], table, keep_marker=False)
    assert tokens1 == [Token.plain("a"), Token.plain("-v")]


def test_options_first():
    tokens = tokenize(["-v", "run", "-q", "--speed"], table, options_first=True)
    assert tokens == [
        Token.of_option(verbose, "-v", True),
        Token.plain("run"),
        Token.plain("-q"),
        Token.plain("--speed"),
    ]
    assert tokenize(["run", "-q"], table)[1].kind is TokenKind.OPTION


def test_single_dash():
    assert tokenize(["-"], table) == [Token.plain("-")]


def test_string_argv():
    argv = Argv(table).build('add "a b.txt" -v')
    assert argv.raw_data == ["add", "a b.txt", "-v"]
    assert [str(tk) for tk in argv.tokenize()] == ["add", "a b.txt", "-v"]
    assert argv.done


def test_token_str():
    assert str(tokenize(["--speed=20"], table)[0]) == "--speed=20"
    assert str(tokenize(["-ofile"], table)[0]) == "--output=file"


if __name__ == "__main__":
    pytest.main([__file__, "-vs"])
