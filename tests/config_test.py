import pytest

from arclet.docopt import (
    Config,
    Docopt,
    HelpRequested,
    Namespace,
    UsagePatternMismatch,
    UserInputError,
    global_config,
    namespace,
)
from arclet.docopt.typing import UNSET

DOC = "Usage: prog [-v] <cmd> [<args>...]"


def test_config_merge():
    merged = Config.merge(
        Config(fuzzy_match=True, extra={"a": 1}),
        Config(fuzzy_match=False, raise_exception=True, extra={"a": 0, "b": 2}),
    )
    assert merged.fuzzy_match is True
    assert merged.raise_exception is True
    assert merged.options_first is False
    assert merged.version is None
    assert merged.fuzzy_threshold == 0.6
    assert merged.extra == {"a": 1, "b": 2}
    assert Config().options_first is UNSET


def test_namespace_config():
    with namespace("cfg_first") as ns:
        ns.config.options_first = True
        cli = Docopt(DOC)
    assert cli.namespace == "cfg_first"
    assert cli.config.options_first is True
    assert dict(cli.parse(["run", "-v"])) == {"-v": False, "<cmd>": "run", "<args>": ["-v"]}
    assert global_config.default_namespace.name == "Docopt"

    cli1 = Docopt(DOC, Config(options_first=False), namespace="cfg_first")
    assert cli1.config.options_first is False
    assert dict(cli1.parse(["run", "-v"])) == {"-v": True, "<cmd>": "run", "<args>": []}


def test_namespace_object():
    with namespace(Namespace("cfg_obj", Config(raise_exception=True))) as ns:
        assert global_config.default_namespace is ns
        cli = Docopt("Usage: prog <x>")
    with pytest.raises(UsagePatternMismatch):
        cli.parse([])
    assert Namespace("cfg_obj") == global_config.namespaces["cfg_obj"]


def test_namespace_restored_on_error():
    with pytest.raises(RuntimeError):
        with namespace("cfg_error"):
            assert global_config.default_namespace.name == "cfg_error"
            raise RuntimeError
    assert global_config.default_namespace.name == "Docopt"
    assert "cfg_error" in global_config.namespaces
    assert Docopt("Usage: prog", namespace="cfg_error").namespace == "cfg_error"


def test_builtin_option_name():
    with namespace("cfg_help") as ns:
        ns.config.builtin_option_name["help"] = {"--ayuda"}
        cli = Docopt("Usage: prog [<x>]")
    res = cli.parse(["--ayuda"])
    assert isinstance(res.error_info, HelpRequested)
    assert res.output == "Usage: prog [<x>]"
    assert isinstance(cli.parse(["-h"]).error_info, UserInputError)


def test_fuzzy_match():
    cli = Docopt("Usage: prog [--verbose]", Config(fuzzy_match=True))
    res = cli.parse(["--vrebose"])
    assert isinstance(res.error_info, UserInputError)
    assert "--verbose" in str(res.error_info)


def test_default_namespace_setter():
    global_config.default_namespace = "cfg_default"
    try:
        assert global_config.default_namespace.name == "cfg_default"
        assert Docopt("Usage: prog").namespace == "cfg_default"
    finally:
        global_config.default_namespace = "Docopt"


if __name__ == "__main__":
    pytest.main([__file__, "-vs"])
