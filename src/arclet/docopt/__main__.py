"""以命令行方式使用 docopt: 读取帮助文本, 解析参数并以 JSON 输出结果"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from tarina import lang

from ._internal._lexer import printable_usage
from .base import Config
from .core import Docopt
from .exceptions import GrammarError, SpecialOptionTriggered

CLI_USAGE = """Parse a command line against a usage text and print the bindings as JSON.

Usage:
  docopt [options] <file> [--] [<argv>...]

Options:
  --options-first  Treat every argument after the first positional one as positional.
  --no-help        Do not handle -h and --help in <argv>.
  --version=<v>    Version text printed for --version in <argv>.
  --debug          Log debug traces to stderr.
  -h --help        Show this screen.
"""


def main(argv: list[str] | None = None) -> int:
    """命令行入口

    Returns:
        int: 退出码; 0 为成功, 1 为参数不合法, 2 为帮助文本不合法
    """
    args = Docopt(CLI_USAGE, Config(options_first=True, raise_exception=False)).parse(argv)
    if not args.matched:
        if isinstance(args.error_info, SpecialOptionTriggered):
            return 0
        print(args.error_info, file=sys.stderr)
        return 1
    if args["--debug"]:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    file: str = args["<file>"]  # type: ignore
    if file == "-":
        doc = sys.stdin.read()
    else:
        try:
            doc = Path(file).read_text(encoding="utf-8")
        except FileNotFoundError:
            print(lang.require("cli", "file_not_found").format(target=file), file=sys.stderr)
            return 2
    try:
        cli = Docopt(
            doc,
            Config(
                options_first=bool(args["--options-first"]),
                auto_help=not args["--no-help"],
                version=args["--version"],  # type: ignore
                raise_exception=False,
            ),
        )
    except GrammarError as e:
        print(e, file=sys.stderr)
        return 2
    result = cli.parse(args["<argv>"])  # type: ignore
    if result.matched:
        print(json.dumps(dict(result), indent=2, ensure_ascii=False))
        return 0
    if isinstance(result.error_info, SpecialOptionTriggered):
        return 0
    print(result.error_info, file=sys.stderr)
    print(printable_usage(doc), file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
