from __future__ import annotations

import re
from typing import Iterable, Iterator, Mapping

from tarina import lang

from ..base import Option
from ..exceptions import GrammarError
from ._lexer import find_sections

_default_pat = re.compile(r"\[default: (.*)\]", re.IGNORECASE)


class OptionTable(Mapping[str, Option]):
    """选项表, 以规范名称索引选项定义

    同名的定义后者覆盖前者, 但保留前者的位置
    """

    __slots__ = ("_options",)

    def __init__(self, options: Iterable[Option] = ()):
        self._options: dict[str, Option] = {}
        for opt in options:
            self._options[opt.name] = opt

    def __getitem__(self, key: str) -> Option:
        return self._options[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self):
        return f"OptionTable({list(self._options.values())!r})"

    def with_options(self, *options: Option) -> OptionTable:
        """返回加入了新选项的选项表, 自身不变"""
        return OptionTable([*self._options.values(), *options])

    def by_short(self, short: str) -> list[Option]:
        return [opt for opt in self._options.values() if opt.short == short]

    def by_long(self, long: str) -> list[Option]:
        return [opt for opt in self._options.values() if opt.long == long]

    def by_prefix(self, prefix: str) -> list[Option]:
        """查找长选项以 `prefix` 开头的选项"""
        return [opt for opt in self._options.values() if opt.long and opt.long.startswith(prefix)]

    def lookup(self, form: str) -> list[Option]:
        """按任意写法查找选项"""
        return self.by_long(form) if form.startswith("--") else self.by_short(form)


def parse_option(description: str, line: int | None = None) -> Option:
    """解析一条选项描述, 如 `-o FILE, --output=FILE  Output file [default: a.txt]`

    名称部分以两个连续空格结束, 之后为说明文本

    Args:
        description (str): 选项描述
        line (int | None, optional): 描述所在行, 用于错误信息

    Raises:
        GrammarError: 无值选项声明了默认值
    """
    short = long = None
    argcount = 0
    names, _, rest = description.strip().partition("  ")
    names = names.replace(",", " ").replace("=", " ")
    for part in names.split():
        if part.startswith("--"):
            long = part
        elif part.startswith("-"):
            short = part
        else:
            argcount = 1
    default = None
    if mat := _default_pat.search(rest):
        if not argcount:
            raise GrammarError(
                lang.require("option", "default_without_value").format(target=long or short), line
            )
        default = mat[1]
    return Option(short, long, argcount, default)


def _entries(text: str, lineno: int) -> Iterator[tuple[str, int]]:
    _, _, text = text.partition(":")
    current: list[str] = []
    start = lineno
    for index, line in enumerate(text.split("\n")):
        if line.lstrip().startswith("-"):
            if current:
                yield "\n".join(current), start
            current = [line]
            start = lineno + index
        elif current:
            current.append(line)
    if current:
        yield "\n".join(current), start


def parse_defaults(source: str) -> OptionTable:
    """解析所有 `options:` 段落, 得到选项表

    Args:
        source (str): 原始帮助文本

    Returns:
        OptionTable: 选项表, 后出现的同名定义生效
    """
    options = []
    for section in find_sections("options:", source):
        options.extend(parse_option(text, line) for text, line in _entries(section.text, section.line))
    return OptionTable(options)
