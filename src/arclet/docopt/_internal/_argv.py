from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing_extensions import Self

from tarina import lang, split

from ..base import Option
from ..exceptions import UserInputError
from ..model import Token
from ..typing import Argv as ArgvData
from ._options import OptionTable
from ._util import levenshtein


@dataclass(repr=True)
class Argv:
    """命令行参数, 负责依据选项表将其切分为参数序列"""

    options: OptionTable
    """选项表"""
    options_first: bool = field(default=False)
    """遇到第一个位置参数后, 是否将后续参数全部视为位置参数"""
    keep_marker: bool = field(default=True)
    """是否保留 `--` 本身"""
    fuzzy_match: bool = field(default=False)
    """未知长选项是否提示最相近的选项"""
    fuzzy_threshold: float = field(default=0.6)
    """模糊匹配阈值"""

    current_index: int = field(init=False)
    """当前数据的索引"""
    ndata: int = field(init=False)
    """原始数据的长度"""
    raw_data: list[str] = field(init=False)
    """原始数据"""
    tokens: list[Token] = field(init=False)
    """切分结果"""
    literal: bool = field(init=False)
    """之后的参数是否全部视为位置参数"""

    def __post_init__(self):
        self.reset()

    def reset(self):
        """重置命令行参数"""
        self.current_index = 0
        self.ndata = 0
        self.raw_data = []
        self.tokens = []
        self.literal = False

    @property
    def done(self) -> bool:
        """命令是否切分完毕"""
        return self.current_index == self.ndata

    def build(self, data: ArgvData | None = None) -> Self:
        """传入命令行参数

        Args:
            data (ArgvData | None, optional): 字符串或字符串列表, 为 None 时使用 `sys.argv[1:]`

        Returns:
            Self: 自身
        """
        self.reset()
        if data is None:
            data = sys.argv[1:]
        elif isinstance(data, str):
            data = split(data, " ")
        self.raw_data = list(data)
        self.ndata = len(self.raw_data)
        return self

    def next(self) -> str | None:
        """获取下个参数并移动指针"""
        if self.done:
            return None
        self.current_index += 1
        return self.raw_data[self.current_index - 1]

    def peek(self) -> str | None:
        """获取下个参数, 不移动指针"""
        return None if self.done else self.raw_data[self.current_index]

    def tokenize(self) -> list[Token]:
        """从左到右切分全部参数

        Raises:
            UserInputError: 参数无法依据选项表切分
        """
        while not self.done:
            raw: str = self.next()  # type: ignore
            if self.literal:
                self.tokens.append(Token.plain(raw))
            elif raw == "--":
                self.literal = True
                if self.keep_marker:
                    self.tokens.append(Token.marker(raw))
            elif raw.startswith("--"):
                self.tokens.append(self.parse_long(raw))
            elif raw.startswith("-") and raw != "-":
                self.tokens.extend(self.parse_shorts(raw))
            else:
                self.tokens.append(Token.plain(raw))
                self.literal = self.options_first
        return self.tokens

    def _value_for(self, name: str, raw: str) -> str:
        value = self.peek()
        if value is None or value == "--":
            raise UserInputError(lang.require("argv", "requires_argument").format(target=name), raw)
        self.current_index += 1
        return value

    def parse_long(self, raw: str) -> Token:
        """切分长选项, 支持 `--name=value` 与唯一前缀"""
        long, eq, value = raw.partition("=")
        similar = self.options.by_long(long) or self.options.by_prefix(long)
        if len(similar) > 1:
            raise UserInputError(
                lang.require("argv", "not_unique").format(
                    target=long, candidates=", ".join(opt.long for opt in similar)  # type: ignore
                ),
                raw,
            )
        if not similar:
            raise UserInputError(self._unknown(long), raw)
        option = similar[0]
        if not option.takes_value:
            if eq:
                raise UserInputError(lang.require("argv", "must_not_have_argument").format(target=option.long), raw)
            return Token.of_option(option, raw, True)
        if not eq:
            value = self._value_for(option.long, raw)  # type: ignore
        return Token.of_option(option, raw, value)

    def parse_shorts(self, raw: str) -> list[Token]:
        """切分短选项组, 如 `-abc` 与 `-ofile`"""
        left = raw[1:]
        result = []
        while left:
            short, left = f"-{left[0]}", left[1:]
            similar = self.options.by_short(short)
            if len(similar) > 1:
                raise UserInputError(
                    lang.require("argv", "ambiguous").format(target=short, count=len(similar)), raw
                )
            if not similar:
                raise UserInputError(self._unknown(short), raw)
            option: Option = similar[0]
            if not option.takes_value:
                result.append(Token.of_option(option, raw, True))
                continue
            value, left = (left, "") if left else (self._value_for(short, raw), "")
            result.append(Token.of_option(option, raw, value))
        return result

    def _unknown(self, name: str) -> str:
        if self.fuzzy_match and name.startswith("--"):
            candidates = [opt.long for opt in self.options.values() if opt.long]
            if candidates:
                best = max(candidates, key=lambda x: levenshtein(name, x))
                if levenshtein(name, best) >= self.fuzzy_threshold:
                    return lang.require("argv", "fuzzy_matched").format(target=name, source=best)
        return lang.require("argv", "unknown_option").format(target=name)


def tokenize(
    data: ArgvData | None,
    options: OptionTable,
    options_first: bool = False,
    keep_marker: bool = True,
) -> list[Token]:
    """将命令行参数切分为参数序列

    Args:
        data (ArgvData | None): 字符串或字符串列表
        options (OptionTable): 选项表
        options_first (bool, optional): 遇到第一个位置参数后, 是否将后续参数全部视为位置参数
        keep_marker (bool, optional): 是否保留 `--` 本身
    """
    return Argv(options, options_first, keep_marker).build(data).tokenize()
