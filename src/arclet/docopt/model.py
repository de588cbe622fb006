from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .typing import TokenValue

if TYPE_CHECKING:
    from .base import Leaf, Option


class TokenKind(str, Enum):
    """argv 切分后的参数类别"""

    PLAIN = "plain"
    """位置参数或命令"""
    OPTION = "option"
    """已解析的选项"""
    MARKER = "marker"
    """`--`, 其后的参数全部视为位置参数"""


@dataclass(frozen=True)
class Token:
    """argv 切分后的单个参数

    Attributes:
        kind (TokenKind): 参数类别
        raw (str): 原始文本
        option (Option | None): 选项定义, 仅用于选项
        value (TokenValue): 参数值; 无值选项为 True
    """

    __slots__ = ("kind", "raw", "option", "value")

    kind: TokenKind
    raw: str
    option: Option | None
    value: TokenValue

    @classmethod
    def plain(cls, raw: str) -> Token:
        return cls(TokenKind.PLAIN, raw, None, raw)

    @classmethod
    def marker(cls, raw: str = "--") -> Token:
        return cls(TokenKind.MARKER, raw, None, raw)

    @classmethod
    def of_option(cls, option: Option, raw: str, value: TokenValue) -> Token:
        return cls(TokenKind.OPTION, raw, option, value)

    def __str__(self):
        if self.kind is TokenKind.OPTION and self.value is not True:
            return f"{self.option.name}={self.value}"  # type: ignore
        return self.raw


@dataclass(frozen=True)
class Lexeme:
    """用法文本中的单个词法单元, 附带其在原文中的位置

    Attributes:
        value (str): 文本
        line (int): 所在行, 从 1 开始
        column (int): 所在列, 从 0 开始
    """

    __slots__ = ("value", "line", "column")

    value: str
    line: int
    column: int

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class LeafMatch:
    """一次叶子节点的匹配记录

    Attributes:
        leaf (Leaf): 匹配的叶子节点
        index (int): 被消耗的参数在 argv 中的位置
        value (TokenValue): 匹配到的值
    """

    __slots__ = ("leaf", "index", "value")

    leaf: Leaf
    index: int
    value: TokenValue

    @property
    def name(self) -> str:
        return self.leaf.name
