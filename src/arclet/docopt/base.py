"""docopt 的基础内容相关"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Iterator, TypedDict, Union
from typing_extensions import TypeAlias

from .typing import UNSET, Unset

_repr_ = lambda self: f"{self.__class__.__name__}({', '.join(map(repr, self.children))})"


@dataclass(frozen=True)
class Option:
    """选项定义, 来自 `Options:` 段落或用法中的独立选项

    Attributes:
        short (str | None): 短选项, 如 `-v`
        long (str | None): 长选项, 如 `--verbose`
        argcount (int): 是否需要值, 0 或 1
        default (str | None): `[default: ...]` 声明的默认值
    """

    short: str | None = None
    long: str | None = None
    argcount: int = 0
    default: str | None = None

    def __post_init__(self):
        if not self.short and not self.long:
            raise ValueError("an option needs a short or a long form")

    @property
    def name(self) -> str:
        """规范名称, 优先使用长选项"""
        return self.long or self.short  # type: ignore

    @property
    def takes_value(self) -> bool:
        return self.argcount > 0

    @property
    def forms(self) -> tuple[str, ...]:
        """该选项所有的写法"""
        return tuple(i for i in (self.short, self.long) if i)

    def __repr__(self):
        return f"Option({self.short!r}, {self.long!r}, {self.argcount!r}, {self.default!r})"


@dataclass(frozen=True)
class Command:
    """命令, 匹配与名称相同的参数"""

    __slots__ = ("name",)

    name: str


@dataclass(frozen=True)
class Argument:
    """位置参数, 匹配任意一个非选项参数"""

    __slots__ = ("name",)

    name: str


@dataclass(frozen=True)
class OptionRef:
    """对选项定义的引用"""

    __slots__ = ("option",)

    option: Option

    @property
    def name(self) -> str:
        return self.option.name


@dataclass(init=False, frozen=True)
class Required:
    """子节点须按顺序全部匹配"""

    __slots__ = ("children",)
    __repr__ = _repr_

    children: tuple[Pattern, ...]

    def __init__(self, *children: Pattern):
        object.__setattr__(self, "children", children)


@dataclass(init=False, frozen=True)
class Optional:
    """子节点逐个尝试匹配, 不匹配时跳过"""

    __slots__ = ("children",)
    __repr__ = _repr_

    children: tuple[Pattern, ...]

    def __init__(self, *children: Pattern):
        object.__setattr__(self, "children", children)


@dataclass(init=False, frozen=True)
class OptionsShortcut:
    """`[options]` 占位符, 子节点为同一用法行中未提及的全部选项"""

    __slots__ = ("children",)
    __repr__ = _repr_

    children: tuple[OptionRef, ...]

    def __init__(self, *children: OptionRef):
        object.__setattr__(self, "children", children)


@dataclass(init=False, frozen=True)
class Either:
    """按声明顺序选择第一个能使整体匹配成功的分支"""

    __slots__ = ("children",)
    __repr__ = _repr_

    children: tuple[Pattern, ...]

    def __init__(self, *children: Pattern):
        object.__setattr__(self, "children", children)


@dataclass(frozen=True)
class OneOrMore:
    """子节点至少匹配一次, 并尽可能多地重复匹配"""

    __slots__ = ("child",)

    child: Pattern

    @property
    def children(self) -> tuple[Pattern, ...]:
        return (self.child,)

    def __repr__(self):
        return f"OneOrMore({self.child!r})"


Leaf: TypeAlias = Union[Command, Argument, OptionRef]
Branch: TypeAlias = Union[Required, Optional, OptionsShortcut, Either, OneOrMore]
Pattern: TypeAlias = Union[Leaf, Branch]

LEAVES = (Command, Argument, OptionRef)


def iter_leaves(pattern: Pattern) -> Iterator[Leaf]:
    """按出现顺序遍历所有叶子节点

    Args:
        pattern (Pattern): 任意节点
    """
    if isinstance(pattern, LEAVES):
        yield pattern
        return
    for child in pattern.children:
        yield from iter_leaves(child)


class OptionNames(TypedDict):
    help: set[str]
    """帮助选项的名称"""
    version: set[str]
    """版本选项的名称"""


@dataclass(unsafe_hash=True)
class Config:
    """解析配置"""

    options_first: Unset[bool] = field(default=UNSET, metadata={"default": False})
    """遇到第一个位置参数后, 是否将后续参数全部视为位置参数"""
    auto_help: Unset[bool] = field(default=UNSET, metadata={"default": True})
    """是否在出现帮助选项时直接返回帮助信息"""
    version: Unset[str | None] = field(default=UNSET, metadata={"default": None})
    """版本信息, 设置后出现版本选项时直接返回该信息"""
    raise_exception: Unset[bool] = field(default=UNSET, metadata={"default": False})
    """解析失败时是否抛出异常, 否则异常记录在结果中"""
    fuzzy_match: Unset[bool] = field(default=UNSET, metadata={"default": False})
    """未知长选项是否提示最相近的选项"""
    fuzzy_threshold: Unset[float] = field(default=UNSET, metadata={"default": 0.6})
    """模糊匹配阈值"""
    builtin_option_name: OptionNames = field(
        default_factory=lambda: {"help": {"-h", "--help"}, "version": {"--version"}},
        hash=False,
    )
    """内置选项的名称"""
    extra: dict[str, Any] = field(default_factory=dict, hash=False)
    """自定义额外配置"""

    @classmethod
    def merge(cls, self: Config, other: Config) -> Config:
        """合并解析配置, `self` 中已设置的值优先

        Args:
            self (Config): 当前配置
            other (Config): 另一个配置, 通常为命名空间的配置

        Returns:
            Config: 合并后的配置, 不再含有 `UNSET`
        """
        result = {}
        self_data = asdict(self)
        other_data = asdict(other)
        for fld in fields(Config):
            if fld.name == "extra":
                result[fld.name] = {**other_data[fld.name], **self_data[fld.name]}
                continue
            if fld.name == "builtin_option_name":
                names = {}
                default = fld.default_factory()  # type: ignore
                for k in ("help", "version"):
                    if self_data[fld.name][k] != default[k]:
                        names[k] = set(self_data[fld.name][k])
                    else:
                        names[k] = set(other_data[fld.name][k])
                result[fld.name] = names
                continue
            default = fld.metadata["default"]
            result[fld.name] = (
                self_data[fld.name] if self_data[fld.name] is not UNSET
                else other_data[fld.name] if other_data[fld.name] is not UNSET
                else default
            )
        return cls(**result)
