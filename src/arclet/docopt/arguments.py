from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterator, Mapping, TypeVar, overload

from tarina import lang

from ._internal._util import attr_name, bare_name
from .typing import BindingValue

D = TypeVar("D")


class Arguments(Mapping[str, BindingValue]):
    """承载解析结果的只读映射

    键为用法中的写法, 如 `<file>`, `--speed`, `-v`, `ship`;
    也可以使用去除修饰后的名称 (`file`, `speed`) 或属性 (`args.dry_run`) 访问

    Attributes:
        source (str): 程序名
        origin (list[str]): 原始参数
        matched (bool): 是否匹配
        error_info (Exception | None): 错误信息, 或触发的内置选项
        error_data (list[str]): 未能处理的参数
        output (str | None): 内置选项需要输出的内容
    """

    def __init__(
        self,
        source: str,
        origin: list[str],
        matched: bool = False,
        bindings: dict[str, BindingValue] | None = None,
        error_info: Exception | None = None,
        error_data: list[str] | None = None,
        output: str | None = None,
    ):
        self.source = source
        self.origin = origin
        self.matched = matched
        self.bindings = bindings or {}
        self.error_info = error_info
        self.error_data = error_data or []
        self.output = output

    def _resolve(self, name: str) -> str:
        if name in self.bindings:
            return name
        candidates = [key for key in self.bindings if name in (bare_name(key), attr_name(key))]
        if len(candidates) > 1:
            raise KeyError(
                lang.require("arguments", "ambiguous_name").format(target=name, candidates=", ".join(candidates))
            )
        if not candidates:
            raise KeyError(name)
        return candidates[0]

    def __getitem__(self, item: str) -> BindingValue:
        return self.bindings[self._resolve(item)]

    def __iter__(self) -> Iterator[str]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, str):
            return False
        try:
            self._resolve(item)
        except KeyError:
            return False
        return True

    @overload
    def query(self, name: str) -> BindingValue: ...

    @overload
    def query(self, name: str, default: D) -> BindingValue | D: ...

    def query(self, name: str, default: Any = None) -> Any:
        """查询结果中的数据

        Args:
            name (str): 要查询的名称, 可以为任意一种写法
            default (Any, optional): 如果查询失败, 则返回该值
        """
        try:
            return self[name]
        except KeyError:
            return default

    @property
    def all_matched_args(self) -> Mapping[str, BindingValue]:
        """返回全部结果"""
        return MappingProxyType(self.bindings)

    def __getattr__(self, item: str):
        if item.startswith("__") or "bindings" not in self.__dict__:
            raise AttributeError(item)
        try:
            return self[item]
        except KeyError as e:
            raise AttributeError(item) from e

    def __repr__(self):
        if not self.matched:
            attrs = ((s, getattr(self, s, None)) for s in ("matched", "error_data", "error_info"))
            return f"Arguments({', '.join(f'{a}={v!r}' for a, v in attrs)})"
        return f"Arguments({self.bindings!r})"
