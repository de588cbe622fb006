"""docopt 类型相关"""
from __future__ import annotations

import enum
from typing import Any, List, Literal, TypeVar, Union, final
from typing_extensions import TypeAlias


@final
class _UNSET_TYPE(enum.Enum):
    _UNSET = "<UNSET>"

    def __repr__(self) -> str:
        return "<UNSET>"

    def __str__(self) -> str:
        return self.__repr__()

    def __bool__(self) -> Literal[False]:
        return False

    def __copy__(self):
        return self._UNSET

    def __deepcopy__(self, memo: dict[int, Any]):
        return self._UNSET


UNSET = _UNSET_TYPE._UNSET

_T = TypeVar("_T")

Unset: TypeAlias = Union[_T, Literal[_UNSET_TYPE._UNSET]]

TokenValue: TypeAlias = Union[str, bool, None]
"""argv 中单个参数携带的值: 字符串, 无值选项的 True, 或缺省的 None"""

BindingValue: TypeAlias = Union[bool, int, str, List[Any], None]
"""最终结果中的值: Bool, Count, String, List 或 Absent(None)"""

Argv: TypeAlias = Union[str, List[str]]
"""可传入的命令行参数, 字符串会按引号感知的方式切分"""
