from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class ActType(IntEnum):
    """名称在结果中的绑定方式"""

    STORE = 0
    """存储单个值: 命令与无值选项为 bool, 参数与有值选项为字符串或 None"""
    APPEND = 1
    """将每次匹配的值按参数顺序追加到列表中

    第一次匹配会丢弃默认值, 以保证列表只包含实际传入的值
    """
    COUNT = 2
    """每次匹配计数器加一

    第一次匹配会从 0 开始计数, 与默认值无关
    """


@dataclass(eq=True, frozen=True)
class Action:
    """名称的绑定动作

    Attributes:
        type (ActType): 绑定方式
        value (Any): 未匹配时的值
    """

    type: ActType
    value: Any

    def initial(self) -> Any:
        """返回未匹配时的值, 列表会被复制以免共享"""
        if self.type == ActType.APPEND:
            return list(self.value)
        return self.value

    def fold(self, current: Any, value: Any, first: bool) -> Any:
        """将一次匹配的值合并进当前值

        Args:
            current (Any): 当前值
            value (Any): 本次匹配到的值
            first (bool): 是否为该名称的第一次匹配
        """
        if self.type == ActType.COUNT:
            return 1 if first else current + 1
        if self.type == ActType.APPEND:
            return [value] if first else [*current, value]
        return value


store_flag = Action(ActType.STORE, False)
"""命令与无值选项: 未匹配时为 False"""
store_value = Action(ActType.STORE, None)
"""参数与无默认值的有值选项: 未匹配时为 None"""
count = Action(ActType.COUNT, 0)
"""可重复的命令与无值选项"""
append = Action(ActType.APPEND, ())
"""可重复的参数与有值选项"""


def store_default(value: Any) -> Action:
    """存储一个默认值

    Args:
        value (Any): 未匹配时的默认值
    """
    return Action(ActType.STORE, value)


def append_default(value: str) -> Action:
    """以默认值按空白切分后的列表作为初始值

    Args:
        value (str): `[default: ...]` 中的原始文本
    """
    return Action(ActType.APPEND, tuple(value.split()))
