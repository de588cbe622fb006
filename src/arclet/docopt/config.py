from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from .i18n import lang as lang
from .base import Config


@dataclass(init=True, repr=True)
class Namespace:
    """命名空间配置, 用于规定同一命名空间下的默认解析配置"""

    name: str
    """命名空间名称"""
    config: Config = field(default_factory=Config)
    """默认配置"""

    def __eq__(self, other):
        return isinstance(other, Namespace) and other.name == self.name

    def __hash__(self):
        return hash(self.name)


class _DocoptConfig:
    """全局配置类"""

    cache_size: int = 128
    """编译结果缓存的最大数量"""

    def __init__(self):
        self.namespaces: dict[str, Namespace] = {}
        self._current = self.resolve("Docopt").name

    def resolve(self, np: str | Namespace) -> Namespace:
        """获取命名空间, 不存在时登记

        Args:
            np (str | Namespace): 命名空间名称, 或命名空间配置; 传入配置时会覆盖同名的已有配置
        """
        if isinstance(np, Namespace):
            self.namespaces[np.name] = np
            return np
        return self.namespaces.setdefault(np, Namespace(np))

    @property
    def default_namespace(self) -> Namespace:
        return self.namespaces[self._current]

    @default_namespace.setter
    def default_namespace(self, np: str | Namespace):
        self._current = self.resolve(np).name


global_config = _DocoptConfig()


@contextmanager
def namespace(name: Namespace | str) -> Iterator[Namespace]:
    """暂时切换默认命名空间, 退出时恢复原先的默认命名空间

    Example:
        >>> with namespace("xxx") as ns:
        ...     ns.config.options_first = True
        ...     cli = Docopt(...)
        ... assert cli.config.options_first
    """
    previous = global_config.default_namespace
    global_config.default_namespace = name
    try:
        yield global_config.default_namespace
    finally:
        global_config.default_namespace = previous


__all__ = ["global_config", "Namespace", "namespace", "lang"]
