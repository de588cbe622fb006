from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable
from weakref import finalize


@dataclass
class OutputManager:
    """帮助、版本与用法信息的输出管理器"""

    actions: dict[str, Callable[[str], Any]] = field(default_factory=dict)
    """各程序的输出行为"""
    send_action: Callable[[str], Any] = field(default=print)  # type: ignore
    """默认的发送行为"""
    _out_cache: dict[str, dict[str, Any]] = field(default_factory=dict, hash=False, init=False)

    def __post_init__(self):
        def _clr(mgr: OutputManager):
            mgr.actions.clear()
            mgr._out_cache.clear()

        finalize(self, _clr, self)

    def send(self, text: str, program: str | None = None) -> dict[str, Any]:
        """调用输出行为发送文本

        Args:
            text (str): 输出内容
            program (str | None, optional): 程序名, 用于选择输出行为

        Returns:
            dict[str, Any]: 输出行为的返回值, 默认为 `{"output": text}`
        """
        action = self.actions.get(program or "$global", self.send_action)
        data = action(text)
        res = data if data and isinstance(data, dict) else {"output": text}
        for key in {program or "$global", "$global"}:
            if key in self._out_cache:
                self._out_cache[key].update(res)
        return res

    def set_action(self, action: Callable[[str], Any], program: str | None = None):
        """修改输出行为

        Args:
            action (Callable[[str], Any]): 输出行为函数
            program (str | None, optional): 输出行为指定对应的程序名
        """
        if program is None or program == "$global":
            self.send_action = action
        else:
            self.actions[program] = action

    @contextmanager
    def capture(self, program: str | None = None):
        """捕获输出

        Args:
            program (str | None, optional): 输出行为指定对应的程序名

        Yields:
            dict[str, Any]: 输出内容
        """
        program = program or "$global"
        _cache = self._out_cache.setdefault(program, {})
        yield _cache
        _cache.clear()


output_manager = OutputManager()

__all__ = ["output_manager", "OutputManager"]
