"""docopt 负责记录编译结果的部分"""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING
from weakref import WeakKeyDictionary

from tarina import LRU

from ._internal._analyser import Analyser
from ._internal._parser import Grammar, compile_grammar
from .config import global_config

if TYPE_CHECKING:
    from .core import Docopt

logger = logging.getLogger("arclet.docopt")


class GrammarManager:
    """
    `Docopt` 编译结果管理器

    负责缓存帮助文本的编译结果, 并记录每个 `Docopt` 对应的解析器
    """

    __grammars: LRU[str, Grammar]
    __analysers: WeakKeyDictionary[Docopt, Analyser]

    def __init__(self):
        self.__grammars = LRU(global_config.cache_size)
        self.__analysers = WeakKeyDictionary()
        self.hits = 0
        self.misses = 0

        def _del():
            self.__grammars.clear()
            self.__analysers.clear()

        weakref.finalize(self, _del)

    def compile(self, source: str) -> Grammar:
        """获取帮助文本的编译结果, 优先使用缓存

        Args:
            source (str): 原始帮助文本

        Raises:
            GrammarError: 帮助文本不合法
        """
        if source in self.__grammars:
            self.hits += 1
            logger.debug("grammar cache hit")
            return self.__grammars[source]
        self.misses += 1
        grammar = self.__grammars[source] = compile_grammar(source)
        return grammar

    def register(self, command: Docopt) -> Analyser:
        """编译并记录命令对应的解析器"""
        analyser = self.__analysers[command] = Analyser(self.compile(command.source), command.config)
        return analyser

    def require(self, command: Docopt) -> Analyser:
        """获取命令对应的解析器"""
        try:
            return self.__analysers[command]
        except KeyError:
            return self.register(command)

    def delete(self, command: Docopt) -> None:
        """移除命令对应的解析器"""
        self.__analysers.pop(command, None)

    def resize(self, size: int) -> None:
        """修改缓存的最大数量"""
        self.__grammars.set_size(size)

    def clear(self) -> None:
        """清空缓存"""
        self.__grammars.clear()
        self.hits = self.misses = 0

    @property
    def cached(self) -> int:
        """缓存中的编译结果数量"""
        return len(self.__grammars)


grammar_manager = GrammarManager()

__all__ = ["grammar_manager", "GrammarManager"]
