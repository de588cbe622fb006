"""docopt 主体"""
from __future__ import annotations

from typing import Any

from ._internal._argv import Argv
from ._internal._lexer import formal_usage, printable_usage
from ._internal._parser import Grammar
from .arguments import Arguments
from .base import Config
from .config import Namespace, global_config
from .exceptions import DocoptExit, SpecialOptionTriggered
from .manager import grammar_manager
from .output import output_manager
from .typing import Argv as ArgvData


class Docopt:
    """
    以帮助文本为规格的命令行解析器

    Examples:

        >>> from arclet.docopt import Docopt
        >>> cli = Docopt(
        ...     '''Usage:
        ...       prog ship new <name>...
        ...       prog ship <name> move <x> <y> [--speed=<kn>]
        ...
        ...     Options:
        ...       --speed=<kn>  Speed in knots [default: 10].
        ...     '''
        ... )
        >>> cli.parse(["ship", "Guardian", "move", "10", "50"])["--speed"]
        '10'
    """

    source: str
    """原始帮助文本"""
    namespace: str
    """命名空间"""
    config: Config
    """解析配置"""
    grammar: Grammar
    """编译结果"""

    def __init__(self, doc: str, config: Config | None = None, namespace: str | Namespace | None = None):
        """
        编译帮助文本

        Args:
            doc (str): 帮助文本, 需要包含 `usage:` 段落, 可以包含 `options:` 段落
            config (Config | None, optional): 解析配置, 未设置的项使用命名空间的配置
            namespace (str | Namespace | None, optional): 命名空间, 默认为当前的默认命名空间

        Raises:
            GrammarError: 帮助文本不合法
        """
        ns_config = global_config.resolve(namespace) if namespace else global_config.default_namespace
        self.source = doc
        self.namespace = ns_config.name
        self.config = Config.merge(config or Config(), ns_config.config)
        self.grammar = grammar_manager.register(self).grammar

    @property
    def namespace_config(self) -> Namespace:
        return global_config.namespaces[self.namespace]

    @property
    def program(self) -> str:
        """程序名"""
        return self.grammar.program

    @property
    def usage(self) -> str:
        """`usage:` 段落原文"""
        return self.grammar.usage

    @property
    def formal_usage(self) -> str:
        """形式化的用法, 如 `( add <file> ) | ( rm <file> )`"""
        return formal_usage(self.grammar.usage)

    def get_help(self) -> str:
        """返回原始帮助文本"""
        return self.source

    def parse(self, argv: ArgvData | None = None) -> Arguments:
        """解析命令行参数

        Args:
            argv (ArgvData | None, optional): 字符串或字符串列表, 为 None 时使用 `sys.argv[1:]`

        Returns:
            Arguments: 解析结果, 失败时 `matched` 为 False, 异常记录在 `error_info` 中

        Raises:
            ParseFailure: 仅当 `Config.raise_exception` 为 True 时抛出
        """
        analyser = grammar_manager.require(self)
        data = Argv(
            analyser.options,
            bool(self.config.options_first),
            self.grammar.uses_marker,
            bool(self.config.fuzzy_match),
            self.config.fuzzy_threshold,  # type: ignore
        ).build(argv)
        result = analyser.process(data)
        if isinstance(result, SpecialOptionTriggered):
            output_manager.send(result.output, self.program)
        return analyser.export(data, result)

    def __call__(self, argv: ArgvData | None = None) -> Arguments:
        return self.parse(argv)

    def __repr__(self):
        return f"{self.__class__.__name__}::{self.program}(namespace={self.namespace!r})"


def docopt(
    doc: str,
    argv: ArgvData | None = None,
    help: bool = True,
    version: Any = None,
    options_first: bool = False,
) -> Arguments:
    """经典的 docopt 入口

    出现帮助或版本选项时输出对应内容并以退出码 0 退出; 参数不合法时输出错误与用法并以退出码 1 退出

    Args:
        doc (str): 帮助文本
        argv (ArgvData | None, optional): 命令行参数, 为 None 时使用 `sys.argv[1:]`
        help (bool, optional): 是否处理 `-h` 与 `--help`
        version (Any, optional): 版本信息, 设置后处理 `--version`
        options_first (bool, optional): 遇到第一个位置参数后, 是否将后续参数全部视为位置参数

    Raises:
        GrammarError: 帮助文本不合法
        DocoptExit: 帮助, 版本或参数不合法
    """
    cli = Docopt(
        doc,
        Config(
            options_first=options_first,
            auto_help=help,
            version=None if version is None else str(version),
            raise_exception=False,
        ),
    )
    result = cli.parse(argv)
    if result.matched:
        return result
    if isinstance(result.error_info, SpecialOptionTriggered):
        raise DocoptExit(code=0)
    raise DocoptExit(str(result.error_info), printable_usage(doc))
