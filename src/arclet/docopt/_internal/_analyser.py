from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Any, Iterable

from tarina import lang

from ..action import Action, append, append_default, count, store_default, store_flag, store_value
from ..arguments import Arguments
from ..base import (
    Argument,
    Command,
    Config,
    Either,
    Leaf,
    OneOrMore,
    Option,
    OptionRef,
    Pattern,
    iter_leaves,
)
from ..exceptions import (
    HelpRequested,
    ParseFailure,
    SpecialOptionTriggered,
    UsagePatternMismatch,
    UserInputError,
    VersionRequested,
)
from ..model import LeafMatch, Token, TokenKind
from ..typing import BindingValue
from ._matcher import Matcher

if TYPE_CHECKING:
    from ._argv import Argv
    from ._options import OptionTable
    from ._parser import Grammar

logger = logging.getLogger("arclet.docopt")


def multiplicity(node: Pattern) -> Counter[str]:
    """计算单个用法分支中每个名称最多能出现的次数

    序列中累加, `Either` 中取最大值, `OneOrMore` 中至少视为两次
    """
    if isinstance(node, (Command, Argument, OptionRef)):
        return Counter({node.name: 1})
    if isinstance(node, OneOrMore):
        return Counter({k: 2 * v for k, v in multiplicity(node.child).items()})
    result: Counter[str] = Counter()
    if isinstance(node, Either):
        for child in node.children:
            result |= multiplicity(child)
        return result
    for child in node.children:
        result.update(multiplicity(child))
    return result


def leaf_action(leaf: Leaf, repeating: bool) -> Action:
    """依据叶子节点的种类与是否可重复, 决定其在结果中的绑定方式

    Args:
        leaf (Leaf): 叶子节点
        repeating (bool): 同一分支中是否可能匹配多次
    """
    if isinstance(leaf, Argument):
        return append if repeating else store_value
    if isinstance(leaf, Command) or not leaf.option.takes_value:
        return count if repeating else store_flag
    default = leaf.option.default
    if repeating:
        return append if default is None else append_default(default)
    return store_value if default is None else store_default(default)


def compile_actions(pattern: Pattern) -> dict[str, Action]:
    """枚举模式树中的所有名称, 按首次出现的顺序给出其绑定方式"""
    counts = multiplicity(pattern)
    actions: dict[str, Action] = {}
    for leaf in iter_leaves(pattern):
        if leaf.name not in actions:
            actions[leaf.name] = leaf_action(leaf, counts[leaf.name] > 1)
    return actions


def reduce_bindings(transcript: Iterable[LeafMatch], actions: dict[str, Action]) -> dict[str, BindingValue]:
    """将匹配记录合并为最终结果

    Args:
        transcript (Iterable[LeafMatch]): 匹配记录
        actions (dict[str, Action]): 每个名称的绑定方式

    Returns:
        dict[str, BindingValue]: 包含全部名称的结果, 未匹配的名称为其初始值
    """
    result: dict[str, Any] = {name: act.initial() for name, act in actions.items()}
    touched: set[str] = set()
    for item in sorted(transcript, key=lambda x: x.index):
        act = actions[item.name]
        result[item.name] = act.fold(result[item.name], item.value, item.name not in touched)
        touched.add(item.name)
    return result


def builtin_options(table: OptionTable, config: Config) -> list[Option]:
    """选项表中缺少的内置选项"""
    names = set()
    if config.auto_help:
        names |= config.builtin_option_name["help"]
    if config.version is not None:
        names |= config.builtin_option_name["version"]
    return [
        Option(long=name) if name.startswith("--") else Option(short=name)
        for name in sorted(names)
        if not table.lookup(name)
    ]


class Analyser:
    """命令解析器, 依次进行参数切分, 内置选项检查, 模式匹配与结果合并

    解析器本身在编译后不再改变, 每次解析的中间结果只存在于调用栈中

    Attributes:
        grammar (Grammar): 编译后的用法
        config (Config): 解析配置
        actions (dict[str, Action]): 每个名称的绑定方式
        options (OptionTable): 加入了内置选项的选项表
    """

    def __init__(self, grammar: Grammar, config: Config):
        self.grammar = grammar
        self.config = config
        self.actions = compile_actions(grammar.pattern)
        self.options = grammar.options.with_options(*builtin_options(grammar.options, config))

    def __repr__(self):
        return f"<{self.__class__.__name__} of {self.grammar.program!r}>"

    def special(self, tokens: list[Token]) -> SpecialOptionTriggered | None:
        """检查是否出现了帮助或版本选项, 以选项的规范名称判断"""
        names = {tk.option.name for tk in tokens if tk.kind is TokenKind.OPTION}  # type: ignore
        if self.config.auto_help and names & self.config.builtin_option_name["help"]:
            return HelpRequested(lang.require("builtin", "help"), self.grammar.source)
        if self.config.version is not None and names & self.config.builtin_option_name["version"]:
            return VersionRequested(lang.require("builtin", "version"), str(self.config.version))
        return None

    def process(self, argv: Argv) -> dict[str, BindingValue] | Exception:
        """主体解析函数

        Args:
            argv (Argv): 已传入数据的命令行参数

        Returns:
            dict[str, BindingValue] | Exception: 合并后的结果, 或解析失败与内置选项触发时的异常
        """
        try:
            tokens = argv.tokenize()
        except UserInputError as e:
            return e
        if exc := self.special(tokens):
            return exc
        matcher = Matcher(tokens)
        transcript = matcher.match(self.grammar.pattern)
        if transcript is None:
            left = [str(tokens[i]) for i in matcher.closest]
            msg = lang.require("analyser", "mismatch")
            if left:
                msg = f"{msg} {lang.require('analyser', 'left').format(target=', '.join(left))}"
            return UsagePatternMismatch(msg, left)
        logger.debug("%r matched %d token(s)", self.grammar.program, len(tokens))
        return reduce_bindings(transcript, self.actions)

    def export(self, argv: Argv, result: dict[str, BindingValue] | Exception) -> Arguments:
        """创建 `Arguments` 解析结果, 其一定是一次解析的最后部分

        Args:
            argv (Argv): 命令行参数
            result (dict[str, BindingValue] | Exception): `process` 的返回值
        """
        if not isinstance(result, Exception):
            return Arguments(self.grammar.program, argv.raw_data.copy(), True, result)
        if self.config.raise_exception and isinstance(result, ParseFailure):
            raise result
        arguments = Arguments(self.grammar.program, argv.raw_data.copy(), False, error_info=result)
        if isinstance(result, UsagePatternMismatch):
            arguments.error_data = result.left
        elif isinstance(result, UserInputError):
            arguments.error_data = argv.raw_data[max(argv.current_index - 1, 0):]
        if isinstance(result, SpecialOptionTriggered):
            arguments.output = result.output
        return arguments
