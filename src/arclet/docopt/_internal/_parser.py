from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from functools import cached_property

from tarina import lang

from ..base import (
    Argument,
    Command,
    Either,
    OneOrMore,
    Option,
    OptionRef,
    OptionsShortcut,
    Optional,
    Pattern,
    Required,
    iter_leaves,
)
from ..exceptions import GrammarError, GrammarWarning
from ..model import Lexeme
from ._lexer import UsageSection, lex_usage
from ._options import OptionTable, parse_defaults

logger = logging.getLogger("arclet.docopt")

_closing = {"(": ")", "[": "]"}
_delimiters = {"(", ")", "[", "]", "|", "..."}


class _Tokens:
    """一条用法的词法单元流"""

    __slots__ = ("lexemes", "index", "anchor")

    def __init__(self, lexemes: list[Lexeme], anchor: Lexeme):
        self.lexemes = lexemes
        self.index = 0
        self.anchor = anchor

    def current(self) -> str | None:
        if self.index < len(self.lexemes):
            return self.lexemes[self.index].value
        return None

    def move(self) -> Lexeme:
        lex = self.lexemes[self.index]
        self.index += 1
        return lex

    def error(self, msg: str, lex: Lexeme | None = None) -> GrammarError:
        if lex is None:
            lex = self.lexemes[self.index] if self.index < len(self.lexemes) else self.anchor
        return GrammarError(msg, lex.line, lex.column)


class PatternParser:
    """用法的递归下降解析器

    语法如下::

        expr ::= seq ( '|' seq )*
        seq  ::= ( atom [ '...' ] )*
        atom ::= '(' expr ')' | '[' expr ']' | 'options' | long | shorts | argument | command

    Attributes:
        section (OptionTable): `options:` 段落中的选项
        table (OptionTable): 解析过程中加入了独立选项的选项表
    """

    def __init__(self, section: OptionTable):
        self.section = section
        self.table = section

    def _add(self, option: Option) -> Option:
        self.table = self.table.with_options(option)
        return option

    def parse(self, usage: UsageSection) -> Either:
        """解析全部用法, 结果为 `Either(Required(line1), Required(line2), ...)`"""
        lines: list[Required] = []
        for index, lexemes in enumerate(usage.lines):
            tokens = _Tokens(lexemes, usage.program)
            result = self.parse_expr(tokens)
            if tokens.current() is not None:
                raise tokens.error(lang.require("pattern", "unexpected").format(target=tokens.current()))
            line = _fill_shortcut(Required(*result), self.section)
            if line in lines:
                warnings.warn(
                    lang.require("pattern", "duplicated_line").format(index=index + 1, origin=lines.index(line) + 1),
                    GrammarWarning,
                    stacklevel=4,
                )
            lines.append(line)
        return Either(*lines)

    def parse_expr(self, tokens: _Tokens) -> list[Pattern]:
        seq = self.parse_seq(tokens)
        if tokens.current() != "|":
            return seq
        result: list[Pattern] = [Required(*seq)] if len(seq) > 1 else seq
        while tokens.current() == "|":
            tokens.move()
            seq = self.parse_seq(tokens)
            result += [Required(*seq)] if len(seq) > 1 else seq
        return [Either(*result)] if len(result) > 1 else result

    def parse_seq(self, tokens: _Tokens) -> list[Pattern]:
        result: list[Pattern] = []
        while tokens.current() not in (None, "]", ")", "|"):
            atom = self.parse_atom(tokens)
            if tokens.current() == "...":
                tokens.move()
                atom = [OneOrMore(Required(*atom) if len(atom) > 1 else atom[0])]
            result += atom
        return result

    def parse_atom(self, tokens: _Tokens) -> list[Pattern]:
        token = tokens.current()
        assert token is not None
        if token in _closing:
            opening = tokens.move()
            result = self.parse_expr(tokens)
            if tokens.current() != _closing[token]:
                raise tokens.error(lang.require("pattern", "unmatched").format(target=token), opening)
            tokens.move()
            return [Required(*result) if token == "(" else Optional(*result)]
        if token == "...":
            raise tokens.error(lang.require("pattern", "dangling_ellipsis"))
        if token == "options":
            tokens.move()
            return [OptionsShortcut()]
        if token.startswith("--") and token != "--":
            return self.parse_long(tokens)
        if token.startswith("-") and token not in ("-", "--"):
            return self.parse_shorts(tokens)
        if (token.startswith("<") and token.endswith(">")) or token.isupper():
            return [Argument(tokens.move().value)]
        return [Command(tokens.move().value)]

    def parse_long(self, tokens: _Tokens) -> list[Pattern]:
        lex = tokens.move()
        long, eq, _ = lex.value.partition("=")
        similar = self.table.by_long(long)
        if not similar:
            return [OptionRef(self._add(Option(None, long, 1 if eq else 0)))]
        option = similar[0]
        if not option.takes_value:
            if eq:
                raise tokens.error(lang.require("pattern", "must_not_have_argument").format(target=long), lex)
        elif not eq:
            self._placeholder(tokens, lex, long)
        return [OptionRef(option)]

    def parse_shorts(self, tokens: _Tokens) -> list[Pattern]:
        lex = tokens.move()
        left = lex.value.lstrip("-")
        parsed: list[Pattern] = []
        while left:
            short, left = f"-{left[0]}", left[1:]
            similar = self.table.by_short(short)
            if len(similar) > 1:
                raise tokens.error(
                    lang.require("pattern", "ambiguous").format(target=short, count=len(similar)), lex
                )
            if not similar:
                parsed.append(OptionRef(self._add(Option(short))))
                continue
            option = similar[0]
            if option.takes_value:
                if not left:
                    self._placeholder(tokens, lex, short)
                left = ""
            parsed.append(OptionRef(option))
        return parsed

    @staticmethod
    def _placeholder(tokens: _Tokens, lex: Lexeme, name: str):
        value = tokens.current()
        if value is None or value == "--" or value in _delimiters:
            raise tokens.error(lang.require("pattern", "requires_argument").format(target=name), lex)
        tokens.move()


def _fill_shortcut(pattern: Pattern, section: OptionTable) -> Pattern:
    """将用法中的 `[options]` 填充为同一用法中未提及的全部段落选项"""
    named = {leaf.name for leaf in iter_leaves(pattern) if isinstance(leaf, OptionRef)}
    rest = tuple(OptionRef(opt) for name, opt in section.items() if name not in named)

    def _fill(node: Pattern) -> Pattern:
        if isinstance(node, OptionsShortcut):
            return OptionsShortcut(*rest)
        if isinstance(node, OneOrMore):
            return OneOrMore(_fill(node.child))
        if isinstance(node, (Required, Optional, Either)):
            return node.__class__(*map(_fill, node.children))
        return node

    return _fill(pattern)


@dataclass(frozen=True)
class Grammar:
    """编译后的用法

    Attributes:
        source (str): 原始帮助文本
        usage (str): `usage:` 段落原文
        program (str): 程序名
        pattern (Either): 模式树
        options (OptionTable): 完整的选项表, 包含用法中的独立选项
        section (OptionTable): `options:` 段落中的选项
    """

    source: str
    usage: str
    program: str
    pattern: Either
    options: OptionTable
    section: OptionTable

    @cached_property
    def uses_marker(self) -> bool:
        """用法中是否出现了 `--` 命令"""
        return any(isinstance(leaf, Command) and leaf.name == "--" for leaf in iter_leaves(self.pattern))


def compile_grammar(source: str) -> Grammar:
    """将帮助文本编译为模式树与选项表

    Args:
        source (str): 原始帮助文本

    Raises:
        GrammarError: 帮助文本不合法
    """
    usage = lex_usage(source)
    section = parse_defaults(source)
    parser = PatternParser(section)
    pattern = parser.parse(usage)
    logger.debug("compiled %d usage line(s) for %r: %r", len(pattern.children), usage.program.value, pattern)
    return Grammar(source, usage.text, usage.program.value, pattern, parser.table, section)
