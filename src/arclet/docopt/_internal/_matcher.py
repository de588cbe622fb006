from __future__ import annotations

from typing import Iterator, Tuple
from typing_extensions import TypeAlias

from ..base import (
    Argument,
    Command,
    Either,
    OneOrMore,
    OptionRef,
    OptionsShortcut,
    Optional,
    Pattern,
    Required,
)
from ..model import LeafMatch, Token, TokenKind

Left: TypeAlias = Tuple[int, ...]
Transcript: TypeAlias = Tuple[LeafMatch, ...]
Outcome: TypeAlias = Tuple[Left, Transcript]


class Matcher:
    """模式树的回溯匹配器

    每个节点的匹配结果为若干 (剩余参数, 匹配记录) 的组合, 按声明顺序依次给出;
    同一节点的结果按剩余参数去重, 已知无结果的 (节点, 剩余参数) 会被记录下来

    Attributes:
        tokens (list[Token]): 待匹配的参数序列
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self._dead: set[tuple[int, Left]] = set()
        self.closest: Left = tuple(range(len(tokens)))
        """匹配失败时剩余参数最少的一次尝试"""

    def match(self, pattern: Pattern) -> Transcript | None:
        """匹配全部参数

        Returns:
            Transcript | None: 第一个消耗掉全部参数的匹配记录, 不存在时为 None
        """
        for left, transcript in self.outcomes(pattern, tuple(range(len(self.tokens)))):
            if not left:
                return transcript
            if len(left) < len(self.closest):
                self.closest = left
        return None

    def outcomes(self, node: Pattern, left: Left) -> Iterator[Outcome]:
        key = (id(node), left)
        if key in self._dead:
            return
        seen: set[Left] = set()
        for rest, transcript in self._dispatch(node, left):
            if rest in seen:
                continue
            seen.add(rest)
            yield rest, transcript
        if not seen:
            self._dead.add(key)

    def _dispatch(self, node: Pattern, left: Left) -> Iterator[Outcome]:
        if isinstance(node, Command):
            return self._command(node, left)
        if isinstance(node, Argument):
            return self._argument(node, left)
        if isinstance(node, OptionRef):
            return self._option(node, left)
        if isinstance(node, Required):
            return self._sequence(node.children, 0, left, False)
        if isinstance(node, (Optional, OptionsShortcut)):
            return self._sequence(node.children, 0, left, True)
        if isinstance(node, Either):
            return self._either(node, left)
        if isinstance(node, OneOrMore):
            return self._one_or_more(node.child, left)
        raise TypeError(node)

    def _first_positional(self, left: Left) -> int | None:
        for index in left:
            if self.tokens[index].kind is not TokenKind.OPTION:
                return index
        return None

    def _command(self, node: Command, left: Left) -> Iterator[Outcome]:
        index = self._first_positional(left)
        if index is None:
            return
        token = self.tokens[index]
        if token.raw == node.name and (token.kind is TokenKind.PLAIN or node.name == "--"):
            yield _without(left, index), (LeafMatch(node, index, True),)

    def _argument(self, node: Argument, left: Left) -> Iterator[Outcome]:
        index = self._first_positional(left)
        if index is None:
            return
        token = self.tokens[index]
        if token.kind is TokenKind.PLAIN:
            yield _without(left, index), (LeafMatch(node, index, token.value),)

    def _option(self, node: OptionRef, left: Left) -> Iterator[Outcome]:
        for index in left:
            token = self.tokens[index]
            if token.kind is TokenKind.OPTION and token.option.name == node.name:  # type: ignore
                yield _without(left, index), (LeafMatch(node, index, token.value),)
                return

    def _sequence(self, children: tuple[Pattern, ...], at: int, left: Left, optional: bool) -> Iterator[Outcome]:
        if at == len(children):
            yield left, ()
            return
        for rest, head in self.outcomes(children[at], left):
            for final, tail in self._sequence(children, at + 1, rest, optional):
                yield final, head + tail
        if optional:
            yield from self._sequence(children, at + 1, left, optional)

    def _either(self, node: Either, left: Left) -> Iterator[Outcome]:
        for child in node.children:
            yield from self.outcomes(child, left)

    def _one_or_more(self, child: Pattern, left: Left) -> Iterator[Outcome]:
        # 显式栈: 先给出重复次数更多的结果
        stack: list[tuple[Iterator[Outcome], Left, Transcript]] = [(self.outcomes(child, left), left, ())]
        while stack:
            current, base, done = stack[-1]
            step = next(current, None)
            if step is None:
                stack.pop()
                if stack:
                    yield base, done
                continue
            rest, transcript = step
            if rest == base:
                yield rest, done + transcript
                continue
            stack.append((self.outcomes(child, rest), rest, done + transcript))


def _without(left: Left, index: int) -> Left:
    return tuple(i for i in left if i != index)


def match(pattern: Pattern, tokens: list[Token]) -> Transcript | None:
    """匹配参数序列, 失败时返回 None"""
    return Matcher(tokens).match(pattern)
