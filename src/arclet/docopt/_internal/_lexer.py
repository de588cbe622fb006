from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache

from tarina import lang

from ..exceptions import GrammarError
from ..model import Lexeme

_punctuation = re.compile(r"([\[\]()|]|\.\.\.)")
_word_split = re.compile(r"\s+|(\S*<.*?>)")


@lru_cache(16)
def _section_pattern(name: str) -> re.Pattern[str]:
    return re.compile(
        r"^([^\n]*" + re.escape(name) + r"[^\n]*\n?(?:[ \t].*?(?:\n|$))*)",
        re.IGNORECASE | re.MULTILINE,
    )


@dataclass(frozen=True)
class Section:
    """文本中的一个段落, 由包含名称的标题行与其后缩进的行组成

    Attributes:
        text (str): 段落原文, 去除首尾空白
        line (int): 标题行所在行号, 从 1 开始
        end (int): 段落在原文中的结束位置
    """

    text: str
    line: int
    end: int


def find_sections(name: str, source: str) -> list[Section]:
    """查找所有标题行中含有 `name` (忽略大小写) 的段落

    Args:
        name (str): 段落名称, 如 `usage:`
        source (str): 原始帮助文本
    """
    return [
        Section(mat.group(1).strip(), source.count("\n", 0, mat.start()) + 1, mat.end())
        for mat in _section_pattern(name).finditer(source)
    ]


def split_line(line: str) -> list[tuple[str, int]]:
    """将一行用法切分为词法单元, 返回 (文本, 列号) 列表

    括号、`|` 与 `...` 总是单独成为一个单元, `<...>` 内允许出现空格
    """
    spaced = _punctuation.sub(r" \1 ", line)
    result = []
    offset = 0
    for part in _word_split.split(spaced):
        if not part:
            continue
        pos = line.find(part, offset)
        if pos < 0:
            pos = offset
        result.append((part, pos))
        offset = pos + len(part)
    return result


@dataclass
class UsageSection:
    """`usage:` 段落的切分结果

    Attributes:
        section (Section): 段落原文
        program (Lexeme): 程序名
        lines (list[list[Lexeme]]): 每条用法 (不含程序名) 的词法单元
    """

    section: Section
    program: Lexeme
    lines: list[list[Lexeme]] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.section.text


def lex_usage(source: str) -> UsageSection:
    """定位 `usage:` 段落并切分为各条用法

    Args:
        source (str): 原始帮助文本

    Raises:
        GrammarError: 没有或有多个 `usage:` 段落, 段落中没有程序名, 或用法行不连续
    """
    sections = find_sections("usage:", source)
    if not sections:
        raise GrammarError(lang.require("usage", "not_found"))
    if len(sections) > 1:
        raise GrammarError(lang.require("usage", "duplicated"), sections[1].line)
    section = sections[0]
    physical = source.split("\n")
    lexemes: list[Lexeme] = []
    for index in range(section.text.count("\n") + 1):
        lineno = section.line + index
        origin = physical[lineno - 1]
        if index == 0:
            label = origin.lower().index("usage:") + len("usage:")
            origin = " " * label + origin[label:]
        lexemes.extend(Lexeme(part, lineno, column) for part, column in split_line(origin))
    if not lexemes:
        raise GrammarError(lang.require("usage", "empty"), section.line)
    program, *rest = lexemes
    result = UsageSection(section, program)
    for lex in rest:
        if lex.value == program.value or not result.lines:
            result.lines.append([])
            if lex.value == program.value:
                continue
        result.lines[-1].append(lex)
    if not result.lines:
        result.lines.append([])
    _check_contiguous(source, section, program)
    return result


def _check_contiguous(source: str, section: Section, program: Lexeme):
    lines = source[section.end:].split("\n")
    offset = source.count("\n", 0, section.end) + 1
    for index, line in enumerate(lines):
        if not line.strip():
            continue
        words = line.split()
        if line[0] in " \t" and words[0] == program.value:
            raise GrammarError(
                lang.require("usage", "not_contiguous").format(target=line.strip()),
                offset + index,
                len(line) - len(line.lstrip()),
            )
        return


def printable_usage(source: str) -> str:
    """返回原文中的 `usage:` 段落, 用于错误提示"""
    sections = find_sections("usage:", source)
    if not sections:
        raise GrammarError(lang.require("usage", "not_found"))
    if len(sections) > 1:
        raise GrammarError(lang.require("usage", "duplicated"), sections[1].line)
    return sections[0].text


def formal_usage(section: str) -> str:
    """将 `usage:` 段落转换为形式化的用法, 如 `( add <file> ) | ( rm <file> )`"""
    _, _, section = section.partition(":")
    pu = section.split()
    if not pu:
        return "(  )"
    return "( " + " ".join(") | (" if s == pu[0] else s for s in pu[1:]) + " )"
