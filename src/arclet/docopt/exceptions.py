"""docopt 错误提示相关"""

from __future__ import annotations

from typing import Any


class DocoptException(Exception):
    """docopt 异常基类"""


class GrammarError(DocoptException):
    """用法文本或选项文本本身不合法

    Attributes:
        line (int | None): 出错位置所在的行 (从 1 开始)
        column (int | None): 出错位置所在的列 (从 0 开始)
    """

    def __init__(self, msg: str, line: int | None = None, column: int | None = None):
        if line is not None:
            msg = f"{msg} (line {line}, column {column or 0})"
        super().__init__(msg)
        self.line = line
        self.column = column


class ParseFailure(DocoptException):
    """命令行参数解析失败的基类"""


class UserInputError(ParseFailure):
    """传入的命令行参数无法依据选项表进行切分"""

    def __init__(self, msg: str, token: str | None = None):
        super().__init__(msg)
        self.token = token


class UsagePatternMismatch(ParseFailure):
    """切分成功, 但没有任何用法能完整匹配所有参数"""

    def __init__(self, msg: str, left: list[Any] | None = None):
        super().__init__(msg)
        self.left = left or []


class SpecialOptionTriggered(DocoptException):
    """内置选项被触发, 并非真正的错误"""

    def __init__(self, msg: str, output: str):
        super().__init__(msg)
        self.output = output


class HelpRequested(SpecialOptionTriggered):
    """请求输出帮助信息"""


class VersionRequested(SpecialOptionTriggered):
    """请求输出版本信息"""


class DocoptExit(SystemExit):
    """经典 `docopt()` 入口在帮助、版本或参数错误时退出程序

    未指定退出码时, 以 `message` 与用法文本作为退出信息 (即退出码 1)
    """

    def __init__(self, message: str = "", usage: str = "", code: int | str | None = None):
        if code is None:
            code = f"{message}\n{usage}".strip() or None
        super().__init__(code)
        self.message = message
        self.usage = usage


class GrammarWarning(UserWarning):
    """用法文本中可能存在歧义的写法"""
