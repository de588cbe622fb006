from __future__ import annotations

import re

_name_pat = re.compile(r"^(?:<(?P<arg>.+)>|-{1,2}(?P<opt>.+))$")


def levenshtein(source: str, target: str) -> float:
    """`编辑距离算法`_, 计算源字符串与目标字符串的相似度, 取值范围[0, 1], 值越大越相似

    Args:
        source (str): 源字符串
        target (str): 目标字符串

    .. _编辑距离算法:
        https://en.wikipedia.org/wiki/Levenshtein_distance

    """
    l_s, l_t = len(source), len(target)
    if not max(l_s, l_t):
        return 1.0
    s_range, t_range = range(l_s + 1), range(l_t + 1)
    matrix = [[(i if j == 0 else j) for j in t_range] for i in s_range]

    for i in s_range[1:]:
        for j in t_range[1:]:
            sub_distance = matrix[i - 1][j - 1] + (0 if source[i - 1] == target[j - 1] else 1)
            matrix[i][j] = min(matrix[i - 1][j] + 1, matrix[i][j - 1] + 1, sub_distance)

    return 1 - float(matrix[l_s][l_t]) / max(l_s, l_t)


def bare_name(name: str) -> str:
    """去除参数名的尖括号与选项名的前导 `-`

    Examples:
        >>> bare_name("<file>")
        'file'
        >>> bare_name("--dry-run")
        'dry-run'
    """
    if name in ("-", "--") or (mat := _name_pat.match(name)) is None:
        return name
    return mat["arg"] or mat["opt"]


def attr_name(name: str) -> str:
    """将名称转换为可作为属性访问的形式, 如 `--dry-run` 转为 `dry_run`"""
    return re.sub(r"\W", "_", bare_name(name))
