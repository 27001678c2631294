# FILE: src/static_gallery/infrastructure/optimizers/minifier.py
"""
CSS/JS テキスト向けの簡易ミニファイア。

コメント除去は文字列リテラルを考慮しないテキスト上のヒューリスティックであり、
文字列中の `//` や `/*` も除去対象になります。
空白の圧縮は引用符の内側を保持します。
"""

import re

# ブロックコメント(直後の改行を含む)と行コメント(終端の改行を含む)
COMMENT_PATTERN = re.compile(r'/\*.*?\*/\n*|//.*?\n', re.DOTALL)

_QUOTES = frozenset('"\'`')
_BLANKS = frozenset(' \t')


def strip_comments(text: str) -> str:
    """ブロックコメントと行コメントを取り除きます。"""
    return COMMENT_PATTERN.sub('', text)


def collapse_whitespace(text: str) -> str:
    """
    文字列リテラルの外側にある余分な空白を取り除きます。

    空白・タブ・改行の直後に続く空白・タブ、および改行の直後に続く改行を削除します。
    引用符 (" ' `) は同じ文字が現れるまで文字列として扱い、内部はそのまま残します。
    エスケープシーケンスは解釈しません。
    """
    output: list[str] = []
    quote: str | None = None

    for char in text:
        if quote is not None:
            output.append(char)
            if char == quote:
                quote = None
            continue

        last = output[-1] if output else ''
        if char in _BLANKS and (last in _BLANKS or last == '\n'):
            continue
        if char == '\n' and last == '\n':
            continue

        if char in _QUOTES:
            quote = char
        output.append(char)

    return ''.join(output)


def minify_css(text: str) -> str:
    """コメントを除去した後、タブと改行を全て取り除きます。"""
    return strip_comments(text).replace('\t', '').replace('\n', '')


def minify_js(text: str) -> str:
    """コメントを除去した後、文字列リテラル外の空白を圧縮します。"""
    return collapse_whitespace(strip_comments(text))
