# FILE: src/static_gallery/infrastructure/optimizers/template_optimizer.py
from dataclasses import dataclass
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, urlsplit

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.element import PageElement
from loguru import logger

from ...domain.interfaces import IGalleryRepository
from ...shared.enums import ExitCode, NodeKind
from ...shared.exceptions import TemplateError
from .minifier import minify_css, minify_js


@dataclass
class StyleReference:
    """link(rel=stylesheet) 要素または style 要素。href が None ならインライン。"""

    node: Tag
    href: str | None = None


@dataclass
class ScriptReference:
    """script 要素。src が None ならインライン。"""

    node: Tag
    src: str | None = None


@dataclass(frozen=True)
class _InlineRule:
    tag_name: str
    minify: Callable[[str], str]
    invalid_code: ExitCode
    read_code: ExitCode
    remove_code: ExitCode


_STYLE_RULE = _InlineRule(
    'style', minify_css, ExitCode.INVALID_STYLE, ExitCode.STYLE_READ, ExitCode.STYLE_REMOVE
)
_SCRIPT_RULE = _InlineRule(
    'script', minify_js, ExitCode.INVALID_SCRIPT, ExitCode.SCRIPT_READ, ExitCode.SCRIPT_REMOVE
)


def parse_document(text: str) -> BeautifulSoup:
    # rel 属性をリストではなく文字列のまま扱う
    return BeautifulSoup(text, 'html.parser', multi_valued_attributes=None)


def node_kind(node: PageElement) -> NodeKind:
    """bs4 のノードを4種類のノード種別のいずれかに分類します。"""
    if isinstance(node, BeautifulSoup):
        return NodeKind.DOCUMENT
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, Comment):
        return NodeKind.COMMENT
    if isinstance(node, NavigableString):
        return NodeKind.TEXT
    raise TypeError(f'未知のノード型です: {type(node).__name__}')


def _find_references(node: PageElement, match: Callable[[Tag], object], found: list) -> None:
    """
    深さ優先で探索します。一致した要素の子孫には降りません。
    文書と要素以外のノードは子を持たないため、そのまま戻ります。
    """
    kind = node_kind(node)
    if kind is NodeKind.ELEMENT:
        reference = match(node)
        if reference is not None:
            found.append(reference)
            return
    elif kind is not NodeKind.DOCUMENT:
        return

    for child in node.contents:
        _find_references(child, match, found)


def _match_style(node: Tag) -> StyleReference | None:
    if node.name == 'link' and node.get('rel') == 'stylesheet':
        href = node.get('href')
        if not href:
            raise TemplateError(
                'href 属性の無いスタイルシート参照があります', ExitCode.INVALID_STYLE
            )
        return StyleReference(node, href)
    if node.name == 'style':
        return StyleReference(node)
    return None


def _match_script(node: Tag) -> ScriptReference | None:
    if node.name == 'script':
        return ScriptReference(node, node.get('src') or None)
    return None


def find_style_references(document: PageElement) -> list[StyleReference]:
    found: list[StyleReference] = []
    _find_references(document, _match_style, found)
    return found


def find_script_references(document: PageElement) -> list[ScriptReference]:
    found: list[ScriptReference] = []
    _find_references(document, _match_script, found)
    return found


def remove_comment_nodes(node: PageElement) -> int:
    """ツリー全体からHTMLコメントを取り除き、削除した数を返します。"""
    removed = 0
    for child in list(getattr(node, 'contents', ())):
        kind = node_kind(child)
        if kind is NodeKind.COMMENT:
            child.extract()
            removed += 1
        elif kind is NodeKind.ELEMENT:
            removed += remove_comment_nodes(child)
    return removed


def is_remote_reference(reference: str) -> bool:
    """http(s):, //, data: などテンプレート外を指す参照かどうか。"""
    parts = urlsplit(reference)
    return bool(parts.scheme or parts.netloc)


class TemplateOptimizer:
    """
    出力済みの index.html を解析し、外部CSS/JSをインライン化して
    コメントを除去した上で、同じファイルへ書き戻すクラス。
    """

    def __init__(self, repository: IGalleryRepository):
        self.repository = repository

    def optimize(self, index_path: Path) -> None:
        log = logger.bind(file=str(index_path))
        data = self.repository.read_bytes(index_path, ExitCode.OPTIMIZE_READ)
        try:
            document = parse_document(data.decode('utf-8'))
        except Exception as e:
            raise TemplateError(
                f'テンプレートを解析できません: "{index_path}": {e}',
                ExitCode.OPTIMIZE_PARSE,
            ) from e

        base_dir = index_path.parent
        for style in find_style_references(document):
            self._process(document, style.node, style.href, base_dir, _STYLE_RULE)
        for script in find_script_references(document):
            self._process(document, script.node, script.src, base_dir, _SCRIPT_RULE)
        removed = remove_comment_nodes(document)
        log.debug('HTMLコメントを {} 件削除しました。', removed)

        self.repository.write_bytes(
            index_path, str(document).encode('utf-8'), ExitCode.OPTIMIZE_WRITE
        )
        log.success('テンプレートを最適化しました。')

    def _process(
        self,
        document: BeautifulSoup,
        node: Tag,
        reference: str | None,
        base_dir: Path,
        rule: _InlineRule,
    ) -> None:
        if reference is None:
            self._minify_inline(node, rule)
            return
        if is_remote_reference(reference):
            logger.info('外部URLはインライン化しません: {}', reference)
            return

        path = self._resolve(reference, base_dir, rule)
        content = self.repository.read_bytes(path, rule.read_code)
        try:
            text = content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise TemplateError(
                f'UTF-8として読み込めません: "{path}"', rule.read_code
            ) from e

        inline = document.new_tag(rule.tag_name)
        inline.string = rule.minify(text)
        node.insert_before(inline)
        node.extract()

        self.repository.remove_file(path, rule.remove_code)
        if path.parent != base_dir:
            self.repository.remove_empty_dir(path.parent)
        logger.debug('インライン化しました: {}', reference)

    def _minify_inline(self, node: Tag, rule: _InlineRule) -> None:
        if len(node.contents) != 1 or node_kind(node.contents[0]) is not NodeKind.TEXT:
            raise TemplateError(
                f'不正な {rule.tag_name} タグです: {node}', rule.invalid_code
            )
        node.string = rule.minify(str(node.contents[0]))

    def _resolve(self, reference: str, base_dir: Path, rule: _InlineRule) -> Path:
        """クエリ・フラグメント・先頭の / を除き、出力ディレクトリ内のパスに変換します。"""
        relative = unquote(urlsplit(reference).path).lstrip('/')
        if not relative:
            raise TemplateError(f'参照先が空です: "{reference}"', rule.invalid_code)

        path = base_dir / relative
        if not path.resolve().is_relative_to(base_dir.resolve()):
            raise TemplateError(
                f'出力ディレクトリ外のファイルは参照できません: "{reference}"',
                rule.invalid_code,
            )
        return path
