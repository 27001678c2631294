# FILE: src/static_gallery/infrastructure/builders/gallery/template.py
from pathlib import Path

from loguru import logger

from ....domain.interfaces import IGalleryRepository
from ....shared.constants import TEMPLATE_NAMES
from ....shared.enums import ExitCode
from ....shared.exceptions import TemplateError


def splice_manifest(content: bytes, manifest: bytes) -> bytes:
    """
    テンプレート内の BEGIN マーカーから END マーカーの終端までを
    マニフェストで置き換えます。マーカー自体も取り除かれます。

    Raises:
        TemplateError: マーカーが見つからない、または順序が逆の場合。
    """
    start = content.find(TEMPLATE_NAMES.MARKER_BEGIN)
    end = content.find(TEMPLATE_NAMES.MARKER_END)
    if start < 0 or end < 0 or end < start:
        raise TemplateError(
            'テンプレートに {{BEGIN:collections}} / {{END:collections}} '
            'マーカーが正しく含まれていません',
            ExitCode.TEMPLATE_MARKERS,
        )
    return content[:start] + manifest + content[end + len(TEMPLATE_NAMES.MARKER_END) :]


class TemplateWriter:
    """テンプレートディレクトリを出力先へ展開し、index.html にマニフェストを埋め込むクラス。"""

    def __init__(self, repository: IGalleryRepository):
        self.repository = repository

    def materialize(self, template_dir: Path, output_dir: Path, manifest: bytes) -> Path:
        """
        テンプレートの全ファイルを出力ディレクトリへコピーします。
        最上位の index.html のみマニフェストを埋め込んだ内容で書き込みます。
        マーカーの検証はどのファイルを書き込むよりも先に行われます。

        Returns:
            Path: 書き込まれた index.html のパス。
        """
        template_index = template_dir / TEMPLATE_NAMES.INDEX_FILE_NAME
        content = self.repository.read_bytes(template_index, ExitCode.TEMPLATE_READ)
        spliced = splice_manifest(content, manifest)

        output_index = output_dir / TEMPLATE_NAMES.INDEX_FILE_NAME
        for source in sorted(template_dir.rglob('*')):
            target = output_dir / source.relative_to(template_dir)
            if source.is_dir():
                self.repository.make_dir(target)
            elif source == template_index:
                self.repository.write_bytes(target, spliced, ExitCode.TEMPLATE_WRITE)
            else:
                self.repository.copy_file(source, target)

        logger.bind(template_dir=str(template_dir)).info(
            'テンプレートを展開しました: {}', output_dir
        )
        return output_index
