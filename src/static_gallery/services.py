# FILE: src/static_gallery/services.py
from pathlib import Path

from loguru import logger

from .domain.interfaces import IGalleryRepository
from .infrastructure.builders.gallery.asset_pipeline import GalleryAssetPipeline
from .infrastructure.builders.gallery.manifest import serialize_manifest
from .infrastructure.builders.gallery.template import TemplateWriter
from .infrastructure.optimizers.template_optimizer import TemplateOptimizer
from .models.gallery import Size
from .shared.constants import TEMPLATE_NAMES
from .shared.enums import ExitCode
from .shared.exceptions import SettingsError
from .shared.settings import Settings


def parse_size_setting(text: str, exit_code: ExitCode) -> Size:
    """解像度の設定値を解析します。不正な場合は指定された終了コードで中断します。"""
    try:
        return Size.parse(text)
    except ValueError as e:
        raise SettingsError(str(e), exit_code) from e


class GalleryService:
    """
    ギャラリー生成の一連の処理(検証 → 走査 → 画像生成 → マニフェスト → テンプレート → 最適化)を
    統括するサービスレイヤー。
    依存関係の構築はコンポジションルート(cli.py)で行われます。
    """

    def __init__(
        self,
        settings: Settings,
        repository: IGalleryRepository,
        pipeline: GalleryAssetPipeline,
        template_writer: TemplateWriter,
        optimizer: TemplateOptimizer,
    ):
        self.settings = settings
        self.repository = repository
        self.pipeline = pipeline
        self.template_writer = template_writer
        self.optimizer = optimizer
        logger.debug('GalleryService が初期化されました。')

    def generate(self, input_dirs: list[Path]) -> Path:
        """
        入力ディレクトリからギャラリーを生成し、出力ディレクトリのパスを返します。
        入力の検証に失敗した場合、出力ディレクトリには何も書き込まれません。
        """
        gallery = self.settings.gallery
        builder = self.settings.builder

        thumb_size = parse_size_setting(gallery.thumb_size, ExitCode.INVALID_THUMB_SIZE)
        display_size = parse_size_setting(
            gallery.display_size, ExitCode.INVALID_DISPLAY_SIZE
        )
        background_size = parse_size_setting(
            gallery.background_size, ExitCode.INVALID_BACKGROUND_SIZE
        )

        if len(input_dirs) != 1:
            raise SettingsError(
                '背景画像とコレクションのフォルダを含むディレクトリを1つだけ指定してください',
                ExitCode.INVALID_INPUT_COUNT,
            )
        input_dir = input_dirs[0]

        output_dir = builder.output_directory
        if output_dir is None:
            raise SettingsError(
                '出力ディレクトリを指定してください', ExitCode.OUTPUT_NOT_GIVEN
            )
        template_dir = self._require_template_dir(builder.template_directory)

        with logger.contextualize(input_dir=str(input_dir), output_dir=str(output_dir)):
            self.repository.validate_output_dir(output_dir, clean=builder.clean_output)

            logger.info('入力ディレクトリの走査を開始')
            source = self.repository.load_source(input_dir)

            # 入力の検証が全て通るまで既存の出力には触れない
            if builder.clean_output:
                self.repository.clean_output_dir(output_dir)
            self.repository.make_dir(output_dir)
            collections = self.pipeline.build(
                output_dir,
                thumb_size,
                display_size,
                background_size,
                source.collections,
                source.backgrounds,
            )

            manifest = serialize_manifest(collections)
            index_path = self.template_writer.materialize(
                template_dir, output_dir, manifest
            )

            if builder.create_archive:
                logger.info('アーカイブの作成を開始')
                self.pipeline.create_archive(output_dir, collections)

            if builder.optimize:
                logger.info('テンプレートの最適化を開始')
                self.optimizer.optimize(index_path)

            logger.bind(
                collections=len(collections), pictures=source.picture_count
            ).success('ギャラリーの生成が完了しました。')
        return output_dir

    @staticmethod
    def _require_template_dir(template_dir: Path | None) -> Path:
        if template_dir is None:
            raise SettingsError(
                'テンプレートディレクトリを指定してください', ExitCode.TEMPLATE_NOT_FOUND
            )
        if not (template_dir / TEMPLATE_NAMES.INDEX_FILE_NAME).is_file():
            raise SettingsError(
                f'テンプレートに {TEMPLATE_NAMES.INDEX_FILE_NAME} がありません: "{template_dir}"',
                ExitCode.TEMPLATE_NOT_FOUND,
            )
        return template_dir
