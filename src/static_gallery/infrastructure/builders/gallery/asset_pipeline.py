# FILE: src/static_gallery/infrastructure/builders/gallery/asset_pipeline.py
import zipfile
from pathlib import Path

from loguru import logger

from ....domain.interfaces import IGalleryRepository, IImageCodec
from ....models.gallery import Collection, PictureEntry, Size
from ....shared.constants import DEFAULTS, LAYOUT_NAMES
from ....shared.enums import ExitCode, PictureRole
from ....shared.exceptions import AssetIOError
from ....utils.image_resampler import ImageResampler
from .layout import (
    archive_dir_name,
    background_path,
    backgrounds_dir,
    collection_dir,
    picture_path,
)


class GalleryAssetPipeline:
    """背景画像と各コレクションの写真から出力画像を生成し、マニフェストの内容を組み立てるクラス。"""

    def __init__(
        self,
        repository: IGalleryRepository,
        codec: IImageCodec,
        resampler: ImageResampler,
        jpeg_quality: int = DEFAULTS.JPEG_QUALITY,
        use_filenames_as_titles: bool = False,
    ):
        """
        Args:
            repository (IGalleryRepository): ファイルの読み書きを担うリポジトリ。
            codec (IImageCodec): 画像のデコード・エンコード。
            resampler (ImageResampler): 境界ボックスへの縮小処理。
            jpeg_quality (int): 出力画像のJPEG品質。
            use_filenames_as_titles (bool): ファイル名を写真のタイトルにするかどうか。
        """
        self.repository = repository
        self.codec = codec
        self.resampler = resampler
        self.jpeg_quality = jpeg_quality
        self.use_filenames_as_titles = use_filenames_as_titles

    def build(
        self,
        output_root: Path,
        thumb_size: Size,
        display_size: Size,
        background_size: Size,
        collections: list[Collection],
        background_paths: list[Path],
    ) -> list[Collection]:
        """
        全ての画像を生成し、パス情報を埋めたコレクションのリストを返します。
        どの書き込みに失敗しても即座に中断します。
        """
        backgrounds = self._create_backgrounds(
            output_root, background_size, background_paths
        )

        total = len(collections)
        for n, collection in enumerate(collections):
            log = logger.bind(collection=collection.title, current=n + 1, total=total)
            log.info('コレクションの画像生成を開始 ({}枚)', len(collection.source_files))

            self.repository.make_dir(output_root / collection_dir(n))
            collection.pictures = [
                self._create_picture(output_root, n, i, original, thumb_size, display_size)
                for i, original in enumerate(collection.source_files)
            ]

        # 全コレクションが同じリストを参照する
        for collection in collections:
            collection.backgrounds = backgrounds

        logger.bind(collections=total, backgrounds=len(backgrounds)).success(
            '画像の生成が完了しました。'
        )
        return collections

    def _create_backgrounds(
        self, output_root: Path, background_size: Size, background_paths: list[Path]
    ) -> list[str]:
        logger.info('背景画像の生成を開始 ({}枚)', len(background_paths))
        self.repository.make_dir(output_root / backgrounds_dir())

        backgrounds: list[str] = []
        for i, source in enumerate(background_paths):
            relative = background_path(i)
            self.resize_picture(source, output_root / relative, background_size)
            backgrounds.append(relative.as_posix())
        return backgrounds

    def _create_picture(
        self,
        output_root: Path,
        collection_index: int,
        picture_index: int,
        original: Path,
        thumb_size: Size,
        display_size: Size,
    ) -> PictureEntry:
        fullsize = picture_path(collection_index, picture_index, PictureRole.FULLSIZE)
        display = picture_path(collection_index, picture_index, PictureRole.DISPLAY)
        thumb = picture_path(collection_index, picture_index, PictureRole.THUMB)

        self.repository.copy_file(original, output_root / fullsize)
        self.resize_picture(original, output_root / display, display_size)
        self.resize_picture(original, output_root / thumb, thumb_size)

        return PictureEntry(
            picture=display.as_posix(),
            fullsize=fullsize.as_posix(),
            thumb=thumb.as_posix(),
            title=original.stem if self.use_filenames_as_titles else None,
        )

    def resize_picture(self, source: Path, target: Path, size: Size) -> None:
        """
        画像を読み込み、境界ボックスを超える場合は縮小した上で、
        常に固定品質のJPEGとして再エンコードして書き込みます。
        """
        data = self.repository.read_bytes(source, ExitCode.IMAGE_READ)
        try:
            image = self.codec.decode(data)
        except AssetIOError as e:
            raise AssetIOError(str(e), e.exit_code, source) from e

        resized = self.resampler.resample(image, size.width, size.height)
        encoded = self.codec.encode(resized, self.jpeg_quality)
        self.repository.write_bytes(target, encoded, ExitCode.IMAGE_WRITE)
        logger.debug('リサイズ {} => {} ({})', source, target, size)

    def create_archive(self, output_root: Path, collections: list[Collection]) -> Path:
        """
        各コレクションの元画像をそのまままとめたZIPアーカイブを出力ディレクトリ直下に作成します。
        アーカイブ内ではコレクションごとに1ディレクトリ(タイトルを整形した名前)を作ります。
        """
        archive_path = output_root / LAYOUT_NAMES.ARCHIVE_FILE_NAME
        try:
            with zipfile.ZipFile(
                archive_path, 'w', compression=zipfile.ZIP_DEFLATED
            ) as zip_file:
                for collection in collections:
                    dir_name = archive_dir_name(collection.title)
                    # 整形後の名前が重なったコレクションは同じディレクトリに入る
                    if f'{dir_name}/' not in zip_file.namelist():
                        zip_file.mkdir(dir_name)
                    for source in collection.source_files:
                        data = self.repository.read_bytes(source, ExitCode.ARCHIVE_READ)
                        zip_file.writestr(f'{dir_name}/{source.name}', data)
        except OSError as e:
            raise AssetIOError(
                f'アーカイブの書き込みに失敗しました ({e.strerror})',
                ExitCode.ARCHIVE_WRITE,
                archive_path,
            ) from e

        logger.bind(archive=str(archive_path), collections=len(collections)).success(
            'アーカイブを作成しました。'
        )
        return archive_path
