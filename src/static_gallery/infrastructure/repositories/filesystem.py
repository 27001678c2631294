# src/static_gallery/infrastructure/repositories/filesystem.py

import shutil
from pathlib import Path

from loguru import logger

from ...models.gallery import Collection, GallerySource
from ...shared.constants import IMAGE_EXTENSIONS
from ...shared.enums import ExitCode
from ...shared.exceptions import AssetIOError, InputValidationError


def is_image_file_name(name: str) -> bool:
    """拡張子(大文字小文字を区別しない)から対応画像かどうかを判定します。"""
    return Path(name).suffix.lower() in IMAGE_EXTENSIONS


class FileSystemGalleryRepository:
    """ファイルシステムを入出力先として使用するギャラリーリポジトリ。"""

    def list_dir(self, directory: Path) -> list[Path]:
        """ディレクトリの直下のエントリをファイル名順に返します。"""
        if not directory.exists():
            raise InputValidationError(
                f'フォルダを開けません: "{directory}"', ExitCode.INPUT_NOT_FOUND
            )
        if not directory.is_dir():
            raise InputValidationError(
                f'フォルダを開けません: "{directory}": ディレクトリではありません',
                ExitCode.INPUT_NOT_DIRECTORY,
            )
        try:
            return sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise InputValidationError(
                f'フォルダを開けません: "{directory}": {e}', ExitCode.INPUT_UNREADABLE
            ) from e

    def load_source(self, input_dir: Path) -> GallerySource:
        """
        入力ディレクトリを走査します。
        直下の画像ファイルは背景画像、ディレクトリはコレクションとして扱い、
        それ以外は黙って無視します。

        Raises:
            InputValidationError: 背景画像またはコレクションが一つも無い場合、
                あるいは写真を含まないコレクションがある場合。
        """
        source = GallerySource(root_path=input_dir)
        folders: list[Path] = []

        for entry in self.list_dir(input_dir):
            if is_image_file_name(entry.name):
                source.backgrounds.append(entry)
            elif entry.is_dir():
                folders.append(entry)

        if not source.backgrounds:
            raise InputValidationError(
                f'背景画像がディレクトリ内に見つかりません: "{input_dir}"',
                ExitCode.NO_BACKGROUNDS,
            )
        if not folders:
            raise InputValidationError(
                f'コレクション用のフォルダがディレクトリ内に見つかりません: "{input_dir}"',
                ExitCode.NO_COLLECTIONS,
            )

        for folder in folders:
            source.collections.append(
                Collection(title=folder.name, source_files=self._load_pictures(folder))
            )

        logger.bind(
            backgrounds=len(source.backgrounds),
            collections=len(source.collections),
            pictures=source.picture_count,
        ).info('入力ディレクトリを読み込みました。')
        return source

    def _load_pictures(self, folder: Path) -> list[Path]:
        """コレクションフォルダから写真を収集します。サブフォルダは再帰しません。"""
        pictures: list[Path] = []
        for entry in self.list_dir(folder):
            if entry.is_dir():
                continue
            if is_image_file_name(entry.name):
                pictures.append(entry)
            else:
                logger.bind(folder=str(folder)).warning(
                    '未対応の画像ファイルを無視しました: {}', entry.name
                )

        if not pictures:
            raise InputValidationError(
                f'フォルダに写真が含まれていません: "{folder}"',
                ExitCode.EMPTY_COLLECTION,
            )
        return pictures

    def validate_output_dir(self, output_dir: Path, clean: bool = False) -> None:
        """
        出力ディレクトリが存在しない、または空であることを検証します。
        clean が真の場合は空でなくても受け入れます(削除は clean_output_dir で行う)。
        ディレクトリの作成・削除は行いません。
        """
        if not output_dir.exists():
            return
        if not output_dir.is_dir():
            raise InputValidationError(
                f'ディレクトリではありません: "{output_dir}"',
                ExitCode.OUTPUT_NOT_DIRECTORY,
            )
        if clean:
            return

        try:
            has_contents = any(output_dir.iterdir())
        except OSError as e:
            raise InputValidationError(
                f'出力ディレクトリを読み込めません: "{output_dir}": {e}',
                ExitCode.OUTPUT_UNREADABLE,
            ) from e
        if has_contents:
            raise InputValidationError(
                f'出力ディレクトリが空ではありません: "{output_dir}"',
                ExitCode.OUTPUT_NOT_EMPTY,
            )

    def clean_output_dir(self, output_dir: Path) -> None:
        """既存の出力ディレクトリを中身ごと削除します。存在しなければ何もしません。"""
        if not output_dir.exists():
            return
        try:
            shutil.rmtree(output_dir)
        except OSError as e:
            raise AssetIOError(
                f'出力ディレクトリを削除できません ({e.strerror})',
                ExitCode.OUTPUT_CLEAN,
                output_dir,
            ) from e
        logger.bind(output_dir=str(output_dir)).info('既存の出力ディレクトリを削除しました。')

    def make_dir(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AssetIOError(
                'ディレクトリを作成できません', ExitCode.CREATE_DIRECTORY, path
            ) from e

    def read_bytes(self, path: Path, exit_code: ExitCode) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise AssetIOError(
                f'ファイルの読み込みに失敗しました ({e.strerror})', exit_code, path
            ) from e

    def write_bytes(self, path: Path, data: bytes, exit_code: ExitCode) -> None:
        try:
            path.write_bytes(data)
        except OSError as e:
            raise AssetIOError(
                f'ファイルの書き込みに失敗しました ({e.strerror})', exit_code, path
            ) from e

    def copy_file(self, source: Path, target: Path) -> None:
        """ファイルの内容をそのままコピーします。読み込み・作成・書き込みで終了コードを分けます。"""
        try:
            reader = source.open('rb')
        except OSError as e:
            raise AssetIOError(
                f'ファイルを読み込めません ({e.strerror})', ExitCode.COPY_READ, source
            ) from e

        with reader:
            try:
                writer = target.open('wb')
            except OSError as e:
                raise AssetIOError(
                    f'ファイルを作成できません ({e.strerror})', ExitCode.COPY_CREATE, target
                ) from e
            with writer:
                try:
                    shutil.copyfileobj(reader, writer)
                except OSError as e:
                    raise AssetIOError(
                        f'ファイルのコピーに失敗しました ({e.strerror})',
                        ExitCode.COPY_WRITE,
                        target,
                    ) from e
        logger.debug('コピー {} => {}', source, target)

    def remove_file(self, path: Path, exit_code: ExitCode) -> None:
        try:
            path.unlink()
        except OSError as e:
            raise AssetIOError(
                f'ファイルを削除できません ({e.strerror})', exit_code, path
            ) from e

    def remove_empty_dir(self, path: Path) -> bool:
        """ベストエフォートの後始末。空でない、または削除できない場合は何もしません。"""
        try:
            path.rmdir()
        except OSError:
            return False
        logger.debug('空のディレクトリを削除しました: {}', path)
        return True
