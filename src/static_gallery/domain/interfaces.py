# FILE: src/static_gallery/domain/interfaces.py

from pathlib import Path
from typing import Protocol, runtime_checkable

from PIL.Image import Image

from ..models.gallery import GallerySource
from ..shared.enums import ExitCode


@runtime_checkable
class IImageCodec(Protocol):
    """画像のデコード・エンコードを抽象化するインターフェース。"""

    def decode(self, data: bytes) -> Image:
        """
        バイト列から画像をデコードします。

        Raises:
            AssetIOError: 画像として解釈できない場合。
        """
        ...

    def encode(self, image: Image, quality: int) -> bytes:
        """
        画像を指定された品質でJPEGにエンコードします。

        Raises:
            AssetIOError: エンコードに失敗した場合。
        """
        ...


@runtime_checkable
class IGalleryRepository(Protocol):
    """ギャラリー生成に必要なファイルシステム操作を抽象化するインターフェース。"""

    def load_source(self, input_dir: Path) -> GallerySource:
        """入力ディレクトリを走査し、背景画像とコレクションを返します。"""
        ...

    def validate_output_dir(self, output_dir: Path, clean: bool = False) -> None:
        """出力ディレクトリが空である(または存在しない)ことを検証します。削除は行いません。"""
        ...

    def clean_output_dir(self, output_dir: Path) -> None:
        """既存の出力ディレクトリを中身ごと削除します。"""
        ...

    def make_dir(self, path: Path) -> None:
        """ディレクトリを(親を含めて)作成します。"""
        ...

    def read_bytes(self, path: Path, exit_code: ExitCode) -> bytes:
        """ファイルを読み込みます。失敗時は指定された終了コードで中断します。"""
        ...

    def write_bytes(self, path: Path, data: bytes, exit_code: ExitCode) -> None:
        """ファイルを書き込みます。失敗時は指定された終了コードで中断します。"""
        ...

    def copy_file(self, source: Path, target: Path) -> None:
        """ファイルの内容をそのままコピーします。"""
        ...

    def remove_file(self, path: Path, exit_code: ExitCode) -> None:
        """ファイルを削除します。失敗時は指定された終了コードで中断します。"""
        ...

    def remove_empty_dir(self, path: Path) -> bool:
        """空のディレクトリを削除します。削除できなかった場合は False を返します。"""
        ...
