# src/static_gallery/shared/constants.py
from dataclasses import dataclass
from typing import Final


# --- 1. Output Layout ---
# (infrastructure/builders/gallery/layout.py がこれを参照)
@dataclass(frozen=True)
class LayoutNames:
    """
    出力ディレクトリ内のディレクトリ・ファイル命名規則を定義する。
    """

    BACKGROUNDS_DIR_NAME: str = 'b'
    COLLECTION_DIR_PREFIX: str = 'c'
    PICTURE_EXTENSION: str = '.jpg'
    DISPLAY_SUFFIX: str = '-p'
    THUMB_SUFFIX: str = '-t'
    ARCHIVE_FILE_NAME: str = 'Gallery.zip'


LAYOUT_NAMES: Final = LayoutNames()


# --- 2. Template ---
@dataclass(frozen=True)
class TemplateNames:
    """
    テンプレートディレクトリの構造と、マニフェストの埋め込み位置を示すマーカー。
    """

    INDEX_FILE_NAME: str = 'index.html'
    MARKER_BEGIN: bytes = b'/*{{BEGIN:collections*/'
    MARKER_END: bytes = b'/*END:collections}}*/'


TEMPLATE_NAMES: Final = TemplateNames()


# --- 3. Input ---
# 拡張子は小文字で比較する
IMAGE_EXTENSIONS: Final = frozenset({'.jpg', '.jpeg'})


# --- 4. Defaults ---
@dataclass(frozen=True)
class Defaults:
    """
    解像度と画質の既定値。
    """

    THUMB_SIZE: str = '960x540'
    DISPLAY_SIZE: str = '2560x1440'
    BACKGROUND_SIZE: str = '2560x1440'
    JPEG_QUALITY: int = 70


DEFAULTS: Final = Defaults()
