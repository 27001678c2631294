# FILE: src/static_gallery/infrastructure/builders/gallery/layout.py
"""
出力ディレクトリ内の相対パスを決定する命名規則。
状態を持たない純粋関数のみで構成され、同じ入力順序からは常に同じパスが得られます。
"""

from pathlib import PurePosixPath

from ....shared.constants import LAYOUT_NAMES
from ....shared.enums import PictureRole

_BASE36_DIGITS = '0123456789abcdefghijklmnopqrstuvwxyz'

_ROLE_SUFFIXES: dict[PictureRole, str] = {
    PictureRole.FULLSIZE: '',
    PictureRole.DISPLAY: LAYOUT_NAMES.DISPLAY_SUFFIX,
    PictureRole.THUMB: LAYOUT_NAMES.THUMB_SUFFIX,
}


def to_base36(index: int) -> str:
    """0以上の整数を小文字の36進数文字列に変換します。"""
    if index < 0:
        raise ValueError(f'インデックスは0以上である必要があります: {index}')
    if index == 0:
        return '0'

    digits: list[str] = []
    while index:
        index, remainder = divmod(index, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return ''.join(reversed(digits))


def backgrounds_dir() -> PurePosixPath:
    return PurePosixPath(LAYOUT_NAMES.BACKGROUNDS_DIR_NAME)


def background_path(index: int) -> PurePosixPath:
    """例: 0 -> b/0.jpg, 36 -> b/10.jpg"""
    return backgrounds_dir() / f'{to_base36(index)}{LAYOUT_NAMES.PICTURE_EXTENSION}'


def collection_dir(collection_index: int) -> PurePosixPath:
    """例: 0 -> c0, 11 -> cb"""
    return PurePosixPath(f'{LAYOUT_NAMES.COLLECTION_DIR_PREFIX}{to_base36(collection_index)}')


def picture_path(
    collection_index: int, picture_index: int, role: PictureRole
) -> PurePosixPath:
    """例: (0, 1, DISPLAY) -> c0/1-p.jpg"""
    name = (
        f'{to_base36(picture_index)}{_ROLE_SUFFIXES[role]}'
        f'{LAYOUT_NAMES.PICTURE_EXTENSION}'
    )
    return collection_dir(collection_index) / name


def archive_dir_name(title: str) -> str:
    """
    コレクションのタイトルをアーカイブ内のディレクトリ名に変換します。
    ASCII英数字は小文字化、'.' と '_' はそのまま、空白は '_'、それ以外は '-' になります。
    例: ' Summer Trip! ' -> 'summer_trip-'
    """
    cleaned: list[str] = []
    for char in title.strip():
        if char in '._':
            cleaned.append(char)
        elif char.isspace():
            cleaned.append('_')
        elif char.isascii() and char.isalnum():
            cleaned.append(char.lower())
        else:
            cleaned.append('-')
    return ''.join(cleaned)
