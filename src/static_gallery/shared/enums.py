# src/static_gallery/shared/enums.py
from enum import Enum, IntEnum, auto


class ExitCode(IntEnum):
    """
    失敗箇所ごとのプロセス終了コード。
    どのエラーも致命的であり、発生箇所ごとに異なる値で終了する。
    """

    # --- 設定 ---
    INVALID_THUMB_SIZE = 1
    INVALID_DISPLAY_SIZE = 2
    INVALID_BACKGROUND_SIZE = 3
    INVALID_INPUT_COUNT = 4
    OUTPUT_NOT_GIVEN = 24
    TEMPLATE_NOT_FOUND = 25
    INVALID_SETTINGS = 37

    # --- 入力検証 ---
    INPUT_NOT_FOUND = 5
    INPUT_NOT_DIRECTORY = 6
    INPUT_UNREADABLE = 7
    EMPTY_COLLECTION = 8
    NO_BACKGROUNDS = 9
    NO_COLLECTIONS = 14
    OUTPUT_NOT_DIRECTORY = 11
    OUTPUT_UNREADABLE = 12
    OUTPUT_NOT_EMPTY = 13

    # --- 入出力 ---
    CREATE_DIRECTORY = 10
    COPY_READ = 16
    COPY_CREATE = 17
    COPY_WRITE = 18
    IMAGE_READ = 19
    IMAGE_DECODE = 20
    IMAGE_WRITE = 21
    IMAGE_ENCODE = 22
    MANIFEST_SERIALIZE = 23
    TEMPLATE_READ = 26
    TEMPLATE_WRITE = 27
    OUTPUT_CLEAN = 38

    # --- テンプレート構造 / 最適化 ---
    TEMPLATE_MARKERS = 15
    OPTIMIZE_READ = 28
    OPTIMIZE_PARSE = 29
    INVALID_STYLE = 30
    STYLE_READ = 31
    STYLE_REMOVE = 32
    INVALID_SCRIPT = 33
    SCRIPT_READ = 34
    SCRIPT_REMOVE = 35
    OPTIMIZE_WRITE = 36
    ARCHIVE_READ = 39
    ARCHIVE_WRITE = 40


class NodeKind(Enum):
    """テンプレート文書を構成するノードの種別"""

    DOCUMENT = auto()  # 文書ルート
    ELEMENT = auto()  # 要素(タグ)
    TEXT = auto()  # テキスト(doctype等もここに含める)
    COMMENT = auto()  # HTMLコメント


class PictureRole(str, Enum):
    """一枚の写真から生成される成果物の役割"""

    FULLSIZE = 'fullsize'
    DISPLAY = 'display'
    THUMB = 'thumb'


class ResizeMethod(str, Enum):
    """
    縮小時に使用するリサンプリングフィルタ。
    strを継承することで、設定ファイルやCLIから文字列でそのまま指定できる。
    """

    LANCZOS = 'lanczos'
    BICUBIC = 'bicubic'
    BILINEAR = 'bilinear'
    HAMMING = 'hamming'
    BOX = 'box'
    NEAREST = 'nearest'

    @classmethod
    def _missing_(cls, value: object) -> 'ResizeMethod | None':
        # 'LANCZOS' のような大文字の指定も受け付ける
        for member in cls:
            if member.value == str(value).lower():
                return member
        return None
