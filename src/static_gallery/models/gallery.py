# FILE: src/static_gallery/models/gallery.py
"""
ギャラリーの生成で利用される中心的なデータモデルを定義します。
Collection / PictureEntry はそのままマニフェスト(JSON)の構造になります。
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field, PositiveInt, field_validator

_DIMENSION_PATTERN = re.compile(r'[0-9]+')


class Size(BaseModel, frozen=True):
    """
    幅と高さの組。正確な出力サイズではなく、縮小時の最大境界ボックスを表します。
    """

    width: PositiveInt
    height: PositiveInt

    @classmethod
    def parse(cls, text: str) -> 'Size':
        """
        'WIDTHxHEIGHT' 形式の文字列を解析します。

        Raises:
            ValueError: 形式が不正、または幅・高さが正の整数でない場合。
        """
        parts = text.split('x')
        if len(parts) != 2:
            raise ValueError(f'不正な解像度文字列です: "{text}"')

        width_str, height_str = parts
        if not _DIMENSION_PATTERN.fullmatch(width_str) or int(width_str) < 1:
            raise ValueError(f'不正な解像度の幅です: "{width_str}"')
        if not _DIMENSION_PATTERN.fullmatch(height_str) or int(height_str) < 1:
            raise ValueError(f'不正な解像度の高さです: "{height_str}"')

        return cls(width=int(width_str), height=int(height_str))

    def contains(self, width: int, height: int) -> bool:
        """指定された寸法がこの境界ボックスに収まるかどうかを返します。"""
        return width <= self.width and height <= self.height

    def __str__(self) -> str:
        return f'{self.width}x{self.height}'


class PictureEntry(BaseModel):
    """一枚の写真から生成された3つの成果物のパス。"""

    picture: str
    fullsize: str | None = None
    thumb: str | None = None
    title: str | None = None

    @field_validator('fullsize', 'thumb', 'title', mode='before')
    @classmethod
    def empty_to_none(cls, value: object) -> object:
        # 空文字列は「未設定」として扱い、シリアライズ時に省略させる
        if value == '':
            return None
        return value


class Collection(BaseModel):
    """
    一つのフォルダから作られる写真のまとまり。
    `backgrounds` は全コレクションで同じリストオブジェクトを共有します。
    """

    title: str
    pictures: list[PictureEntry] = Field(default_factory=list)
    backgrounds: list[str] = Field(default_factory=list)

    source_files: list[Path] = Field(default_factory=list, exclude=True)


@dataclass
class GallerySource:
    """入力ディレクトリの走査結果。背景画像とコレクションを入力順に保持します。"""

    root_path: Path
    backgrounds: list[Path] = field(default_factory=list)
    collections: list[Collection] = field(default_factory=list)

    @property
    def picture_count(self) -> int:
        return sum(len(c.source_files) for c in self.collections)
