# FILE: src/static_gallery/shared/settings.py

import tomllib
from pathlib import Path
from typing import Any, cast

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
)
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import DEFAULTS
from .enums import ResizeMethod
from .exceptions import SettingsError


# --- TOMLソース ---
def read_toml_table(toml_file: Path, *table: str) -> dict[str, Any]:
    """
    TOMLファイルを読み込み、指定されたテーブル(例: 'tool', 'static_gallery')を返します。
    ファイルやテーブルが存在しない場合は空の辞書になります。
    """
    if not toml_file.is_file():
        return {}
    try:
        with toml_file.open('rb') as f:
            data: Any = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise SettingsError(f'設定ファイルを読み込めません: "{toml_file}": {e}') from e

    for key in table:
        data = data.get(key, {}) if isinstance(data, dict) else {}
    return cast(dict[str, Any], data)


class TomlSectionSource(PydanticBaseSettingsSource):
    """
    TOMLファイルの1テーブルを丸ごと設定値として渡すソース。
    --config のファイルと pyproject.toml の [tool.static_gallery] の両方に使います。
    """

    def __init__(
        self, settings_cls: type[BaseSettings], toml_file: Path | None, *table: str
    ):
        super().__init__(settings_cls)
        self.toml_file = toml_file
        self._values = read_toml_table(toml_file, *table) if toml_file else {}

    def get_field_value(self, field: object, field_name: str) -> tuple[Any, str, bool]:
        # 値は __call__ でまとめて返す
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._values


def describe_validation_error(error: ValidationError) -> str:
    """検証エラーを 'gallery.jpeg_quality: ...; ...' 形式の1行にまとめます。"""
    return '; '.join(
        f"{'.'.join(map(str, detail['loc']))}: {detail['msg']}"
        for detail in error.errors()
    )


# --- 設定モデル定義 ---


class GallerySettings(BaseModel):
    """画像の生成に関する設定。"""

    thumb_size: str = Field(
        default=DEFAULTS.THUMB_SIZE,
        description='サムネイル画像の最大サイズ (WIDTHxHEIGHT)。',
    )
    display_size: str = Field(
        default=DEFAULTS.DISPLAY_SIZE,
        description='表示用画像の最大サイズ (WIDTHxHEIGHT)。',
    )
    background_size: str = Field(
        default=DEFAULTS.BACKGROUND_SIZE,
        description='背景画像の最大サイズ (WIDTHxHEIGHT)。',
    )
    jpeg_quality: int = Field(
        default=DEFAULTS.JPEG_QUALITY,
        ge=1,
        le=100,
        description='出力するJPEG画像の品質 (1-100)。',
    )
    resize_method: ResizeMethod = Field(
        default=ResizeMethod.LANCZOS,
        description='縮小時に使用するリサンプリングフィルタ。',
    )
    image_name_titles: bool = Field(
        default=False,
        description='画像のファイル名(拡張子なし)を写真のタイトルとして使用するかどうか。',
    )


class BuilderSettings(BaseModel):
    """出力先とテンプレート処理に関する設定。"""

    output_directory: Path | None = Field(
        default=None,
        description='生成されたギャラリーの保存先ディレクトリ。',
    )
    template_directory: Path | None = Field(
        default=None,
        description='ギャラリーのテンプレートディレクトリ。',
    )
    optimize: bool = Field(
        default=False,
        description='CSS/JavaScriptをHTMLに埋め込み、コメントを削除するかどうか。',
    )
    clean_output: bool = Field(
        default=False,
        description='生成前に既存の出力ディレクトリを削除するかどうか。',
    )
    create_archive: bool = Field(
        default=False,
        description='元画像をコレクションごとにまとめたZIPアーカイブを出力するかどうか。',
    )


class Settings(BaseSettings):
    """
    アプリケーションの階層的設定管理クラス。
    以下の優先順位で設定を読み込みます:
    1. Pythonコードからの直接初期化 (CLIオプション)
    2. --config で指定されたカスタムTOMLファイル
    3. 環境変数 (例: STATIC_GALLERY_GALLERY__THUMB_SIZE=...)
    4. .env ファイル
    5. pyproject.toml内の [tool.static_gallery] セクション
    6. モデルで定義されたデフォルト値
    """

    gallery: GallerySettings = Field(default_factory=GallerySettings)
    builder: BuilderSettings = Field(default_factory=BuilderSettings)
    log_level: str = 'INFO'

    def __init__(self, **values: object):
        config_file_path = values.pop('_config_file', None)
        # settings_customise_sources から参照できるように初期化引数に残す
        if config_file_path:
            values['_config_file'] = Path(cast(Path | str, config_file_path))

        try:
            super().__init__(**values)  # type: ignore [arg-type]
        except ValidationError as e:
            raise SettingsError(
                f'設定の検証に失敗しました: {describe_validation_error(e)}'
            ) from e
        except ValueError as e:
            raise SettingsError(f'設定の検証に失敗しました: {e}') from e

    model_config = SettingsConfigDict(
        env_nested_delimiter='__',
        env_prefix='STATIC_GALLERY_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        config_file_path = getattr(init_settings, 'init_kwargs', {}).get('_config_file')
        if config_file_path and not isinstance(config_file_path, Path):
            config_file_path = Path(config_file_path)

        return (
            init_settings,
            TomlSectionSource(settings_cls, config_file_path),
            env_settings,
            dotenv_settings,
            TomlSectionSource(
                settings_cls, Path.cwd() / 'pyproject.toml', 'tool', 'static_gallery'
            ),
        )
