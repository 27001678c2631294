# FILE: src/static_gallery/entrypoints/cli.py
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from ..infrastructure.builders.gallery.asset_pipeline import GalleryAssetPipeline
from ..infrastructure.builders.gallery.template import TemplateWriter
from ..infrastructure.optimizers.template_optimizer import TemplateOptimizer
from ..infrastructure.repositories.filesystem import FileSystemGalleryRepository
from ..services import GalleryService
from ..shared.constants import LAYOUT_NAMES
from ..shared.enums import ResizeMethod
from ..shared.exceptions import StaticGalleryError
from ..shared.settings import Settings
from ..utils.image_resampler import ImageResampler, PillowImageCodec
from ..utils.logging import setup_logging

app = typer.Typer(
    help='写真のディレクトリから静的なギャラリーサイトを生成するコマンドラインツールです。',
    rich_markup_mode='markdown',
)


def _drop_unset(values: dict[str, Any]) -> dict[str, Any]:
    """CLIで指定されなかった(None の)項目を取り除きます。"""
    return {key: value for key, value in values.items() if value is not None}


def build_service(settings: Settings) -> GalleryService:
    """設定から依存関係を組み立て、GalleryService を返します。"""
    repository = FileSystemGalleryRepository()
    pipeline = GalleryAssetPipeline(
        repository=repository,
        codec=PillowImageCodec(),
        resampler=ImageResampler(settings.gallery.resize_method),
        jpeg_quality=settings.gallery.jpeg_quality,
        use_filenames_as_titles=settings.gallery.image_name_titles,
    )
    return GalleryService(
        settings=settings,
        repository=repository,
        pipeline=pipeline,
        template_writer=TemplateWriter(repository),
        optimizer=TemplateOptimizer(repository),
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            '-v',
            '--verbose',
            help='詳細なデバッグログを有効にします。',
            show_default=False,
        ),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            '-c',
            '--config',
            help='カスタム設定TOMLファイルへのパス。',
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    log_file: Annotated[
        bool,
        typer.Option(
            '--log-file',
            help='ログをJSON形式でファイルに出力します。',
            show_default=False,
        ),
    ] = False,
) -> None:
    """
    Static Gallery Generator
    """
    log_level = 'DEBUG' if verbose else 'INFO'
    setup_logging(log_level, serialize_to_file=log_file)
    ctx.obj = {'config': config, 'log_level': log_level}


@app.command()
def generate(
    ctx: typer.Context,
    input_dirs: Annotated[
        list[Path] | None,
        typer.Argument(
            help='背景画像とコレクションのフォルダを含むディレクトリ。',
            metavar='INPUT_DIR',
            show_default=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option('-o', '--output', help='生成したギャラリーの書き込み先ディレクトリ。'),
    ] = None,
    template: Annotated[
        Path | None,
        typer.Option('-t', '--template', help='テンプレートを含むディレクトリ。'),
    ] = None,
    optimize: Annotated[
        bool | None,
        typer.Option(
            '--optimize/--no-optimize',
            help='JavaScriptとCSSをHTMLに埋め込み、コメントを削除します。',
            show_default=False,
        ),
    ] = None,
    thumb_size: Annotated[
        str | None,
        typer.Option('--thumb-size', help='サムネイル画像の最大サイズ (例: 960x540)。'),
    ] = None,
    display_size: Annotated[
        str | None,
        typer.Option('--display-size', help='表示用画像の最大サイズ (例: 2560x1440)。'),
    ] = None,
    background_size: Annotated[
        str | None,
        typer.Option('--background-size', help='背景画像の最大サイズ (例: 2560x1440)。'),
    ] = None,
    jpeg_quality: Annotated[
        int | None,
        typer.Option('--jpeg-quality', help='出力するJPEG画像の品質 (1-100)。'),
    ] = None,
    resize_method: Annotated[
        ResizeMethod | None,
        typer.Option(
            '--resize-method', help='縮小時のリサンプリングフィルタ。', case_sensitive=False
        ),
    ] = None,
    image_name_titles: Annotated[
        bool | None,
        typer.Option(
            '--image-name-titles/--no-image-name-titles',
            help='画像のファイル名を写真のタイトルとして使用します。',
            show_default=False,
        ),
    ] = None,
    clean: Annotated[
        bool | None,
        typer.Option(
            '--clean/--no-clean',
            help='生成前に既存の出力ディレクトリを削除します。',
            show_default=False,
        ),
    ] = None,
    archive: Annotated[
        bool | None,
        typer.Option(
            '--archive/--no-archive',
            '-a',
            help=f'元画像をコレクションごとにまとめた {LAYOUT_NAMES.ARCHIVE_FILE_NAME} を出力します。',
            show_default=False,
        ),
    ] = None,
) -> None:
    """ディレクトリ内の写真からギャラリーを生成します。"""
    options: dict[str, Any] = ctx.obj or {}
    try:
        settings = Settings(
            _config_file=options.get('config'),
            log_level=options.get('log_level', 'INFO'),
            gallery=_drop_unset(
                {
                    'thumb_size': thumb_size,
                    'display_size': display_size,
                    'background_size': background_size,
                    'jpeg_quality': jpeg_quality,
                    'resize_method': resize_method,
                    'image_name_titles': image_name_titles,
                }
            ),
            builder=_drop_unset(
                {
                    'output_directory': output,
                    'template_directory': template,
                    'optimize': optimize,
                    'clean_output': clean,
                    'create_archive': archive,
                }
            ),
        )
        output_dir = build_service(settings).generate(list(input_dirs or []))
    except StaticGalleryError as e:
        logger.bind(exit_code=int(e.exit_code)).debug('処理を中断しました。')
        # エラーは常に1行で出力する
        message = ' '.join(str(e).splitlines())
        typer.echo(f'ERROR: {message}', err=True)
        raise typer.Exit(code=int(e.exit_code)) from e

    logger.success('✅ ギャラリーを生成しました: {}', output_dir)


@logger.catch(exclude=StaticGalleryError)
def run_app() -> None:
    """
    アプリケーション全体を@logger.catchでラップし、
    制御下の例外以外をLoguruに記録させるためのラッパー関数。
    """
    app()
