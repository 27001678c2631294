# FILE: src/static_gallery/shared/exceptions.py

from .enums import ExitCode


class StaticGalleryError(Exception):
    """アプリケーションの基底例外クラス。終了コードを保持します。"""

    def __init__(self, message: str, exit_code: ExitCode):
        super().__init__(message)
        self.exit_code = exit_code


class SettingsError(StaticGalleryError):
    """設定関連のエラー(不正な解像度文字列、パス未指定など)。"""

    def __init__(
        self, message: str, exit_code: ExitCode = ExitCode.INVALID_SETTINGS
    ):
        super().__init__(message, exit_code)


class InputValidationError(StaticGalleryError):
    """入力ディレクトリや出力ディレクトリが前提条件を満たさない場合のエラー。"""

    pass


class BuildError(StaticGalleryError):
    """ギャラリー生成処理中のエラーの基底クラス。"""

    pass


class AssetIOError(BuildError):
    """ファイルの読み書き・コピー・画像の変換に失敗したエラー。"""

    def __init__(self, message: str, exit_code: ExitCode, path: object = None):
        if path is not None:
            super().__init__(f'{message}: "{path}"', exit_code)
        else:
            super().__init__(message, exit_code)
        self.path = path


class TemplateError(BuildError):
    """テンプレートの構造が不正な場合のエラー(マーカー欠落、不正なstyle/scriptタグ)。"""

    pass
