# FILE: src/static_gallery/infrastructure/builders/gallery/manifest.py
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ....models.gallery import Collection
from ....shared.enums import ExitCode
from ....shared.exceptions import BuildError

_MANIFEST_ADAPTER: TypeAdapter[list[Collection]] = TypeAdapter(list[Collection])

# <script>内に埋め込むため、HTMLで意味を持つ文字を \uXXXX に置換する。
# これらの文字はJSON中では文字列リテラル内にのみ現れる。
_HTML_SAFE_REPLACEMENTS: tuple[tuple[bytes, bytes], ...] = (
    (b'<', b'\\u003c'),
    (b'>', b'\\u003e'),
    (b'&', b'\\u0026'),
    ('\u2028'.encode(), b'\\u2028'),
    ('\u2029'.encode(), b'\\u2029'),
)


def serialize_manifest(collections: list[Collection]) -> bytes:
    """
    コレクションのリストをマニフェスト(コンパクトなJSON)に変換します。
    未設定の任意フィールドは出力から省略されます。
    """
    try:
        data = _MANIFEST_ADAPTER.dump_json(collections, exclude_none=True)
    except PydanticSerializationError as e:
        raise BuildError(
            f'マニフェストの生成に失敗しました: {e}', ExitCode.MANIFEST_SERIALIZE
        ) from e

    for target, replacement in _HTML_SAFE_REPLACEMENTS:
        data = data.replace(target, replacement)
    return data


def parse_manifest(data: bytes | str) -> list[Collection]:
    """シリアライズされたマニフェストをコレクションのリストに戻します。"""
    try:
        return _MANIFEST_ADAPTER.validate_json(data)
    except ValidationError as e:
        raise BuildError(
            f'マニフェストの解析に失敗しました: {e}', ExitCode.MANIFEST_SERIALIZE
        ) from e
