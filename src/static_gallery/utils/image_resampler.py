# FILE: src/static_gallery/utils/image_resampler.py
import io

from loguru import logger
from PIL import Image, UnidentifiedImageError

from ..models.gallery import Size
from ..shared.enums import ExitCode, ResizeMethod
from ..shared.exceptions import AssetIOError

_RESAMPLING_FILTERS: dict[ResizeMethod, Image.Resampling] = {
    ResizeMethod.LANCZOS: Image.Resampling.LANCZOS,
    ResizeMethod.BICUBIC: Image.Resampling.BICUBIC,
    ResizeMethod.BILINEAR: Image.Resampling.BILINEAR,
    ResizeMethod.HAMMING: Image.Resampling.HAMMING,
    ResizeMethod.BOX: Image.Resampling.BOX,
    ResizeMethod.NEAREST: Image.Resampling.NEAREST,
}

# JPEGとして直接保存できるモード
_JPEG_MODES = ('RGB', 'L', 'CMYK')


def fit_within(width: int, height: int, box: Size) -> tuple[int, int]:
    """
    アスペクト比を保ったまま (width, height) を境界ボックスに収めた寸法を返します。
    どちらか一方の辺は必ずボックスの境界に一致します。
    """
    if width * box.height >= height * box.width:
        # 横方向が制約となる
        return box.width, max(1, round(height * box.width / width))
    return max(1, round(width * box.height / height)), box.height


class PillowImageCodec:
    """Pillowを利用したJPEGのデコード・エンコード。"""

    def decode(self, data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
            return image
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
            raise AssetIOError(
                f'画像のデコードに失敗しました: {e}', ExitCode.IMAGE_DECODE
            ) from e

    def encode(self, image: Image.Image, quality: int) -> bytes:
        if image.mode not in _JPEG_MODES:
            image = image.convert('RGB')
        buffer = io.BytesIO()
        try:
            image.save(buffer, format='JPEG', quality=quality)
        except (OSError, ValueError) as e:
            raise AssetIOError(
                f'画像のエンコードに失敗しました: {e}', ExitCode.IMAGE_ENCODE
            ) from e
        return buffer.getvalue()


class ImageResampler:
    """境界ボックスを超える画像のみを縮小するクラス。拡大は行いません。"""

    def __init__(self, method: ResizeMethod = ResizeMethod.LANCZOS):
        self.method = method
        self._filter = _RESAMPLING_FILTERS[method]

    def resample(self, image: Image.Image, max_width: int, max_height: int) -> Image.Image:
        """
        画像が境界ボックス (max_width x max_height) を超える場合のみ縮小します。

        Args:
            image (Image.Image): デコード済みの画像。
            max_width (int): 最大幅。
            max_height (int): 最大高さ。

        Returns:
            Image.Image: 縮小後の画像。ボックス内に収まる場合は元の画像そのもの。
        """
        box = Size(width=max_width, height=max_height)
        width, height = image.size
        if box.contains(width, height):
            return image

        new_size = fit_within(width, height, box)
        logger.debug(
            '画像を縮小します: {}x{} -> {}x{} ({})',
            width,
            height,
            *new_size,
            self.method.value,
        )
        return image.resize(new_size, self._filter)
