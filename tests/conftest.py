# FILE: tests/conftest.py
from pathlib import Path

import pytest
from PIL import Image

from static_gallery.infrastructure.builders.gallery.asset_pipeline import (
    GalleryAssetPipeline,
)
from static_gallery.infrastructure.repositories.filesystem import (
    FileSystemGalleryRepository,
)
from static_gallery.utils.image_resampler import ImageResampler, PillowImageCodec

TEMPLATE_INDEX = """<!DOCTYPE html>
<html>
<head>
<title>Gallery</title>
</head>
<body>
<script>var collections = /*{{BEGIN:collections*/[]/*END:collections}}*/;</script>
</body>
</html>
"""


def write_image(path: Path, size: tuple[int, int], color=(200, 30, 30), fmt='JPEG') -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new('RGB', size, color).save(path, format=fmt)
    return path


@pytest.fixture
def make_image():
    return write_image


@pytest.fixture
def repository() -> FileSystemGalleryRepository:
    return FileSystemGalleryRepository()


@pytest.fixture
def pipeline(repository: FileSystemGalleryRepository) -> GalleryAssetPipeline:
    return GalleryAssetPipeline(
        repository=repository,
        codec=PillowImageCodec(),
        resampler=ImageResampler(),
    )


@pytest.fixture
def gallery_dir(tmp_path: Path) -> Path:
    """bg1.jpg, bg2.jpg と trip/(a.jpg, b.png, c.jpeg) を含む入力ディレクトリ。"""
    root = tmp_path / 'gallery'
    write_image(root / 'bg1.jpg', (3000, 2000))
    write_image(root / 'bg2.jpg', (800, 600), color=(10, 10, 200))
    (root / 'notes.txt').write_text('ignored')
    write_image(root / 'trip' / 'a.jpg', (4000, 1000))
    write_image(root / 'trip' / 'b.png', (100, 100), fmt='PNG')
    write_image(root / 'trip' / 'c.jpeg', (1000, 2000), color=(30, 200, 30))
    return root


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    root = tmp_path / 'template'
    (root / 'css').mkdir(parents=True)
    (root / 'js').mkdir()
    (root / 'index.html').write_text(TEMPLATE_INDEX, encoding='utf-8')
    (root / 'css' / 'style.css').write_text('body {\n\tcolor: red;\n}\n')
    (root / 'js' / 'app.js').write_text('var a = 1;\n')
    return root
