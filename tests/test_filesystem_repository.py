# FILE: tests/test_filesystem_repository.py
from pathlib import Path

import pytest

from static_gallery.infrastructure.repositories.filesystem import is_image_file_name
from static_gallery.shared.enums import ExitCode
from static_gallery.shared.exceptions import AssetIOError, InputValidationError


@pytest.mark.parametrize(
    'name, expected',
    [('a.jpg', True), ('A.JPEG', True), ('b.Jpg', True), ('c.png', False), ('jpg', False)],
)
def test_is_image_file_name(name, expected):
    assert is_image_file_name(name) is expected


class TestLoadSource:
    def test_backgrounds_and_collections(self, repository, gallery_dir: Path):
        source = repository.load_source(gallery_dir)

        assert [p.name for p in source.backgrounds] == ['bg1.jpg', 'bg2.jpg']
        assert [c.title for c in source.collections] == ['trip']
        assert [p.name for p in source.collections[0].source_files] == ['a.jpg', 'c.jpeg']
        assert source.picture_count == 2

    def test_listing_order_is_by_name(self, repository, gallery_dir: Path, make_image):
        make_image(gallery_dir / 'alpha' / 'z.jpg', (10, 10))
        make_image(gallery_dir / 'alpha' / 'm.jpg', (10, 10))
        (gallery_dir / 'alpha' / 'nested').mkdir()

        source = repository.load_source(gallery_dir)

        assert [c.title for c in source.collections] == ['alpha', 'trip']
        assert [p.name for p in source.collections[0].source_files] == ['m.jpg', 'z.jpg']

    def test_missing_backgrounds(self, repository, tmp_path: Path, make_image):
        make_image(tmp_path / 'in' / 'trip' / 'a.jpg', (10, 10))
        with pytest.raises(InputValidationError) as exc_info:
            repository.load_source(tmp_path / 'in')
        assert exc_info.value.exit_code == ExitCode.NO_BACKGROUNDS

    def test_missing_collections(self, repository, tmp_path: Path, make_image):
        make_image(tmp_path / 'in' / 'bg.jpg', (10, 10))
        with pytest.raises(InputValidationError) as exc_info:
            repository.load_source(tmp_path / 'in')
        assert exc_info.value.exit_code == ExitCode.NO_COLLECTIONS

    def test_empty_collection(self, repository, gallery_dir: Path):
        (gallery_dir / 'empty').mkdir()
        (gallery_dir / 'empty' / 'readme.txt').write_text('x')
        with pytest.raises(InputValidationError) as exc_info:
            repository.load_source(gallery_dir)
        assert exc_info.value.exit_code == ExitCode.EMPTY_COLLECTION

    def test_input_not_found(self, repository, tmp_path: Path):
        with pytest.raises(InputValidationError) as exc_info:
            repository.load_source(tmp_path / 'nope')
        assert exc_info.value.exit_code == ExitCode.INPUT_NOT_FOUND

    def test_input_not_directory(self, repository, tmp_path: Path):
        file_path = tmp_path / 'file.jpg'
        file_path.write_bytes(b'')
        with pytest.raises(InputValidationError) as exc_info:
            repository.load_source(file_path)
        assert exc_info.value.exit_code == ExitCode.INPUT_NOT_DIRECTORY


class TestValidateOutputDir:
    def test_missing_is_accepted_and_not_created(self, repository, tmp_path: Path):
        repository.validate_output_dir(tmp_path / 'out')
        assert not (tmp_path / 'out').exists()

    def test_empty_is_accepted(self, repository, tmp_path: Path):
        (tmp_path / 'out').mkdir()
        repository.validate_output_dir(tmp_path / 'out')

    def test_non_empty_is_rejected(self, repository, tmp_path: Path):
        (tmp_path / 'out').mkdir()
        (tmp_path / 'out' / 'old.html').write_text('x')
        with pytest.raises(InputValidationError) as exc_info:
            repository.validate_output_dir(tmp_path / 'out')
        assert exc_info.value.exit_code == ExitCode.OUTPUT_NOT_EMPTY

    def test_file_is_rejected(self, repository, tmp_path: Path):
        (tmp_path / 'out').write_text('x')
        with pytest.raises(InputValidationError) as exc_info:
            repository.validate_output_dir(tmp_path / 'out')
        assert exc_info.value.exit_code == ExitCode.OUTPUT_NOT_DIRECTORY

    def test_clean_accepts_non_empty_without_removing(self, repository, tmp_path: Path):
        (tmp_path / 'out' / 'c0').mkdir(parents=True)
        (tmp_path / 'out' / 'c0' / '0.jpg').write_bytes(b'x')
        repository.validate_output_dir(tmp_path / 'out', clean=True)
        # 検証だけでは何も削除しない
        assert (tmp_path / 'out' / 'c0' / '0.jpg').is_file()

    def test_clean_output_dir_removes_existing(self, repository, tmp_path: Path):
        (tmp_path / 'out' / 'c0').mkdir(parents=True)
        (tmp_path / 'out' / 'c0' / '0.jpg').write_bytes(b'x')
        repository.clean_output_dir(tmp_path / 'out')
        assert not (tmp_path / 'out').exists()

    def test_clean_output_dir_missing_is_noop(self, repository, tmp_path: Path):
        repository.clean_output_dir(tmp_path / 'out')
        assert not (tmp_path / 'out').exists()


class TestFileOperations:
    def test_copy_file(self, repository, tmp_path: Path):
        source = tmp_path / 'a.bin'
        source.write_bytes(b'\x00\x01payload')
        repository.copy_file(source, tmp_path / 'b.bin')
        assert (tmp_path / 'b.bin').read_bytes() == b'\x00\x01payload'

    def test_copy_missing_source(self, repository, tmp_path: Path):
        with pytest.raises(AssetIOError) as exc_info:
            repository.copy_file(tmp_path / 'missing', tmp_path / 'b.bin')
        assert exc_info.value.exit_code == ExitCode.COPY_READ

    def test_copy_into_missing_directory(self, repository, tmp_path: Path):
        source = tmp_path / 'a.bin'
        source.write_bytes(b'x')
        with pytest.raises(AssetIOError) as exc_info:
            repository.copy_file(source, tmp_path / 'no' / 'b.bin')
        assert exc_info.value.exit_code == ExitCode.COPY_CREATE

    def test_read_uses_given_exit_code(self, repository, tmp_path: Path):
        with pytest.raises(AssetIOError) as exc_info:
            repository.read_bytes(tmp_path / 'missing.jpg', ExitCode.IMAGE_READ)
        assert exc_info.value.exit_code == ExitCode.IMAGE_READ
        assert exc_info.value.path == tmp_path / 'missing.jpg'

    def test_remove_empty_dir(self, repository, tmp_path: Path):
        (tmp_path / 'full').mkdir()
        (tmp_path / 'full' / 'x').write_text('x')
        (tmp_path / 'empty').mkdir()

        assert repository.remove_empty_dir(tmp_path / 'full') is False
        assert repository.remove_empty_dir(tmp_path / 'empty') is True
        assert (tmp_path / 'full').exists()
