# FILE: tests/test_cli.py
from pathlib import Path

import pytest
from typer.testing import CliRunner

from static_gallery.entrypoints.cli import app
from static_gallery.shared.enums import ExitCode

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_generate(gallery_dir: Path, template_dir: Path, tmp_path: Path):
    output = tmp_path / 'out'
    result = runner.invoke(
        app,
        [
            'generate',
            str(gallery_dir),
            '--output',
            str(output),
            '--template',
            str(template_dir),
            '--thumb-size',
            '480x270',
            '--image-name-titles',
        ],
    )

    assert result.exit_code == 0, result.output
    assert (output / 'index.html').is_file()
    assert (output / 'c0' / '0-t.jpg').is_file()
    assert '"title":"a"' in (output / 'index.html').read_text(encoding='utf-8')


def test_generate_with_config_and_optimize(gallery_dir: Path, template_dir: Path, tmp_path: Path):
    config = tmp_path / 'gallery.toml'
    config.write_text(
        f'[builder]\noutput_directory = "{(tmp_path / "site").as_posix()}"\n'
        f'template_directory = "{template_dir.as_posix()}"\n'
    )
    result = runner.invoke(
        app, ['--verbose', '--config', str(config), 'generate', str(gallery_dir), '--optimize']
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / 'site' / 'index.html').is_file()


@pytest.mark.parametrize(
    'extra_args, exit_code',
    [
        (['--thumb-size', '960'], ExitCode.INVALID_THUMB_SIZE),
        (['--display-size', 'x'], ExitCode.INVALID_DISPLAY_SIZE),
        (['--background-size', '10x0'], ExitCode.INVALID_BACKGROUND_SIZE),
        (['--jpeg-quality', '101'], ExitCode.INVALID_SETTINGS),
    ],
)
def test_configuration_errors(gallery_dir, template_dir, tmp_path, extra_args, exit_code):
    result = runner.invoke(
        app,
        ['generate', str(gallery_dir), '-o', str(tmp_path / 'out'), '-t', str(template_dir)]
        + extra_args,
    )
    assert result.exit_code == exit_code


def test_wrong_input_count(template_dir, tmp_path):
    result = runner.invoke(
        app, ['generate', '-o', str(tmp_path / 'out'), '-t', str(template_dir)]
    )
    assert result.exit_code == ExitCode.INVALID_INPUT_COUNT


def test_missing_output(gallery_dir, template_dir):
    result = runner.invoke(app, ['generate', str(gallery_dir), '-t', str(template_dir)])
    assert result.exit_code == ExitCode.OUTPUT_NOT_GIVEN


def test_missing_backgrounds(template_dir, tmp_path, make_image):
    make_image(tmp_path / 'in' / 'trip' / 'a.jpg', (10, 10))
    result = runner.invoke(
        app,
        ['generate', str(tmp_path / 'in'), '-o', str(tmp_path / 'out'), '-t', str(template_dir)],
    )
    assert result.exit_code == ExitCode.NO_BACKGROUNDS
    assert not (tmp_path / 'out').exists()


def test_settings_error_is_one_line(gallery_dir, template_dir, tmp_path):
    result = runner.invoke(
        app,
        [
            'generate',
            str(gallery_dir),
            '-o',
            str(tmp_path / 'out'),
            '-t',
            str(template_dir),
            '--jpeg-quality',
            '101',
        ],
    )

    assert result.exit_code == ExitCode.INVALID_SETTINGS
    lines = result.stderr.strip().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith('ERROR: ')
    assert 'jpeg_quality' in lines[0]


def test_generate_with_archive(gallery_dir: Path, template_dir: Path, tmp_path: Path):
    output = tmp_path / 'out'
    result = runner.invoke(
        app,
        ['generate', str(gallery_dir), '-o', str(output), '-t', str(template_dir), '-a'],
    )

    assert result.exit_code == 0, result.output
    assert (output / 'Gallery.zip').is_file()
