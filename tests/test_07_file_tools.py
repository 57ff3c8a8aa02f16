"""
Test directory scanning and path/format helpers
"""
from pathlib import Path

import pytest

from sensornoise import file_tools


def touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b'')
    return path


def test_list_images_natural_order(tmp_path):
    for name in ['img10.png', 'img2.png', 'img1.jpg', 'notes.txt', 'scan.TIF']:
        touch(tmp_path / name)
    touch(tmp_path / 'nested' / 'img3.webp')

    images = file_tools.list_images(tmp_path)
    assert [path.name for path in images] == ['img1.jpg', 'img2.png', 'img10.png', 'scan.TIF']


def test_list_images_recursive(tmp_path):
    touch(tmp_path / 'a.png')
    touch(tmp_path / 'nested' / 'b.jpeg')

    names = [path.name for path in file_tools.list_images(tmp_path, recursive=True)]
    assert names == ['a.png', 'b.jpeg']


def test_list_images_missing_directory(tmp_path):
    with pytest.raises(NotADirectoryError):
        file_tools.list_images(tmp_path / 'missing')


def test_is_supported_image():
    assert file_tools.is_supported_image('photo.JPG')
    assert file_tools.is_supported_image(Path('a/b/c.webp'))
    assert not file_tools.is_supported_image('clip.mp4')


def test_ensure_directory(tmp_path):
    target = tmp_path / 'a' / 'b'
    assert file_tools.ensure_directory(target) == target
    assert target.is_dir()
    # Existing directory is fine
    file_tools.ensure_directory(target)

    blocker = touch(tmp_path / 'file.png')
    with pytest.raises(NotADirectoryError):
        file_tools.ensure_directory(blocker)


def test_get_output_path():
    assert file_tools.get_output_path('in/photo.jpg', 'out') == Path('out/photo.jpg')
    assert file_tools.get_output_path(Path('in/photo.jpg'), Path('out'), suffix='-noisy') == Path('out/photo-noisy.jpg')


@pytest.mark.parametrize("ms, expected", [
    (0, '0ms'),
    (456.4, '456ms'),
    (999.4, '999ms'),
    (1000, '1.00s'),
    (1234, '1.23s'),
])
def test_format_time(ms, expected):
    assert file_tools.format_time(ms) == expected


@pytest.mark.parametrize("num_bytes, expected", [
    (100, '100.00 B'),
    (2048, '2.00 KB'),
    (int(2.5 * 1024 * 1024), '2.50 MB'),
    (3 * 1024 ** 4, '3072.00 GB'),
])
def test_format_file_size(num_bytes, expected):
    assert file_tools.format_file_size(num_bytes) == expected


def test_get_output_path_mirrors_subdirectories():
    assert file_tools.get_output_path('in/a/x.png', 'out', input_dir='in') == Path('out/a/x.png')
    assert file_tools.get_output_path('in/b/x.png', 'out', input_dir='in') == Path('out/b/x.png')
    assert file_tools.get_output_path('in/top.png', 'out', input_dir='in') == Path('out/top.png')
