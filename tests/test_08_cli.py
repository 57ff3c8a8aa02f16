"""
Test the command line entry points end to end
"""
import json

import numpy as np
from PIL import Image

from sensornoise import cli_batch, cli_image


def save_image(path, value=120):
    Image.new('RGB', (10, 8), (value, value, value)).save(path)
    return path


def test_image_help():
    assert cli_image.main(['--help']) == 0


def test_image_preset_list():
    assert cli_image.main(['--preset-list']) == 0


def test_image_render(tmp_path):
    input_path = save_image(tmp_path / 'photo.png')
    output_path = tmp_path / 'result.png'

    assert cli_image.main([str(input_path), str(output_path), '--seed', '5', '--yes']) == 0
    with Image.open(output_path) as output:
        assert output.size == (10, 8)


def test_image_default_output_name(tmp_path):
    input_path = save_image(tmp_path / 'photo.png')
    assert cli_image.main([str(input_path), '--preset', 'subtle', '-s', '1']) == 0
    assert (tmp_path / 'photo-noisy.png').exists()


def test_image_overrides_are_applied(tmp_path):
    input_path = save_image(tmp_path / 'photo.png')
    output_path = tmp_path / 'silent.png'

    args = [str(input_path), str(output_path), '-i', '0', '-v', '0', '-m', '0', '-s', '3', '--yes']
    assert cli_image.main(args) == 0
    with Image.open(output_path) as output:
        assert set(np.asarray(output).ravel().tolist()) == {120}


def test_image_invalid_config(tmp_path):
    input_path = save_image(tmp_path / 'photo.png')
    assert cli_image.main([str(input_path), '--intensity', '2']) == 1
    assert cli_image.main([str(input_path), '--preset', 'unknown']) == 1


def test_image_missing_input(tmp_path):
    assert cli_image.main([str(tmp_path / 'missing.png')]) == 1


def test_batch_directory(tmp_path):
    in_dir = tmp_path / 'input'
    in_dir.mkdir()
    for name in ['a.png', 'b.png']:
        save_image(in_dir / name)
    out_dir = tmp_path / 'output'

    assert cli_batch.main(['--input', str(in_dir), '--output', str(out_dir), '--seed', '1', '--vary-seed']) == 0
    assert sorted(path.name for path in out_dir.iterdir()) == ['a.png', 'b.png']


def test_batch_summary_reports_file_sizes(tmp_path, capsys):
    in_dir = tmp_path / 'input'
    in_dir.mkdir()
    save_image(in_dir / 'a.png')

    assert cli_batch.main(['--input', str(in_dir), '--output', str(tmp_path / 'output'), '-s', '1']) == 0
    captured = capsys.readouterr().out
    assert 'Input size' in captured
    assert 'Output size' in captured


def test_batch_recursive_keeps_subdirectories(tmp_path):
    in_dir = tmp_path / 'input'
    for folder, value in [('a', 40), ('b', 200)]:
        (in_dir / folder).mkdir(parents=True)
        save_image(in_dir / folder / 'x.png', value)
    save_image(in_dir / 'top.png')
    out_dir = tmp_path / 'output'

    args = ['--input', str(in_dir), '--output', str(out_dir), '--recursive', '-i', '0', '-v', '0', '-m', '0', '-s', '1']
    assert cli_batch.main(args) == 0

    outputs = sorted(path.relative_to(out_dir).as_posix() for path in out_dir.rglob('*.png'))
    assert outputs == ['a/x.png', 'b/x.png', 'top.png']
    with Image.open(out_dir / 'a' / 'x.png') as first, Image.open(out_dir / 'b' / 'x.png') as second:
        assert set(np.asarray(first).ravel().tolist()) == {40}
        assert set(np.asarray(second).ravel().tolist()) == {200}


def test_batch_reports_failures(tmp_path):
    in_dir = tmp_path / 'input'
    in_dir.mkdir()
    save_image(in_dir / 'good.png')
    (in_dir / 'bad.png').write_bytes(b'garbage')

    assert cli_batch.main(['--input', str(in_dir), '--output', str(tmp_path / 'output'), '-s', '1']) == 1
    assert (tmp_path / 'output' / 'good.png').exists()


def test_batch_empty_directory(tmp_path):
    in_dir = tmp_path / 'input'
    in_dir.mkdir()
    assert cli_batch.main(['--input', str(in_dir), '--output', str(tmp_path / 'output')]) == 0


def test_batch_missing_input(tmp_path):
    assert cli_batch.main(['--input', str(tmp_path / 'nope'), '--output', str(tmp_path / 'output')]) == 1


def test_batch_presets_file(tmp_path):
    presets_file = tmp_path / 'presets.json'
    presets_file.write_text(json.dumps({'presets': {'real': {'name': 'Real', 'description': 'Custom', 'settings': {'intensity': 0.01}}}}))

    assert cli_batch.main(['--presets-file', str(presets_file), '--preset-list']) == 0

    in_dir = tmp_path / 'input'
    in_dir.mkdir()
    save_image(in_dir / 'a.png')
    args = ['--input', str(in_dir), '--output', str(tmp_path / 'output'), '--presets-file', str(presets_file), '-p', 'real']
    assert cli_batch.main(args) == 0
