"""Tests for the command-line front end."""

import logging

import numpy as np
import pytest
from PIL import Image
from seamcarver.cli import main, output_filename, percent_to_pixels
from seamcarver.seam import SeamMethod


@pytest.fixture
def image_path(tmp_path):
    """20x10 random RGB PNG on disk."""
    rng = np.random.default_rng(0)
    pixels = rng.integers(0, 256, size=(10, 20, 3), dtype=np.uint8)
    path = tmp_path / 'input.png'
    Image.fromarray(pixels).save(path)
    return path


class TestHelpers:
    def test_percent_truncates(self):
        assert percent_to_pixels(20, 80) == 16
        assert percent_to_pixels(10, 75) == 7
        assert percent_to_pixels(10, 1) == 0

    def test_output_filename(self):
        assert output_filename(SeamMethod.GREEDY, 75.0, 60.5, 15, 6) == \
            'output_greedy_75w_60h_15x6.png'


class TestMain:
    def test_default_resize(self, tmp_path, image_path):
        out_dir = tmp_path / 'out'
        assert main([str(image_path), '--output-dir', str(out_dir)]) == 0

        output = out_dir / 'output_dp_80w_80h_16x8.png'
        assert output.exists()
        with Image.open(output) as img:
            assert img.size == (16, 8)

    @pytest.mark.parametrize("method", ['greedy', 'SHORTEST_PATH', 'DP'])
    def test_methods(self, tmp_path, image_path, method):
        out_dir = tmp_path / 'out'
        assert main([str(image_path), '50', '100', method, '--output-dir', str(out_dir)]) == 0
        expected = f"output_{method.lower()}_50w_100h_10x10.png"
        with Image.open(out_dir / expected) as img:
            assert img.size == (10, 10)

    def test_same_size_writes_nothing(self, tmp_path, image_path, caplog):
        caplog.set_level(logging.INFO, logger='seamcarver.cli')
        out_dir = tmp_path / 'out'
        assert main([str(image_path), '100', '100', '--output-dir', str(out_dir)]) == 0
        assert not out_dir.exists()
        assert 'No resizing needed' in caplog.text

    @pytest.mark.parametrize("pct", [['0', '50'], ['50', '101'], ['-5', '80']])
    def test_percentage_out_of_range(self, tmp_path, image_path, pct):
        out_dir = tmp_path / 'out'
        assert main([str(image_path), *pct, '--output-dir', str(out_dir)]) == 1
        assert not out_dir.exists()

    def test_target_too_small(self, tmp_path, image_path, caplog):
        caplog.set_level(logging.INFO, logger='seamcarver.cli')
        assert main([str(image_path), '50', '5', '--output-dir', str(tmp_path / 'out')]) == 1
        assert 'too small' in caplog.text

    def test_missing_image(self, tmp_path):
        assert main([str(tmp_path / 'nope.png'), '--output-dir', str(tmp_path / 'out')]) == 1

    def test_invalid_method_is_usage_error(self, image_path):
        with pytest.raises(SystemExit) as excinfo:
            main([str(image_path), '80', '80', 'graphcut'])
        assert excinfo.value.code == 2

    def test_unwritable_output_dir(self, tmp_path, image_path, caplog):
        """An output directory that is really a file is reported, not raised."""
        caplog.set_level(logging.INFO, logger='seamcarver.cli')
        blocker = tmp_path / 'taken'
        blocker.write_text('a file, not a directory')
        assert main([str(image_path), '--output-dir', str(blocker)]) == 1
        assert 'could not write' in caplog.text
        assert blocker.read_text() == 'a file, not a directory'
