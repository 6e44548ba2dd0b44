"""Tests for image file loading and saving."""

import numpy as np
import torch
import pytest
from PIL import Image
from seamcarver.errors import LoadError
from seamcarver.io import load_image, save_image


class TestLoadImage:
    def test_loads_rgb_as_chw_uint8(self, tmp_path):
        pixels = np.zeros((4, 6, 3), dtype=np.uint8)
        pixels[1, 2] = (10, 20, 30)
        path = tmp_path / 'small.png'
        Image.fromarray(pixels).save(path)

        image = load_image(path)
        assert image.shape == (3, 4, 6)
        assert image.dtype == torch.uint8
        assert image[:, 1, 2].tolist() == [10, 20, 30]

    def test_grayscale_file_becomes_rgb(self, tmp_path):
        path = tmp_path / 'gray.png'
        Image.fromarray(np.full((3, 5), 99, dtype=np.uint8)).save(path)
        image = load_image(path)
        assert image.shape == (3, 3, 5)
        assert (image == 99).all()

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError):
            load_image(tmp_path / 'missing.png')

    def test_not_an_image(self, tmp_path):
        path = tmp_path / 'notes.png'
        path.write_text('not really a png')
        with pytest.raises(LoadError):
            load_image(path)


class TestSaveImage:
    def test_creates_parent_directories(self, tmp_path, rgb_image):
        path = tmp_path / 'nested' / 'dir' / 'out.png'
        save_image(rgb_image, path)
        assert torch.equal(load_image(path), rgb_image)

    def test_float_image_scaled_from_unit_range(self, tmp_path):
        torch.manual_seed(3)
        image = torch.rand(3, 6, 6)
        path = tmp_path / 'float.png'
        save_image(image, path)

        saved = load_image(path).int()
        expected = (image * 255).int()
        assert saved.max() > 0
        assert (saved - expected).abs().max() <= 1

    def test_single_channel(self, tmp_path):
        image = torch.full((1, 4, 4), 200, dtype=torch.uint8)
        path = tmp_path / 'mono.png'
        save_image(image, path)
        with Image.open(path) as img:
            assert img.mode == 'L'
            assert img.size == (4, 4)
