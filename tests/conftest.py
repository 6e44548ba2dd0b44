"""Shared test fixtures for the seam carving test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


@pytest.fixture
def valley_energy():
    """3x3 energy with a single cheap middle column."""
    return torch.tensor([[9.0, 1.0, 9.0],
                         [9.0, 1.0, 9.0],
                         [9.0, 1.0, 9.0]])


@pytest.fixture
def uniform_energy():
    """4x4 energy where every pixel costs 5."""
    return torch.full((4, 4), 5.0)


@pytest.fixture
def rgb_image():
    """Random 3-channel uint8 image, 12 rows by 16 columns."""
    generator = torch.Generator().manual_seed(7)
    return torch.randint(0, 256, (3, 12, 16), dtype=torch.uint8, generator=generator)


def make_edge_image(H, W, edge_col, channels=3):
    """uint8 image: black left of edge_col, white from edge_col on."""
    img = torch.zeros(channels, H, W, dtype=torch.uint8)
    img[:, :, edge_col:] = 255
    return img


def make_column_index_image(H, W, channels=3):
    """uint8 image whose every pixel holds its own column index."""
    cols = torch.arange(W, dtype=torch.uint8).unsqueeze(0).expand(H, W)
    return cols.unsqueeze(0).expand(channels, H, W).clone()
