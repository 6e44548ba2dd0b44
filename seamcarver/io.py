"""
Conversion between image files and (C, H, W) uint8 tensors.
"""

from pathlib import Path
from typing import Union

import numpy as np
import torch
from PIL import Image, UnidentifiedImageError

from .errors import LoadError


def load_image(path: Union[str, Path]) -> torch.Tensor:
    """Load an image file as an RGB uint8 tensor (3, H, W)."""
    try:
        with Image.open(path) as img:
            img_array = np.array(img.convert('RGB'), dtype=np.uint8)
    except (OSError, UnidentifiedImageError) as ex:
        raise LoadError(f"Could not load image from: {path} ({ex})") from ex

    return torch.from_numpy(img_array).permute(2, 0, 1).contiguous()


def save_image(tensor: torch.Tensor, path: Union[str, Path]):
    """
    Save a (C, H, W) or (H, W) tensor as an image, creating parent directories.

    Float tensors are taken to be in [0, 1]; integer tensors in [0, 255].
    """
    if tensor.dim() == 3:
        img_array = tensor.permute(1, 2, 0).cpu().numpy()
        if img_array.shape[2] == 1:
            img_array = img_array[:, :, 0]
    else:
        img_array = tensor.cpu().numpy()

    if np.issubdtype(img_array.dtype, np.floating):
        # Float images are in [0, 1]
        img_array = (img_array * 255).clip(0, 255).astype(np.uint8)
    elif img_array.dtype != np.uint8:
        img_array = img_array.clip(0, 255).astype(np.uint8)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(img_array).save(path)
