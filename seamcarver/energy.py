"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the Sobel gradient magnitude of the image luminance
(Avidan & Shamir 2007), with edge-replicated borders.
"""

import torch
import torch.nn.functional as F


SOBEL_X = [[-1, 0, 1],
           [-2, 0, 2],
           [-1, 0, 1]]

SOBEL_Y = [[-1, -2, -1],
           [ 0,  0,  0],
           [ 1,  2,  1]]


def luminance(image: torch.Tensor) -> torch.Tensor:
    """
    Reduce an image to a single float64 intensity channel.

    Args:
        image: RGB(A) image tensor (C, H, W) or grayscale (H, W)

    Returns:
        Luminance map (H, W); rounded to whole values for integer RGB input
    """
    if image.dim() == 2:
        return image.to(torch.float64)
    if image.dim() != 3:
        raise ValueError(f"Expected (C, H, W) or (H, W) image, got shape {tuple(image.shape)}")

    integer_input = not image.is_floating_point()
    image = image.to(torch.float64)
    if image.shape[0] < 3:
        return image[0]

    # Extra channels (alpha) do not contribute to energy
    gray = 0.299 * image[0] + 0.587 * image[1] + 0.114 * image[2]
    if integer_input:
        # Integer pixels give integer luminance, so flat regions have exactly zero gradient
        gray = torch.round(gray)
    return gray


def gradient_magnitude_energy(image: torch.Tensor) -> torch.Tensor:
    """
    Compute gradient magnitude energy for an image.

    E(i,j) = sqrt(Gx(i,j)^2 + Gy(i,j)^2)

    where Gx, Gy are the Sobel responses of the luminance. Pixels outside
    the image read as the nearest edge pixel.

    Args:
        image: RGB image tensor (C, H, W) or grayscale (H, W), any dtype

    Returns:
        Energy map (H, W), float64, non-negative
    """
    gray = luminance(image)
    H, W = gray.shape

    sobel_x = torch.tensor(SOBEL_X, dtype=gray.dtype, device=gray.device).view(1, 1, 3, 3)
    sobel_y = torch.tensor(SOBEL_Y, dtype=gray.dtype, device=gray.device).view(1, 1, 3, 3)

    # Replicate padding needs a batch and a channel dimension
    padded = F.pad(gray.reshape(1, 1, H, W), (1, 1, 1, 1), mode='replicate')

    # conv2d is a correlation, which is what the kernels above assume
    grad_x = F.conv2d(padded, sobel_x)
    grad_y = F.conv2d(padded, sobel_y)

    energy = torch.sqrt(grad_x ** 2 + grad_y ** 2)
    return energy.view(H, W)
