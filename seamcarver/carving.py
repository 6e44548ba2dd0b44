"""
High-level carving: repeated estimate -> find -> remove cycles until the
image reaches a target size.
"""

import logging
import operator
from enum import Enum
from typing import Tuple, Union

import torch

from .energy import gradient_magnitude_energy
from .errors import InvalidTargetError, UnsupportedOperationError
from .seam import SeamMethod, find_seam, remove_seam

logger = logging.getLogger(__name__)

# Progress is logged every this many seams
PROGRESS_INTERVAL = 10


class CarverState(Enum):
    IDLE = 'idle'
    SHRINKING_WIDTH = 'shrinking_width'
    SHRINKING_HEIGHT = 'shrinking_height'
    DONE = 'done'


_PHASES = {
    'vertical': CarverState.SHRINKING_WIDTH,
    'horizontal': CarverState.SHRINKING_HEIGHT,
}


class SeamCarver:
    """
    Content-aware resizer holding an original and a working image.

    The original is never modified. The working image is replaced (not
    written into) on every seam removal, so between calls it is always a
    complete, valid image. Hosts that want to redraw between steps can
    drive the carver with find_seam() / step() instead of resize().
    """

    def __init__(self, image: torch.Tensor):
        """
        Args:
            image: Image tensor (C, H, W) or (H, W), at least 1x1
        """
        if image.dim() not in (2, 3):
            raise ValueError(f"Expected (C, H, W) or (H, W) image, got shape {tuple(image.shape)}")
        if image.shape[-2] < 1 or image.shape[-1] < 1:
            raise ValueError(f"Image must be at least 1x1, got {tuple(image.shape)}")

        self._original = image.clone()
        self._image = image.clone()
        self.state = CarverState.IDLE

    @property
    def image(self) -> torch.Tensor:
        """Copy of the current working image."""
        return self._image.clone()

    @property
    def original_image(self) -> torch.Tensor:
        """Copy of the image the carver was created with."""
        return self._original.clone()

    @property
    def height(self) -> int:
        return self._image.shape[-2]

    @property
    def width(self) -> int:
        return self._image.shape[-1]

    def energy(self) -> torch.Tensor:
        return gradient_magnitude_energy(self._image)

    def find_seam(self, direction: str = 'vertical',
                  method: Union[SeamMethod, str] = SeamMethod.DP) -> torch.Tensor:
        """Seam the next step would remove, without removing it."""
        return find_seam(self.energy(), direction=direction, method=method)

    def step(self, direction: str = 'vertical',
             method: Union[SeamMethod, str] = SeamMethod.DP) -> torch.Tensor:
        """
        Remove one seam from the working image.

        Sets state to SHRINKING_WIDTH (vertical) or SHRINKING_HEIGHT
        (horizontal) once the seam is removed.

        Returns:
            The removed seam
        """
        seam = self.find_seam(direction, method)
        self._image = remove_seam(self._image, seam, direction=direction)
        self.state = _PHASES[direction]
        return seam

    def reset(self):
        """Discard all carving and start again from the original image."""
        self._image = self._original.clone()
        self.state = CarverState.IDLE

    def _check_targets(self, target_width, target_height) -> Tuple[int, int]:
        try:
            target_width = operator.index(target_width)
            target_height = operator.index(target_height)
        except TypeError as ex:
            raise InvalidTargetError(
                f"Target size must be integers, got {target_width!r}x{target_height!r}") from ex
        if target_width <= 0 or target_height <= 0:
            raise InvalidTargetError(
                f"Target size must be positive, got {target_width}x{target_height}")
        if target_width > self.width or target_height > self.height:
            raise UnsupportedOperationError(
                f"Cannot enlarge {self.width}x{self.height} to "
                f"{target_width}x{target_height}; only shrinking is supported")
        return target_width, target_height

    def _carve(self, image: torch.Tensor, n_seams: int, direction: str,
               method: SeamMethod) -> torch.Tensor:
        self.state = _PHASES[direction]
        for i in range(n_seams):
            seam = find_seam(gradient_magnitude_energy(image), direction=direction, method=method)
            image = remove_seam(image, seam, direction=direction)
            if (i + 1) % PROGRESS_INTERVAL == 0 or (i + 1) == n_seams:
                logger.debug("Removed %d/%d %s seams", i + 1, n_seams, direction)
        return image

    def resize(self, target_width: int, target_height: int,
               method: Union[SeamMethod, str] = SeamMethod.DP) -> torch.Tensor:
        """
        Shrink the working image to target_width x target_height.

        All vertical seams are removed before any horizontal seam. Carving
        runs on a local copy; the working image is replaced only when both
        phases finish, so a failure leaves the carver as it was.

        Args:
            target_width: Desired width, 1 <= target_width <= current width
            target_height: Desired height, 1 <= target_height <= current height
            method: SeamMethod or its string value

        Returns:
            Copy of the resized working image

        Raises:
            InvalidTargetError: a target is not a positive integer
            UnsupportedOperationError: a target is larger than the current size
        """
        method = SeamMethod.parse(method)
        target_width, target_height = self._check_targets(target_width, target_height)

        logger.info("Resizing from %dx%d to %dx%d using %s",
                    self.width, self.height, target_width, target_height, method.value)

        previous_state = self.state
        try:
            image = self._carve(self._image, self.width - target_width, 'vertical', method)
            image = self._carve(image, image.shape[-2] - target_height, 'horizontal', method)
        except Exception:
            self.state = previous_state
            raise

        self._image = image
        self.state = CarverState.DONE
        logger.info("Resizing complete: %dx%d", self.width, self.height)
        return self.image


def carve_image(image: torch.Tensor, target_width: int, target_height: int,
                method: Union[SeamMethod, str] = SeamMethod.DP) -> torch.Tensor:
    """
    One-shot seam carving to a target size.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        target_width: Desired width
        target_height: Desired height
        method: 'dp', 'greedy' or 'shortest_path'

    Returns:
        Carved image
    """
    return SeamCarver(image).resize(target_width, target_height, method=method)
