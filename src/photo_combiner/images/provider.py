"""
Module: images.provider

Purpose:
    Access decoded images by id for rendering.

Key Classes:
    - ImageProvider: Abstract base class for image access
    - LoadedImageProvider: Provider backed by LoadedImages
    - ImageNotFoundError: Exception for unknown ids

Dependencies:
    - PIL: Image type

Used By:
    - output.renderer: Page compositing
    - photo_combiner.controller: Build pipeline
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable

from PIL import Image

from .loader import LoadedImage


class ImageNotFoundError(Exception):
    """No image registered under the requested id."""
    pass


class ImageProvider(ABC):
    """
    Abstract interface for accessing images by placement id.
    """

    @abstractmethod
    def get_image(self, image_id: str) -> Image.Image:
        """
        Get the decoded image for an id.

        Raises:
            ImageNotFoundError: If id not found
        """

    @property
    @abstractmethod
    def available_ids(self) -> list[str]:
        """Ids that can be requested."""

    def close(self) -> None:
        """Release any held images."""

    def __enter__(self) -> "ImageProvider":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class LoadedImageProvider(ImageProvider):
    """
    Provider over images already decoded by the loader.

    Example:
        >>> with LoadedImageProvider(report.loaded) as provider:
        ...     img = provider.get_image("1-beach")
    """

    def __init__(self, images: Iterable[LoadedImage]) -> None:
        self._images: Dict[str, Image.Image] = {item.id: item.image for item in images}

    def get_image(self, image_id: str) -> Image.Image:
        image = self._images.get(image_id)
        if image is None:
            raise ImageNotFoundError(f"No image for id: {image_id}")
        return image

    @property
    def available_ids(self) -> list[str]:
        return list(self._images.keys())

    def close(self) -> None:
        """Close all images and forget them."""
        for image in self._images.values():
            image.close()
        self._images.clear()
