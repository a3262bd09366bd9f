"""
Module: photo_combiner.images

Purpose:
    Image acquisition for the combiner: selecting input files, decoding
    them (including HEIC/HEIF) and serving decoded images by id.

Key Classes:
    - LoadedImage, LoadReport: Loader results
    - ImageProvider: Abstract image access
    - LoadedImageProvider: Provider over loaded images

Key Functions:
    - collect_image_files(), load_image(), load_images()

Dependencies:
    - PIL: Image decoding
    - pillow_heif: HEIC/HEIF decoding

Used By:
    - photo_combiner.controller: Build pipeline
    - photo_combiner.output: Rendering
"""

from .loader import (
    SUPPORTED_EXTENSIONS,
    ImageLoadError,
    LoadedImage,
    LoadReport,
    collect_image_files,
    is_supported_file,
    load_image,
    load_images,
)
from .provider import ImageProvider, LoadedImageProvider, ImageNotFoundError

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "ImageLoadError",
    "LoadedImage",
    "LoadReport",
    "collect_image_files",
    "is_supported_file",
    "load_image",
    "load_images",
    "ImageProvider",
    "LoadedImageProvider",
    "ImageNotFoundError",
]
