"""
Module: images.loader

Purpose:
    Select and decode input photographs, producing the image descriptors
    the layout engine consumes. Decoding failures are collected here and
    never reach the layout core.

Key Functions:
    - collect_image_files(): Expand directories and filter by type
    - load_image(): Decode a single file (HEIC/HEIF transcoded)
    - load_images(): Decode many files, collecting failures

Key Classes:
    - LoadedImage: Decoded image with its descriptor
    - LoadReport: Successful loads plus failures
    - ImageLoadError: Exception for unreadable files

Dependencies:
    - PIL: Decoding and EXIF orientation
    - pillow_heif: HEIC/HEIF decoding

Used By:
    - photo_combiner.controller: Build pipeline
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from photo_combiner.layout.models import ImageDescriptor

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({
    "jpg", "jpeg", "png", "gif", "webp", "bmp", "heic", "heif",
})
HEIF_EXTENSIONS = frozenset({"heic", "heif"})

_heif_registered = False


class ImageLoadError(Exception):
    """Image file is corrupt, unsupported or unreadable."""
    pass


@dataclass(frozen=True)
class LoadedImage:
    """
    Decoded image ready for layout and rendering.

    Attributes:
        id: Unique identifier used in placements
        path: Source file
        image: Decoded PIL image (EXIF orientation applied)
    """

    id: str
    path: Path
    image: Image.Image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def descriptor(self) -> ImageDescriptor:
        """Dimensions-only view handed to the layout engine."""
        return ImageDescriptor(id=self.id, width=self.width, height=self.height)


@dataclass
class LoadReport:
    """
    Result of loading a batch of files.

    Attributes:
        loaded: Successfully decoded images, in input order
        failures: (path, reason) for every file that could not be decoded
    """

    loaded: List[LoadedImage] = field(default_factory=list)
    failures: List[Tuple[Path, str]] = field(default_factory=list)

    @property
    def descriptors(self) -> List[ImageDescriptor]:
        return [item.descriptor for item in self.loaded]

    @property
    def loaded_count(self) -> int:
        return len(self.loaded)


def _extension(path: Path) -> str:
    return path.suffix.lower().lstrip(".")


def is_supported_file(path: Path) -> bool:
    """
    Check whether a file looks like a supported image.

    Accepts a known extension (case-insensitive) or any file whose
    guessed MIME type is ``image/*``.
    """
    if _extension(path) in SUPPORTED_EXTENSIONS:
        return True
    mime, _ = mimetypes.guess_type(path.name)
    return bool(mime and mime.startswith("image/"))


def collect_image_files(paths: Iterable[Path]) -> List[Path]:
    """
    Expand input paths into a list of image files.

    Directories contribute their supported files (sorted by name, not
    recursive). Files are kept in the given order; unsupported or
    missing paths are skipped with a warning. Duplicates are dropped.
    """
    files: List[Path] = []
    seen = set()

    def _add(candidate: Path) -> None:
        key = candidate.resolve()
        if key not in seen:
            seen.add(key)
            files.append(candidate)

    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for child in sorted(path.iterdir()):
                if child.is_file() and is_supported_file(child):
                    _add(child)
        elif path.is_file():
            if is_supported_file(path):
                _add(path)
            else:
                logger.warning(f"Skipping unsupported file: {path}")
        else:
            logger.warning(f"Input not found: {path}")

    return files


def _register_heif() -> None:
    """Register the HEIF opener with Pillow (once per process)."""
    global _heif_registered
    if _heif_registered:
        return
    from pillow_heif import register_heif_opener

    register_heif_opener()
    _heif_registered = True


def _decode(path: Path) -> Image.Image:
    """Open and fully decode an image, normalizing orientation and mode."""
    with Image.open(path) as img:
        img.load()
        oriented = ImageOps.exif_transpose(img)
        if oriented is None:
            oriented = img
        if oriented.mode in ("RGB", "RGBA"):
            return oriented.copy()
        if oriented.mode in ("LA", "PA") or (
            oriented.mode == "P" and "transparency" in oriented.info
        ):
            return oriented.convert("RGBA")
        return oriented.convert("RGB")


def load_image(path: Path, image_id: str) -> LoadedImage:
    """
    Decode a single image file.

    HEIC/HEIF files are decoded through pillow-heif; if that fails a
    plain Pillow open is tried before giving up.

    Args:
        path: Image file
        image_id: Identifier for the resulting descriptor

    Returns:
        LoadedImage

    Raises:
        ImageLoadError: If the file cannot be decoded
    """
    if _extension(path) in HEIF_EXTENSIONS:
        logger.info(f"Converting HEIC file: {path.name}")
        try:
            _register_heif()
            image = _decode(path)
            logger.info(f"Successfully converted: {path.name}")
            return LoadedImage(id=image_id, path=path, image=image)
        except (
            ImportError,
            OSError,
            ValueError,
            UnidentifiedImageError,
            Image.DecompressionBombError,
        ) as heif_error:
            logger.warning(f"HEIC conversion failed for {path.name}: {heif_error}")
            logger.info(f"Trying native load for: {path.name}")
            try:
                image = _decode(path)
            except (
                OSError,
                ValueError,
                UnidentifiedImageError,
                Image.DecompressionBombError,
            ) as native_error:
                raise ImageLoadError(
                    f"Could not process {path.name}: {heif_error}"
                ) from native_error
            return LoadedImage(id=image_id, path=path, image=image)

    try:
        image = _decode(path)
    except (OSError, ValueError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ImageLoadError(
            f"Failed to process {path.name}. It may be corrupted or unsupported: {e}"
        ) from e
    return LoadedImage(id=image_id, path=path, image=image)


def load_images(paths: Iterable[Path]) -> LoadReport:
    """
    Decode every file, skipping the ones that fail.

    Image ids are ``"<n>-<stem>"`` with ``n`` the 1-based position in
    ``paths``, so they are unique even when file names repeat.

    Args:
        paths: Image files in display order

    Returns:
        LoadReport with loaded images and failures
    """
    report = LoadReport()
    for position, path in enumerate(paths, start=1):
        path = Path(path)
        image_id = f"{position}-{path.stem}"
        try:
            report.loaded.append(load_image(path, image_id))
        except ImageLoadError as e:
            logger.error(str(e))
            report.failures.append((path, str(e)))

    logger.info(
        f"Loaded {report.loaded_count} images"
        + (f" ({len(report.failures)} failed)" if report.failures else "")
    )
    return report
