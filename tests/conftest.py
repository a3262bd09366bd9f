import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import photo_combiner
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def image_factory(tmp_path: Path):
    """Factory writing solid-color images to disk."""
    def _create(
        name: str,
        size: tuple[int, int] = (200, 100),
        color="white",
        mode: str = "RGB",
        directory: Path | None = None,
    ) -> Path:
        folder = directory or tmp_path
        folder.mkdir(parents=True, exist_ok=True)
        img = Image.new(mode, size, color=color)
        path = folder / name
        img.save(path)
        return path
    return _create


@pytest.fixture
def sample_image(image_factory):
    """Create a simple test image."""
    return image_factory("sample.png")


@pytest.fixture
def photo_dir(tmp_path: Path, image_factory):
    """Directory with three photos of mixed aspect ratios."""
    folder = tmp_path / "photos"
    image_factory("a_square.png", (300, 300), "red", directory=folder)
    image_factory("b_wide.jpg", (600, 200), "green", directory=folder)
    image_factory("c_tall.png", (200, 400), "blue", directory=folder)
    return folder
