import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import printgrid
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from printgrid.core.models import BoundingBox, Dimension  # noqa: E402
from printgrid.host import MemoryCanvasHost  # noqa: E402

PPI = 72.0


# Common test fixtures
@pytest.fixture
def host():
    """Fresh in-memory canvas host."""
    return MemoryCanvasHost()


@pytest.fixture
def source(host):
    """Source container holding the artwork to lay out."""
    return host.create_canvas(Dimension(100, 100), title="source").container


@pytest.fixture
def artwork_factory(host):
    """Factory to create artwork groups (body path + size placeholder)."""
    def _create(
        container,
        name: str,
        width: float = 10.0,
        height: float = 15.0,
        left: float = 0.0,
        top: float = 0.0,
        with_label: bool = True,
    ):
        group = host.add_group(container, name=name)
        host.add_path(
            group,
            BoundingBox.from_size(width * PPI, height * PPI, left=left, top=top),
            name="body",
        )
        if with_label:
            host.add_text(
                group,
                BoundingBox.from_size(36, 18, left=left + 10, top=top + 10),
                name="SIZE_TKN",
            )
        return group
    return _create


@pytest.fixture
def body_pair(source, artwork_factory):
    """FRONT and BACK artwork, 10x15 in, placed apart in the source."""
    front = artwork_factory(source, "FRONT")
    back = artwork_factory(source, "BACK", left=1000, top=200)
    return front, back


@pytest.fixture
def tile_factory(host, source):
    """Factory to create a plain tile group of a given size in inches."""
    def _create(width: float, height: float, name: str = "tile"):
        group = host.add_group(source, name=name)
        host.add_path(group, BoundingBox.from_size(width * PPI, height * PPI), name="piece")
        return group
    return _create


class FlakyGeometryHost(MemoryCanvasHost):
    """In-memory host that stops reporting geometry after some duplicates."""

    def __init__(self, fail_after_duplicates: int):
        super().__init__()
        self.fail_after_duplicates = fail_after_duplicates
        self.duplicates = 0

    def duplicate_shape(self, shape):
        self.duplicates += 1
        return super().duplicate_shape(shape)

    def bounding_box(self, shape):
        if self.duplicates >= self.fail_after_duplicates:
            raise RuntimeError("geometry unavailable")
        return super().bounding_box(shape)


@pytest.fixture
def flaky_host_factory():
    """Factory for hosts that fail geometry queries after N duplicates."""
    def _create(fail_after_duplicates: int):
        return FlakyGeometryHost(fail_after_duplicates)
    return _create


@pytest.fixture
def name_frame_factory(host):
    """Factory to add a NAME text frame (72x18 pt) to an artwork group."""
    def _create(group, left: float = 0.0, top: float = 0.0, text: str = "NAME"):
        return host.add_text(
            group, BoundingBox.from_size(72, 18, left=left + 20, top=top + 40), name="NAME", text=text
        )
    return _create
