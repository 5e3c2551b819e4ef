"""Wallpaper colours, thumbnail loading and caching, and rounded corners."""

from __future__ import annotations

import hashlib
import io
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence, Union

from PIL import Image, UnidentifiedImageError
from platformdirs import user_cache_dir

log = logging.getLogger(__name__)

RGB = tuple[float, float, float]

DISPLAY_THUMBNAIL_SIZE = (300, 169)
SELECTION_THUMBNAIL_SIZE = (158, 105)
SELECTION_CORNER_RADIUS = (8, 8, 8, 8)


@dataclass(frozen=True)
class Gradient:
    """A gradient between colours, drawn at an angle given by ``radius``."""

    colors: tuple[RGB, ...]
    radius: float


@dataclass(frozen=True)
class Color:
    """A wallpaper colour: either a single RGB value or a gradient."""

    value: Union[RGB, Gradient]

    @property
    def is_gradient(self) -> bool:
        return isinstance(self.value, Gradient)


DEFAULT_COLORS: tuple[Color, ...] = (
    Color((0.580, 0.922, 0.922)),
    Color((0.000, 0.286, 0.427)),
    Color((1.000, 0.678, 0.000)),
    Color((0.282, 0.725, 0.78)),
    Color((0.333, 0.278, 0.259)),
    Color((0.969, 0.878, 0.384)),
    Color((0.063, 0.165, 0.298)),
    Color((1.000, 0.843, 0.631)),
    Color((0.976, 0.227, 0.514)),
    Color((1.000, 0.612, 0.867)),
    Color((0.812, 0.490, 1.000)),
    Color((0.835, 0.549, 1.000)),
    Color((0.243, 0.533, 1.000)),
    Color((0.584, 0.769, 0.988)),
    Color(Gradient(((1.000, 0.678, 0.000), (0.282, 0.725, 0.78)), 270.0)),
    Color(Gradient(((1.000, 0.843, 0.631), (0.58, 0.922, 0.922)), 270.0)),
    Color(Gradient(((1.000, 0.612, 0.867), (0.976, 0.29, 0.514)), 270.0)),
    Color(Gradient(((0.584, 0.769, 0.988), (0.063, 0.165, 0.298)), 270.0)),
)


@dataclass
class ImageOperation:
    """A loaded image, and whether it is a cached thumbnail or still needs one.

    For images that need a thumbnail, ``thumbnail_path`` is where the
    generated thumbnail should be stored, if anywhere.
    """

    image: Image.Image
    cached: bool = False
    thumbnail_path: Optional[Path] = None


def cache_dir() -> Path:
    """Directory where wallpaper thumbnails are stored; created if missing."""
    cache = Path(user_cache_dir()) / "settingspages" / "wallpapers"
    try:
        cache.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
    return cache


def open_image(path: Union[str, os.PathLike]) -> Optional[Image.Image]:
    """Read and decode an image, or return None if that fails."""
    try:
        data = Path(path).read_bytes()
    except OSError as why:
        log.error("error reading image %s: %s", path, why)
        return None
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as why:
        log.error("image decode failed for %s: %s", path, why)
        return None
    return image


def _thumbnail_name(path: Path, created: float) -> str:
    digest = hashlib.sha256(f"{path}\0{created!r}".encode("utf-8", "surrogateescape"))
    return f"{digest.hexdigest()[:16]}.png"


def load_thumbnail(
    cache_dir: Optional[Union[str, os.PathLike]], path: Union[str, os.PathLike]
) -> Optional[ImageOperation]:
    """Load a cached thumbnail, or the image with what is needed to create one."""
    path = Path(path)
    if cache_dir is not None:
        try:
            stat = path.stat()
            created: Optional[float] = getattr(stat, "st_birthtime", stat.st_ctime)
        except OSError:
            created = None

        if created is not None:
            thumbnail_path = Path(cache_dir) / _thumbnail_name(path, created)
            if thumbnail_path.exists():
                image = open_image(thumbnail_path)
                if image is not None:
                    return ImageOperation(image, cached=True)
                try:
                    thumbnail_path.unlink()
                except OSError:
                    pass

            image = open_image(path)
            if image is None:
                return None
            return ImageOperation(image, thumbnail_path=thumbnail_path)

    image = open_image(path)
    return None if image is None else ImageOperation(image)


def _fit_within(image: Image.Image, width: int, height: int) -> Image.Image:
    ratio = min(width / image.width, height / image.height)
    size = (max(1, round(image.width * ratio)), max(1, round(image.height * ratio)))
    return image.resize(size, Image.Resampling.LANCZOS)


def _finish(
    path: Path, operation: ImageOperation
) -> tuple[Path, Image.Image, Image.Image]:
    if operation.cached:
        display = operation.image.convert("RGBA")
    else:
        display = _fit_within(operation.image.convert("RGBA"), *DISPLAY_THUMBNAIL_SIZE)
        if operation.thumbnail_path is not None:
            try:
                display.save(operation.thumbnail_path)
            except (OSError, ValueError) as why:
                log.error(
                    "failed to save image thumbnail %s: %s", operation.thumbnail_path, why
                )
                try:
                    operation.thumbnail_path.unlink()
                except OSError:
                    pass

    selection = display.resize(SELECTION_THUMBNAIL_SIZE, Image.Resampling.LANCZOS)
    round_corners(selection, SELECTION_CORNER_RADIUS)
    return path, display, selection


def load_each_from_path(
    path: Union[str, os.PathLike],
) -> Iterator[tuple[Path, Image.Image, Image.Image]]:
    """Yield (path, display thumbnail, selection thumbnail) for every image below path.

    Thumbnails are produced in parallel and yielded as they complete.
    """
    cache = cache_dir()
    with ThreadPoolExecutor() as pool:
        futures = []
        stack = [Path(path)]
        while stack:
            current = stack.pop()
            try:
                entries = list(os.scandir(current))
            except OSError:
                continue
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    is_file = entry.is_file(follow_symlinks=False)
                except OSError:
                    continue
                entry_path = Path(entry.path)
                if is_dir:
                    stack.append(entry_path)
                elif is_file:
                    operation = load_thumbnail(cache, entry_path)
                    if operation is not None:
                        futures.append(pool.submit(_finish, entry_path, operation))

        for future in as_completed(futures):
            yield future.result()


def round_corners(img: Image.Image, radius: Sequence[int]) -> None:
    """Round the corners of an RGBA image in place.

    ``radius`` gives top-left, top-right, bottom-right and bottom-left radii.
    """
    if img.mode != "RGBA":
        raise ValueError("image must be RGBA")
    width, height = img.size
    top_left, top_right, bottom_right, bottom_left = radius
    if (
        top_left + top_right > width
        or bottom_left + bottom_right > width
        or top_left + bottom_left > height
        or top_right + bottom_right > height
    ):
        raise ValueError("corner radii do not fit within the image")

    border_radius(img, top_left, lambda x, y: (x - 1, y - 1))
    border_radius(img, top_right, lambda x, y: (width - x, y - 1))
    border_radius(img, bottom_right, lambda x, y: (width - x, height - y))
    border_radius(img, bottom_left, lambda x, y: (x - 1, height - y))


def border_radius(
    img: Image.Image, r: int, coordinates: Callable[[int, int], tuple[int, int]]
) -> None:
    """Cut one anti-aliased corner of radius ``r`` into the image's alpha channel."""
    if r == 0:
        return
    pixels = img.load()
    r0 = r
    # 16x anti-aliasing: a 16x16 grid gives 256 possible shades.
    r = 16 * r

    def set_alpha(i: int, j: int, value: int) -> None:
        pos = coordinates(r0 - i, r0 - j)
        red, green, blue, _ = pixels[pos]
        pixels[pos] = (red, green, blue, value)

    def draw(alpha: int, i: int, j: int) -> None:
        pos = coordinates(r0 - i, r0 - j)
        red, green, blue, current = pixels[pos]
        pixels[pos] = (red, green, blue, (alpha * current + 128) // 256)

    x = 0
    y = r - 1
    p = 2 - r
    alpha = 0
    skip_draw = True
    done = False

    while not done:
        i = x // 16
        for j in range(y // 16 + 1, r0):
            set_alpha(i, j, 0)
        j = x // 16
        for i in range(y // 16 + 1, r0):
            set_alpha(i, j, 0)

        if not skip_draw:
            draw(alpha, x // 16 - 1, y // 16)
            draw(alpha, y // 16, x // 16 - 1)
            alpha = 0

        for _ in range(16):
            skip_draw = False
            if x >= y:
                done = True
                break
            alpha += y % 16 + 1
            if p < 0:
                x += 1
                p += 2 * x + 2
            else:
                if y % 16 == 0:
                    draw(alpha, x // 16, y // 16)
                    draw(alpha, y // 16, x // 16)
                    skip_draw = True
                    alpha = (x + 1) % 16 * 16
                x += 1
                p -= 2 * (y - x) + 2
                y -= 1

    if x // 16 == y // 16:
        if x == y:
            alpha += y % 16 + 1
        s = y % 16 + 1
        draw(2 * alpha - s * s, x // 16, y // 16)

    corner = range(y // 16 + 1, r0)
    for i in corner:
        for j in corner:
            set_alpha(i, j, 0)