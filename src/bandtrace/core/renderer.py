"""Band-partitioned multi-threaded renderer.

This module drives the integrator across a full image:
- Rows are split into contiguous bands, one per worker thread
- Each worker owns an independent random stream and an exclusive view of
  the shared frame buffer, so no lock protects pixel writes
- Per-pixel samples are averaged, gamma corrected and written as bytes
- Progress callbacks report completed rows for UI updates

The frame buffer is a ``uint8`` array of shape (height, width, 3). Buffer
row 0 is the top of the image, which corresponds to image-space row
``height - 1`` (the camera's ``t = 1`` edge), so the buffer can be handed to
an image encoder as a top-down raster.

Output is reproducible for a fixed seed and a fixed thread count. Changing
the thread count changes how the random streams map onto pixels.

Example:
    >>> from bandtrace.core.renderer import Renderer, RenderSettings
    >>> from bandtrace.scene.manager import sample_scene
    >>>
    >>> description = sample_scene()
    >>> settings = RenderSettings(width=40, height=20, samples=4, threads=4, seed=1)
    >>> renderer = Renderer(
    ...     description.build_world(),
    ...     description.camera.build(settings.aspect),
    ...     settings,
    ... )
    >>> pixels = renderer.run()
    >>> pixels.shape
    (20, 40, 3)
"""

from __future__ import annotations

import logging
import os
import threading
import time
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from bandtrace.camera.thin_lens import Camera
from bandtrace.core.integrator import MAX_DEPTH, sample_pixel, to_rgb8
from bandtrace.errors import RenderError
from bandtrace.geometry.hittable import Hittable

logger = logging.getLogger(__name__)

# Each bounce adds one ray_color frame to the worker's stack
MAX_SUPPORTED_DEPTH = 500

# Type alias for progress callback
# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


# =============================================================================
# Render Settings
# =============================================================================


def _default_threads() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class RenderSettings:
    """Image and sampling parameters for a render run.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Anti-aliasing samples per pixel.
        max_depth: Maximum number of bounces per path.
        threads: Number of worker threads (one band of rows each).
        seed: Root seed for the worker random streams. None draws fresh
            entropy from the OS.

    Raises:
        ValueError: If any parameter is out of range.
    """

    width: int = 200
    height: int = 100
    samples: int = 100
    max_depth: int = MAX_DEPTH
    threads: int = field(default_factory=_default_threads)
    seed: int | None = None

    def __post_init__(self) -> None:
        for name in ("width", "height", "samples", "threads"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.max_depth, int) or self.max_depth < 0:
            raise ValueError(
                f"max_depth must be a non-negative integer, got {self.max_depth!r}"
            )
        if self.max_depth > MAX_SUPPORTED_DEPTH:
            raise ValueError(
                f"max_depth {self.max_depth} exceeds the supported maximum "
                f"({MAX_SUPPORTED_DEPTH})"
            )
        if self.seed is not None and (not isinstance(self.seed, int) or self.seed < 0):
            raise ValueError(f"seed must be a non-negative integer, got {self.seed!r}")

    @property
    def aspect(self) -> float:
        """Image width divided by height."""
        return self.width / self.height


# =============================================================================
# Band Partitioning
# =============================================================================


@dataclass(frozen=True)
class Band:
    """A contiguous run of buffer rows rendered by one worker.

    Attributes:
        index: Position of the band, 0 = topmost.
        start: First buffer row (inclusive, 0 = top of the image).
        stop: Last buffer row (exclusive).
    """

    index: int
    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start


def partition_rows(height: int, count: int) -> list[Band]:
    """Split ``height`` rows into ``count`` contiguous bands.

    When ``height`` is not divisible by ``count`` the first
    ``height % count`` bands get one extra row, so every row belongs to
    exactly one band. Bands may be empty when ``count > height``.

    Args:
        height: Number of image rows.
        count: Number of bands.

    Returns:
        The bands in top-to-bottom order.

    Raises:
        ValueError: If height is negative or count is not positive.
    """
    if height < 0:
        raise ValueError(f"height must be non-negative, got {height}")
    if count < 1:
        raise ValueError(f"count must be positive, got {count}")

    base, extra = divmod(height, count)
    bands = []
    start = 0
    for index in range(count):
        stop = start + base + (1 if index < extra else 0)
        bands.append(Band(index=index, start=start, stop=stop))
        start = stop
    return bands


# =============================================================================
# Renderer
# =============================================================================


class _RowCounter:
    """Thread-safe completed-row counter feeding the progress callback."""

    def __init__(self, total: int, callback: ProgressCallback | None) -> None:
        self._total = total
        self._callback = callback
        self._done = 0
        self._lock = threading.Lock()

    def advance(self) -> None:
        with self._lock:
            self._done += 1
            if self._callback is not None:
                self._callback(self._done, self._total)


class Renderer:
    """Renders a scene into an 8-bit RGB frame buffer with a pool of threads.

    The world and camera are shared read-only by every worker.

    Attributes:
        world: The scene to render.
        camera: The camera generating primary rays.
        settings: Image size, sampling and threading parameters.
    """

    def __init__(self, world: Hittable, camera: Camera, settings: RenderSettings) -> None:
        self.world = world
        self.camera = camera
        self.settings = settings

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.settings.height

    def allocate_buffer(self) -> npt.NDArray[np.uint8]:
        """Allocate a zeroed frame buffer of shape (height, width, 3)."""
        return np.zeros((self.height, self.width, 3), dtype=np.uint8)

    def run(
        self,
        out: npt.NDArray[np.uint8] | None = None,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.uint8]:
        """Render the full image.

        Spawns one worker per non-empty band, waits for all of them and
        returns the filled buffer. If any worker raises, the remaining
        workers stop at their next row and the error is re-raised; no
        partial image is returned.

        Args:
            out: Optional buffer of shape (height, width, 3) and dtype uint8
                to render into. A new zeroed buffer is allocated when None.
            callback: Optional callback called after every completed row.
                Receives (rows_completed, total_rows). It runs on worker
                threads.

        Returns:
            The frame buffer, row 0 at the top of the image.

        Raises:
            ValueError: If ``out`` has the wrong shape or dtype.
            RenderError: If a worker failed.
        """
        settings = self.settings
        if out is None:
            buffer = self.allocate_buffer()
        else:
            expected = (self.height, self.width, 3)
            if out.shape != expected or out.dtype != np.uint8:
                raise ValueError(
                    f"Output buffer must be uint8 with shape {expected}, "
                    f"got {out.dtype} with shape {out.shape}"
                )
            buffer = out

        bands = [band for band in partition_rows(self.height, settings.threads) if len(band)]
        streams = np.random.SeedSequence(settings.seed).spawn(len(bands))
        stop = threading.Event()
        counter = _RowCounter(self.height, callback)

        logger.info(
            "Rendering %dx%d, %d spp, max depth %d with %d threads",
            self.width,
            self.height,
            settings.samples,
            settings.max_depth,
            len(bands),
        )
        start_time = time.perf_counter()

        with ThreadPoolExecutor(
            max_workers=len(bands), thread_name_prefix="bandtrace-worker"
        ) as pool:
            futures = [
                pool.submit(
                    self._render_band,
                    band,
                    buffer[band.start : band.stop],
                    np.random.default_rng(stream),
                    stop,
                    counter,
                )
                for band, stream in zip(bands, streams)
            ]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            if any(future.exception() is not None for future in done):
                stop.set()

        for band, future in zip(bands, futures):
            error = future.exception()
            if error is not None:
                logger.error("Worker for band %d failed: %s", band.index, error)
                raise RenderError(
                    f"Render worker for rows {band.start}-{band.stop - 1} failed: {error}"
                ) from error

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        return buffer

    def _render_band(
        self,
        band: Band,
        view: npt.NDArray[np.uint8],
        rng: np.random.Generator,
        stop: threading.Event,
        counter: _RowCounter,
    ) -> None:
        """Render every pixel of one band into its exclusive buffer view."""
        settings = self.settings
        width = self.width
        height = self.height
        for local_row in range(len(band)):
            if stop.is_set():
                logger.debug("Band %d stopping early", band.index)
                return
            # Buffer rows run top-down, image rows bottom-up
            j = height - 1 - (band.start + local_row)
            for i in range(width):
                color = sample_pixel(
                    i,
                    j,
                    width,
                    height,
                    self.world,
                    self.camera,
                    settings.samples,
                    settings.max_depth,
                    rng,
                )
                view[local_row, i] = to_rgb8(color)
            counter.advance()
        logger.debug("Band %d (rows %d-%d) done", band.index, band.start, band.stop - 1)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples={self.settings.samples}, threads={self.settings.threads})"
        )
