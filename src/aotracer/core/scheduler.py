"""Multithreaded row scheduler that renders a scene into a framebuffer.

The image is split into one RowTask per scanline. All tasks are created up
front from the preallocated framebuffer, so their pixel views are disjoint by
construction. A fixed pool of threads then repeatedly:

    Idle -> TryDequeue -> Rendering(row) -> TryDequeue -> ... -> Done

Only the dequeue happens under the queue lock; tracing a row runs without
holding any lock. The scene is read-only during the render and each thread
owns its own random generator, so nothing else is shared. render() joins
every thread before returning the framebuffer.

Example:
    >>> from aotracer.core.config import RenderConfig
    >>> from aotracer.core.scheduler import RenderScheduler
    >>> from aotracer.scene.presets import create_default_scene
    >>> config = RenderConfig(width=160, height=120, ao_samples=4)
    >>> framebuffer = RenderScheduler(create_default_scene(), config).render()
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from aotracer.camera.pinhole import PinholeCamera
from aotracer.core.config import RenderConfig
from aotracer.core.framebuffer import CHANNELS, Framebuffer
from aotracer.core.tracer import get_color, to_display
from aotracer.scene.scene import Scene

logger = logging.getLogger(__name__)

# Callback receives (rows_done, rows_total); called from worker threads
ProgressCallback = Callable[[int, int], None]


class RenderError(RuntimeError):
    """Raised by render() when a worker thread failed."""


@dataclass
class RowTask:
    """One unit of parallel work: a scanline and the bytes it owns.

    Attributes:
        row: The image row index.
        pixels: Writable view of that row's width * 4 bytes.
    """

    row: int
    pixels: npt.NDArray[np.uint8]


def build_row_tasks(framebuffer: Framebuffer) -> deque[RowTask]:
    """Create one task per row, in top-to-bottom order."""
    return deque(RowTask(row, framebuffer.row_slice(row)) for row in range(framebuffer.height))


def render_row(
    task: RowTask,
    scene: Scene,
    camera: PinholeCamera,
    config: RenderConfig,
    rng: np.random.Generator,
) -> None:
    """Trace every pixel of one row and write RGBA8 values into its view."""
    pixels = task.pixels
    for column in range(camera.width):
        direction = camera.primary_direction(column, task.row)
        color = get_color(scene, camera.eye, direction, config.light_dir, rng, config=config)
        offset = column * CHANNELS
        pixels[offset : offset + CHANNELS] = to_display(color)


class RenderScheduler:
    """Renders a scene with a fixed pool of threads pulling row tasks.

    Attributes:
        scene: The immutable scene to render.
        config: Render settings (size, shading constants, worker count, seed).
        camera: The camera generating primary rays.
    """

    def __init__(
        self,
        scene: Scene,
        config: RenderConfig,
        camera: PinholeCamera | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.scene = scene
        self.config = config
        self.camera = camera if camera is not None else PinholeCamera.from_config(config)
        self._progress = progress
        self._lock = threading.Lock()
        self._tasks: deque[RowTask] = deque()
        self._rows_done = 0
        self._rows_total = 0
        self._errors: list[BaseException] = []

    def render(self) -> Framebuffer:
        """Render the full image, blocking until every worker has exited.

        Returns:
            The completed framebuffer.

        Raises:
            RenderError: If any worker raised; the first error is chained.
        """
        framebuffer = Framebuffer(self.camera.width, self.camera.height)
        self._tasks = build_row_tasks(framebuffer)
        self._rows_total = len(self._tasks)
        self._rows_done = 0
        self._errors = []

        worker_count = self.config.worker_count
        logger.info(
            "Rendering %dx%d with %d workers (%d primitives, %d AO samples)",
            framebuffer.width,
            framebuffer.height,
            worker_count,
            len(self.scene),
            self.config.ao_samples,
        )
        start_time = time.perf_counter()

        threads = [
            threading.Thread(target=self._worker, args=(index,), name=f"render-{index}")
            for index in range(worker_count)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        if self._errors:
            first = self._errors[0]
            raise RenderError(f"Render failed in a worker thread: {first}") from first

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        return framebuffer

    def _next_task(self) -> RowTask | None:
        with self._lock:
            if self._errors or not self._tasks:
                return None
            return self._tasks.popleft()

    def _row_generator(
        self,
        row: int,
        worker_rng: np.random.Generator | None,
    ) -> np.random.Generator:
        if worker_rng is not None:
            return worker_rng
        seed_sequence = np.random.SeedSequence(self.config.seed, spawn_key=(row,))
        return np.random.default_rng(seed_sequence)

    def _worker(self, index: int) -> None:
        # Entropy-seeded generator owned by this thread; unused with a fixed seed
        worker_rng = np.random.default_rng() if self.config.seed is None else None
        rows = 0
        try:
            while True:
                task = self._next_task()
                if task is None:
                    break
                rng = self._row_generator(task.row, worker_rng)
                render_row(task, self.scene, self.camera, self.config, rng)
                rows += 1
                self._report_row_done()
        except Exception as e:
            logger.exception("Worker %d failed", index)
            with self._lock:
                self._errors.append(e)
        logger.debug("Worker %d rendered %d rows", index, rows)

    def _report_row_done(self) -> None:
        with self._lock:
            self._rows_done += 1
            done = self._rows_done
        if self._progress is not None:
            self._progress(done, self._rows_total)


def render_scene(
    scene: Scene,
    config: RenderConfig | None = None,
    progress: ProgressCallback | None = None,
) -> Framebuffer:
    """Render a scene with a default camera; convenience wrapper."""
    if config is None:
        config = RenderConfig()
    return RenderScheduler(scene, config, progress=progress).render()
