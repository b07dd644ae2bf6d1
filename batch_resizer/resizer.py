"""Batch orchestrator that drives one conversion per discovered image."""
import concurrent.futures
import os
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

import yaml

from .codec.base import get_codec
from .conversion.task import ConversionTask, validate_scale
from .conversion.unit import ConversionUnit
from .discovery.finder import DEFAULT_EXTENSIONS, find_images
from .output.destination import DestinationManager
from .utils.cancellation import CancellationToken
from .utils.errors import CancelledError
from .utils.logger import configure_level, get_logger

logger = get_logger(__name__)

SEQUENTIAL = "sequential"
CONCURRENT = "concurrent"
MODES = (SEQUENTIAL, CONCURRENT)


class BatchState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class BatchResult:
    """Outcome of a completed batch."""

    mode: str
    outputs: List[Path] = field(default_factory=list)
    elapsed: float = 0.0


class BatchResizer:
    """
    Resize every image in a directory tree into a flat output directory.

    Two strategies are available:
      - sequential: files are converted one at a time in discovery order;
        the first error or cancellation stops the batch immediately.
      - concurrent: each file is a task on a bounded worker pool, with
        rendering and output-handle opening split into parallel steps.
        All tasks settle before the first error is raised.
    """

    def __init__(self, config: dict = None, config_path: str = None, preset: str = None):
        """
        Initialize with config dict, YAML path, or preset name.

        Args:
            config: Direct config dictionary.
            config_path: Path to YAML config file.
            preset: Preset name ("low_memory", "throughput", "case_insensitive").
        """
        self.config = self._load_config(config, config_path, preset)
        configure_level(self.config.get("logging", {}).get("level", "INFO"))

        batch_cfg = self.config.get("batch", {})
        self.mode = batch_cfg.get("mode", CONCURRENT)
        if self.mode not in MODES:
            raise ValueError(f"Unknown batch mode: {self.mode}")
        self.max_workers = batch_cfg.get("max_workers") or os.cpu_count() or 4

        discovery_cfg = self.config.get("discovery", {})
        self.extensions = tuple(discovery_cfg.get("extensions", DEFAULT_EXTENSIONS))
        self.case_sensitive = discovery_cfg.get("case_sensitive", True)

        self.remove_partial = self.config.get("output", {}).get("remove_partial", True)

        self.codec = get_codec(self.config)
        self.destination = DestinationManager()
        self.state = BatchState.IDLE
        self._state_lock = threading.Lock()

    def _load_config(self, config, config_path, preset) -> dict:
        """Load and merge configuration."""
        default_path = Path(__file__).parent / "config" / "defaults.yaml"
        if default_path.exists():
            with open(default_path) as f:
                base_config = yaml.safe_load(f) or {}
        else:
            base_config = {}

        if preset:
            presets = base_config.get("presets", {})
            if preset not in presets:
                raise ValueError(f"Unknown preset: {preset}")
            base_config = self._deep_merge(base_config, presets[preset])

        if config_path:
            with open(config_path) as f:
                file_config = yaml.safe_load(f) or {}
            base_config = self._deep_merge(base_config, file_config)

        if config:
            base_config = self._deep_merge(base_config, config)

        return base_config

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dicts. Override takes precedence."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = BatchResizer._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def find_images(self, source_path) -> List[str]:
        return find_images(str(source_path), self.extensions, self.case_sensitive)

    def clean(self, dest_path) -> int:
        """Delete all previous output under dest_path. Irreversible."""
        return self.destination.clean(dest_path)

    def run(
        self,
        source_path,
        dest_path,
        scale: float,
        token: Optional[CancellationToken] = None,
        mode: Optional[str] = None,
    ) -> BatchResult:
        """
        Resize all images under source_path into dest_path.

        Args:
            source_path: Directory searched recursively for images.
            dest_path: Flat output directory, created if missing.
            scale: Positive factor applied to width and height.
            token: Cancellation token; a fresh one is used if omitted.
            mode: "sequential" or "concurrent"; defaults to batch.mode.

        Returns:
            BatchResult listing written files.

        Raises:
            NotFoundError, DecodeError, WriteError, CancelledError or
            InvalidScaleError for the first failure observed.
        """
        mode = mode or self.mode
        if mode not in MODES:
            raise ValueError(f"Unknown batch mode: {mode}")
        scale = validate_scale(scale)
        token = token or CancellationToken()

        self._set_state(BatchState.RUNNING)
        start = time.perf_counter()
        try:
            self.destination.ensure(dest_path)
            files = self.find_images(source_path)
            tasks = [ConversionTask.create(p, dest_path, scale) for p in files]
            unit = ConversionUnit(self.codec, self.destination, token, self.remove_partial)

            logger.info(f"Resizing {len(tasks)} images (mode={mode}, scale={scale})")
            if mode == SEQUENTIAL:
                outputs = self._run_sequential(unit, tasks)
            else:
                outputs = self._run_concurrent(unit, tasks)
        except CancelledError:
            self._set_state(BatchState.CANCELLED)
            logger.warning("Batch cancelled")
            raise
        except BaseException:
            self._set_state(BatchState.FAILED)
            raise

        self._set_state(BatchState.COMPLETED)
        elapsed = time.perf_counter() - start
        logger.info(f"Batch complete: {len(outputs)} files in {elapsed:.2f}s")
        return BatchResult(mode=mode, outputs=outputs, elapsed=elapsed)

    def submit(
        self,
        source_path,
        dest_path,
        scale: float,
        token: Optional[CancellationToken] = None,
        mode: Optional[str] = None,
    ) -> concurrent.futures.Future:
        """Start run() on a background thread and return its future."""
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="batch-resizer"
        )
        future = executor.submit(self.run, source_path, dest_path, scale, token, mode)
        executor.shutdown(wait=False)
        return future

    def _run_sequential(self, unit: ConversionUnit, tasks: List[ConversionTask]) -> List[Path]:
        outputs = []
        for index, task in enumerate(tasks, start=1):
            logger.info(f"[{index}/{len(tasks)}] {task.source.path}")
            outputs.append(unit.convert(task))
        return outputs

    def _run_concurrent(self, unit: ConversionUnit, tasks: List[ConversionTask]) -> List[Path]:
        if not tasks:
            return []

        workers = min(self.max_workers, len(tasks))
        outputs = []
        first_error = None

        # File workers block on step jobs, so steps get their own pool.
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=workers * 2, thread_name_prefix="resize-step"
        ) as step_pool, concurrent.futures.ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="resize-file"
        ) as file_pool:
            futures = {
                file_pool.submit(unit.convert_with, task, step_pool): task
                for task in tasks
            }
            for future in concurrent.futures.as_completed(futures):
                error = future.exception()
                if error is None:
                    outputs.append(future.result())
                    continue
                if not isinstance(error, CancelledError):
                    logger.error(f"Failed {futures[future].source.path}: {error}")
                if first_error is None:
                    first_error = error

        if first_error is not None:
            raise first_error
        return outputs

    def _set_state(self, state: BatchState) -> None:
        with self._state_lock:
            self.state = state
