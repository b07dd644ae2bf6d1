"""Transformation of one source image into one resized JPEG."""
import concurrent.futures
from concurrent.futures import Executor
from pathlib import Path
from typing import BinaryIO

from .task import ConversionTask, target_size
from ..codec.base import ImageCodec
from ..output.destination import DestinationManager
from ..utils.cancellation import CancellationToken
from ..utils.errors import InvalidScaleError, WriteError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ConversionUnit:
    """
    Decode, resize, encode and write a single file.

    Cancellation is checked before decode, before resize, and after the
    write. Nothing is caught or retried here; every error reaches the
    orchestrator.
    """

    def __init__(
        self,
        codec: ImageCodec,
        destination: DestinationManager,
        token: CancellationToken,
        remove_partial: bool = True,
    ):
        self.codec = codec
        self.destination = destination
        self.token = token
        self.remove_partial = remove_partial

    def render(self, task: ConversionTask) -> bytes:
        """Produce the encoded output bytes for a task."""
        self.token.throw_if_cancelled()
        try:
            raster = self.codec.decode(task.source.read_bytes())
        finally:
            task.source.release()

        width, height = target_size(raster.width, raster.height, task.scale)
        if width < 1 or height < 1:
            raise InvalidScaleError(
                f"Scale {task.scale} reduces {raster.width}x{raster.height} "
                f"to {width}x{height}: {task.source.path}"
            )

        self.token.throw_if_cancelled()
        resized = self.codec.resize(raster, width, height)
        logger.debug(
            f"Resized {task.source.base_name}: "
            f"{raster.width}x{raster.height} -> {width}x{height}"
        )
        return self.codec.encode(resized)

    def write(self, task: ConversionTask, data: bytes, handle: BinaryIO) -> Path:
        """Write encoded bytes through a staging handle and move them into place."""
        path = task.output_path
        part = handle.name
        try:
            with handle:
                handle.write(data)
        except OSError as exc:
            if self.remove_partial:
                self.destination.discard(part)
            raise WriteError(f"Cannot write {path}: {exc}") from exc

        try:
            return self.destination.commit(part, path)
        except WriteError:
            if self.remove_partial:
                self.destination.discard(part)
            raise

    def convert(self, task: ConversionTask) -> Path:
        """Run every step of one conversion on the calling thread."""
        data = self.render(task)
        handle = self.destination.open_output(task.output_path)
        path = self.write(task, data, handle)
        self.token.throw_if_cancelled()
        logger.info(f"Converted {task.source.path} -> {path}")
        return path

    def convert_with(self, task: ConversionTask, executor: Executor) -> Path:
        """
        Run one conversion with its steps split across an executor.

        Rendering and opening the output handle are submitted as two
        independent jobs; the write starts only once both have finished.
        """
        path = task.output_path
        render_future = executor.submit(self.render, task)
        open_future = executor.submit(self.destination.open_output, path)
        concurrent.futures.wait([render_future, open_future])

        open_error = open_future.exception()
        if open_error is not None:
            raise open_error
        handle = open_future.result()

        try:
            data = render_future.result()
        except BaseException:
            handle.close()
            if self.remove_partial:
                self.destination.discard(handle.name)
            raise

        self.write(task, data, handle)
        self.token.throw_if_cancelled()
        logger.info(f"Converted {task.source.path} -> {path}")
        return path
