# src/sanitizer/controllers/batch_controller.py
from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field
from tqdm.auto import tqdm

from sanitizer.controllers.sanitize_controller import sanitize
from sanitizer.exceptions import SanitizerError
from sanitizer.model import Configuration, RunOptions

logger = logging.getLogger(__name__)


class BatchResult(BaseModel):
    outputs: Dict[str, str] = Field(default_factory=dict)
    errors: Dict[str, str] = Field(default_factory=dict)
    duration_s: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.errors


def sanitize_worker(
        name: str,
        html: Union[str, bytes],
        config: Configuration,
        options: Dict[str, Any],
) -> Tuple[str, Optional[str], Optional[str]]:
    """
    Worker function sanitizing one document.
    Returns (name, output, error) so failures travel back as plain strings.
    """
    try:
        return name, sanitize(html, config, options), None
    except SanitizerError as e:
        logger.error("WORKER ERROR sanitizing %s: %s", name, e)
        return name, None, f"{type(e).__name__}: {e}"


class BatchSanitizeController:
    """
    Sanitizes many documents with the same rule set.
    Each document gets its own pipeline run; with more than one worker the
    runs are spread over a process pool.
    """

    def __init__(self, *, default_workers: Optional[int] = None) -> None:
        self.default_workers = default_workers or (os.cpu_count() or 4)

    def sanitize_documents(
            self,
            documents: Mapping[str, Union[str, bytes]],
            config: Configuration,
            options: Optional[RunOptions] = None,
            workers: Optional[int] = None,
            show_progress: bool = False,
    ) -> BatchResult:
        started = time.perf_counter()
        workers = workers or self.default_workers
        opts = (options or RunOptions()).model_dump()
        result = BatchResult()

        if workers <= 1 or len(documents) <= 1:
            items = documents.items()
            iterator = tqdm(items, desc="Sanitizing", unit="doc", leave=False) if show_progress else items
            for name, html in iterator:
                self._collect(result, sanitize_worker(name, html, config, opts))
        else:
            with ProcessPoolExecutor(max_workers=workers) as pool:
                futures = [
                    pool.submit(sanitize_worker, name, html, config, opts)
                    for name, html in documents.items()
                ]
                done = as_completed(futures)
                if show_progress:
                    done = tqdm(done, total=len(futures), desc="Sanitizing", unit="doc", leave=False)
                for future in done:
                    self._collect(result, future.result())

        result.duration_s = round(time.perf_counter() - started, 3)
        logger.info(
            "Sanitized %d/%d document(s) in %ss.",
            len(result.outputs), len(documents), result.duration_s,
        )
        return result

    @staticmethod
    def _collect(result: BatchResult, item: Tuple[str, Optional[str], Optional[str]]) -> None:
        name, output, error = item
        if error is not None:
            result.errors[name] = error
        else:
            result.outputs[name] = output
