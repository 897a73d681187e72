from __future__ import annotations

"""
Parallel Compilation Dispatcher.

Runs every unit of a batch on a bounded thread pool and folds the per-unit
outcomes into one CompileReport. Each batch gets its own executor, so
batches compiled one after another never share worker threads.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional

from lanoma.core.pipeline.stages.worker import compile_unit_task
from lanoma.domain.compilation_models import (
    CompilationBatch,
    CompileReport,
    UnitResult,
    build_report,
)
from lanoma.domain.errors import BatchDirectoryError

logger = logging.getLogger(__name__)


def compile_batch(batch: CompilationBatch) -> CompileReport:
    """
    Compile all units of a batch concurrently.

    An empty batch returns an empty report without spawning anything.
    Unit failures are recorded in the report and never stop the others.

    Args:
        batch: Units, working directory, command template and pool size.

    Returns:
        CompileReport: Compiled and failed identifiers, in submission order.

    Raises:
        BatchDirectoryError: If the batch working directory does not exist,
            since no unit could be attempted.
    """
    if batch.is_empty:
        logger.debug(f"Empty batch for {batch.working_dir}; nothing to compile.")
        return CompileReport(working_dir=batch.working_dir)

    if not os.path.isdir(batch.working_dir):
        logger.error(f"Batch directory is not accessible: {batch.working_dir}")
        raise BatchDirectoryError(batch.working_dir)

    logger.info(
        f"Compiling {len(batch.units)} unit(s) in {batch.working_dir} "
        f"with {batch.pool_size} worker(s)."
    )

    # One slot per submitted unit; workers never share a slot
    results: List[Optional[UnitResult]] = [None] * len(batch.units)

    with ThreadPoolExecutor(max_workers=batch.pool_size, thread_name_prefix="CompileWorker") as executor:
        futures: Dict[Future, int] = {
            executor.submit(compile_unit_task, unit, batch.command, batch.working_dir): index
            for index, unit in enumerate(batch.units)
        }

        for future in as_completed(futures):
            index = futures[future]
            unit = batch.units[index]
            try:
                results[index] = future.result()
            except Exception as e:
                logger.exception(f"[{unit.identifier}] worker crashed: {e}")
                results[index] = UnitResult(identifier=unit.identifier, ok=False, error=str(e))

    report = build_report(batch.working_dir, (r for r in results if r is not None))
    logger.info(
        f"Batch finished in {batch.working_dir}: "
        f"{len(report.compiled)} compiled, {len(report.failed)} failed."
    )
    return report
