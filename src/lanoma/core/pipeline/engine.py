from __future__ import annotations

"""
Core compilation pipeline.

Compiles a sequence of batches one after another. Each batch runs on its own
worker pool (see stages.dispatcher); a batch whose directory is unusable is
recorded as failed and the remaining batches still run.
"""

import logging
from typing import Iterable, List

from lanoma.core.pipeline.stages.dispatcher import compile_batch
from lanoma.domain.compilation_models import BatchOutcome, CompilationBatch
from lanoma.domain.errors import OrchestratorError

logger = logging.getLogger(__name__)


def run_compilation(batches: Iterable[CompilationBatch]) -> List[BatchOutcome]:
    """
    Execute every non-empty batch sequentially.

    Args:
        batches: Batches in the order they should be compiled and reported.

    Returns:
        List[BatchOutcome]: One outcome per non-empty batch, in input order.
    """
    logger.info("Compilation run started.")
    outcomes: List[BatchOutcome] = []

    for batch in batches:
        if batch.is_empty:
            logger.info(f"Nothing to compile in {batch.working_dir}. Skipping.")
            continue

        try:
            report = compile_batch(batch)
        except OrchestratorError as e:
            logger.error(f"Batch aborted: {e}")
            outcomes.append(BatchOutcome(working_dir=batch.working_dir, error=str(e)))
            continue

        outcomes.append(BatchOutcome(working_dir=batch.working_dir, report=report))

    failed = sum(1 for o in outcomes if not o.ok)
    logger.info(f"Compilation run completed: {len(outcomes)} batch(es), {failed} failed.")
    return outcomes
