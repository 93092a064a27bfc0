"""Application commands (use cases) for cutting-list nesting."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from cabinet_wms.application.config.schema import NestingInput, NestingOptions
from cabinet_wms.domain import NestingEngine, NestingResult
from cabinet_wms.domain.services import parse_cutting_list

logger = logging.getLogger(__name__)


class ComputeNestingCommand:
    """Command to nest a cutting list on sheet stock."""

    def __init__(self, engine: NestingEngine | None = None) -> None:
        self.engine = engine or NestingEngine()

    def execute(self, request: NestingInput) -> list[NestingResult]:
        """Nest a validated cutting list.

        Args:
            request: Cutting list with optional sheet size and material filter.

        Returns:
            One NestingResult per material group.

        Raises:
            NestingError: If the engine cannot lay out a group.
        """
        results = self.engine.compute(
            request.to_domain(),
            sheet_size=request.sheet_size,
            material_type=request.material_type,
        )
        self._log_summary(results)
        return results

    def execute_stored(
        self,
        cutting_list: Sequence[Mapping[str, Any]],
        options: NestingOptions | None = None,
    ) -> list[NestingResult]:
        """Nest a cutting list read back from storage.

        Stored lists were saved without validation, so they are parsed here
        and any malformed entry fails the whole run.

        Raises:
            NestingError: If an entry is malformed or a group cannot be laid out.
        """
        options = options or NestingOptions()
        items = parse_cutting_list(cutting_list)
        results = self.engine.compute(
            items,
            sheet_size=options.sheet_size,
            material_type=options.material_type,
        )
        self._log_summary(results)
        return results

    def _log_summary(self, results: list[NestingResult]) -> None:
        logger.info(
            "Nested %d parts in %d material groups (%d sheets)",
            sum(result.part_count for result in results),
            len(results),
            sum(result.sheet_count for result in results),
        )
