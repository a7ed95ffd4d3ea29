"""Refresh policy applied after out-of-band bulk mutations."""

from __future__ import annotations

import logging

from contactsync.application.services.record_accumulator import RecordAccumulator
from contactsync.domain.models.core import MutationOutcome

LOGGER = logging.getLogger(__name__)


class MutationCompletionHandler:
    """Reset the accumulator when a bulk mutation changed at least one record.

    The client cannot tell where new or changed rows land in the server's
    ordering, so any success discards every loaded page and restarts from the
    first cursor under a new generation.  A total failure leaves the list
    alone.
    """

    def __init__(self, accumulator: RecordAccumulator) -> None:
        self._accumulator = accumulator

    def on_bulk_mutation_result(self, outcome: MutationOutcome) -> bool:
        """Apply the refresh policy; return ``True`` if a reset was issued."""
        if outcome.is_empty:
            LOGGER.warning("Ignoring bulk mutation outcome with no successes and no failures")
            return False
        if outcome.success_count == 0:
            LOGGER.info(
                "Bulk mutation changed nothing (%d failures); keeping %d loaded records",
                outcome.failure_count,
                len(self._accumulator.records),
            )
            return False
        if self._accumulator.signature is None:
            LOGGER.debug("Bulk mutation completed before any list was opened; nothing to refresh")
            return False

        generation = self._accumulator.reset(self._accumulator.signature)
        LOGGER.info(
            "Bulk mutation changed %d records (%d failed); restarted as generation %d",
            outcome.success_count,
            outcome.failure_count,
            generation,
        )
        return True
