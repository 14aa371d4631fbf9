"""Settlement reconciliation for verified processor events."""

import logging

from finepay.core.exceptions import UpstreamLookupError
from finepay.gateways.fine_backend import FineBackendClient
from finepay.schemas.events import SettlementEvent

logger = logging.getLogger(__name__)


class SettlementService:
    """Marks fines paid when the processor reports a completed checkout.

    Write failures are logged and swallowed: the processor's acknowledgment
    must not depend on the fine backend being reachable. Redelivered events
    reissue the same write; the backend treats it as idempotent.
    """

    def __init__(self, fine_backend: FineBackendClient):
        self.fine_backend = fine_backend

    async def handle_event(self, event: SettlementEvent) -> bool:
        """Apply ``event``.

        Returns:
            True if a fine-update write succeeded, False otherwise
        """
        if not event.is_checkout_completed:
            logger.debug(f"Ignoring event {event.id} of type {event.type}")
            return False

        fine_id = event.fine_id
        if fine_id is None:
            logger.warning(
                f"Completed checkout {event.session_id} (event {event.id}) has no fineId metadata"
            )
            return False

        try:
            await self.fine_backend.mark_fine_paid(fine_id)
        except UpstreamLookupError:
            logger.error(f"Failed to mark fine {fine_id} as paid (event {event.id})")
            return False
        except Exception:
            # The acknowledgment must not depend on the write
            logger.exception(f"Unexpected error marking fine {fine_id!r} as paid (event {event.id})")
            return False

        logger.info(f"Fine {fine_id} marked as paid (event {event.id})")
        return True
