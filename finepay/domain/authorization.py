"""Fine ownership check."""

import logging

from finepay.core.exceptions import AuthorizationError
from finepay.schemas.fine import FineReference

logger = logging.getLogger(__name__)


def is_fine_owner(civil_nic: str, fine: FineReference) -> bool:
    return fine.civil_nic == civil_nic


def assert_fine_owner(civil_nic: str, fine: FineReference, fine_id: str) -> None:
    """Raise ``AuthorizationError`` unless ``civil_nic`` owns the fine.

    Exact string comparison, no normalisation.
    """
    if not is_fine_owner(civil_nic, fine):
        logger.warning(f"Owner mismatch for fine {fine_id}: payment request rejected")
        raise AuthorizationError()
