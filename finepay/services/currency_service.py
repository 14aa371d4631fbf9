"""Local-to-settlement currency conversion."""

import logging
from decimal import Decimal, InvalidOperation, Overflow

from finepay.core.exceptions import ConversionError
from finepay.domain.money import ConvertedAmount, convert_amount
from finepay.gateways.fastforex import FastForexClient

logger = logging.getLogger(__name__)


class RateConverter:
    """Converts a local amount into settlement-currency minor units.

    The rate is fetched fresh on every call; nothing is cached.
    """

    def __init__(
        self,
        rate_client: FastForexClient,
        source_currency: str = "LKR",
        target_currency: str = "USD",
    ):
        self.rate_client = rate_client
        self.source_currency = source_currency
        self.target_currency = target_currency

    async def convert(self, amount: Decimal) -> ConvertedAmount:
        """Convert ``amount`` from the source to the target currency.

        Raises:
            ConversionError: If no usable rate could be fetched or the
                converted amount cannot be represented
        """
        rate = await self.rate_client.fetch_rate(self.source_currency, self.target_currency)
        try:
            converted = convert_amount(amount, rate)
        except (InvalidOperation, Overflow) as e:
            logger.error(
                f"Cannot convert {amount} {self.source_currency} at {rate}: "
                f"result exceeds decimal precision"
            )
            raise ConversionError() from e
        logger.info(
            f"Converted {amount} {self.source_currency} at {rate} -> "
            f"{converted.settlement_amount} {self.target_currency} "
            f"({converted.minor_units} minor units)"
        )
        return converted
