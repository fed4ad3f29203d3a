"""
Withholding tax bookkeeping

Withheld tax is reported as a negative amount. A correction is reported
as a positive row cancelling an earlier negative one for the same date and
description, usually followed by a new negative row with the right amount.
"""

import logging
from datetime import date
from typing import Dict, Tuple

from ..currency import Cash
from .base import WithholdingTaxError

logger = logging.getLogger(__name__)

TaxId = Tuple[date, str]


class WithholdingTaxTracker:
    """
    Tracks withheld taxes across rows of the withholding tax table

    Pending entries are stored as positive magnitudes and removed when a
    cancelling entry with exactly the same amount shows up.
    """

    def __init__(self):
        self.pending: Dict[TaxId, Cash] = {}

    def add(self, tax_date: date, description: str, tax: Cash):
        tax_id = (tax_date, description)

        if tax.is_zero():
            raise WithholdingTaxError(f"Invalid withholding tax: {tax}")

        if tax.is_positive():
            cancelled_tax = self.pending.pop(tax_id, None)
            if cancelled_tax is None:
                raise WithholdingTaxError(
                    f"Got a cancellation of unknown withholding tax: {tax_date} / {description!r}: {tax}")
            if cancelled_tax != tax:
                raise WithholdingTaxError(
                    f"Withholding tax cancellation mismatch for {tax_date} / {description!r}: "
                    f"{tax} vs {cancelled_tax}")

            logger.debug(f"Withholding tax cancelled: {tax_date} / {description!r}: {tax}")
            return

        if tax_id in self.pending:
            raise WithholdingTaxError(
                f"Got a duplicate withholding tax: {tax_date} / {description!r}")

        self.pending[tax_id] = -tax

    def __len__(self) -> int:
        return len(self.pending)
