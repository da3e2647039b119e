"""Order Pricing — authoritative line and total prices from catalog state.

Invariants:
    - Prices come from the catalog read at order time, never from the client
    - Each line's unit_price is a snapshot; later catalog changes never touch it
    - total_amount == sum(unit_price * quantity) over all lines, 2 decimal places
    - PURE: operates on already-fetched data, no IO

Design Decisions:
    - Decimal end-to-end: repeated read/write cycles never drift like floats
"""

from collections.abc import Sequence

from app.core.domain_types import (
    CatalogEntry, OrderLineRequest, PricedLine, PricedOrder, to_money,
)
from app.core.enforce_order import index_catalog


def price_order(
    lines: Sequence[OrderLineRequest], books: Sequence[CatalogEntry],
) -> PricedOrder:
    """Price validated lines. Raises KeyError if a line's book was not fetched."""
    catalog = index_catalog(books)
    priced = tuple(
        PricedLine(
            book_id=line.book_id,
            quantity=line.quantity,
            unit_price=to_money(catalog[line.book_id].price),
        )
        for line in lines
    )
    total = sum((p.line_total for p in priced), start=to_money(0))
    return PricedOrder(lines=priced, total_amount=to_money(total))
