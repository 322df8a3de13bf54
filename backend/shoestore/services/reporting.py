# shoestore/services/reporting.py
from __future__ import annotations

import logging
from collections import Counter
from decimal import Decimal
from typing import Any, Optional

from shoestore.config import settings
from shoestore.repositories import orders as order_repo
from shoestore.schemas.order import OrderStatistics, OrderStatus, StatusCount

logger = logging.getLogger("shoestore.reporting")


def _status_of(order: dict) -> Optional[OrderStatus]:
    raw: Any = order.get("status")
    if raw is None:
        return OrderStatus.PROCESSING
    if isinstance(raw, bool):
        return None
    try:
        return OrderStatus(int(raw))
    except (TypeError, ValueError):
        return None


def get_statistics(db) -> OrderStatistics:
    """
    total_orders: every order
    total_revenue: Σ total_amount of orders that are not Cancelled (0 when there are none)
    orders_by_status: [{status, count}] for the statuses that occur, ordered by status

    A missing status reads as Processing. Orders with an unknown status still count
    towards total_orders but are left out of revenue and the per-status buckets.
    """
    total_orders = 0
    revenue = Decimal("0")
    by_status: Counter = Counter()

    for order in order_repo.stream_all(db):
        total_orders += 1
        status = _status_of(order)
        if status is None:
            logger.warning("Order %s has unknown status %r", order.get("id"), order.get("status"))
            continue
        by_status[status] += 1
        if status != OrderStatus.CANCELLED:
            revenue += Decimal(str(order.get("total_amount", 0) or 0))

    return OrderStatistics(
        total_orders=total_orders,
        total_revenue=float(revenue),
        currency=settings.currency,
        orders_by_status=[StatusCount(status=s, count=n) for s, n in sorted(by_status.items())],
    )
