"""Prometheus metrics for checkout."""

from prometheus_client import Counter

orders_total = Counter(
    "storefront_orders_total",
    "Orders committed to the order store",
)
checkouts_aborted = Counter(
    "storefront_checkouts_aborted_total",
    "Checkouts that ended without an order",
    ["reason"],
)
