from __future__ import annotations


class MalformedOrderError(ValueError):
    """
    Raised when an order cannot be decorated for the selected pair
    (zero base amount, or a leg outside the pair).
    """

    def __init__(self, order_id: str, reason: str) -> None:
        super().__init__(f"order {order_id}: {reason}")
        self.order_id = order_id
        self.reason = reason
