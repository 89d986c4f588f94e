from __future__ import annotations

from typing import Iterable, Optional

from core.domain.entities.decorated_order_entity import AccountOrderEntity, ChangeSign
from core.domain.entities.market_view_entities import AccountOrdersEntity
from core.domain.entities.raw_order_entity import RawOrderEntity
from core.domain.entities.token_entity import PairEntity
from core.services.order_decorator_service import OrderDecoratorService
from core.services.pair_filter_service import PairFilterService


class AccountOrdersService:
    """
    Builds the selected account's views: its open orders and its filled orders.

    Filled orders are shown from the account's perspective: when the account was
    the taker the decorated side is inverted.
    """

    def __init__(self, *, decorator: OrderDecoratorService):
        self._decorator = decorator

    @staticmethod
    def _normalize(account: Optional[str]) -> Optional[str]:
        if account is None:
            return None
        return account.strip().lower() or None

    def build_open_orders(
        self,
        open_orders: Iterable[RawOrderEntity],
        pair: PairEntity,
        account: Optional[str],
    ) -> Optional[AccountOrdersEntity]:
        """
        Open orders made by the account, newest first.

        Returns:
            None while the pair is not ready; an empty view without an account.
        """
        if not pair.is_ready:
            return None
        account = self._normalize(account)
        if account is None:
            return AccountOrdersEntity()

        orders = [o for o in open_orders if o.maker == account]
        orders = PairFilterService.filter(orders, pair)
        decorated, skipped = self._decorator.decorate_many(orders, pair)

        mine = [o.extend(AccountOrderEntity) for o in decorated]
        mine.sort(key=lambda o: o.timestamp, reverse=True)
        return AccountOrdersEntity(orders=tuple(mine), skipped=skipped)

    def build_filled_orders(
        self,
        filled_orders: Iterable[RawOrderEntity],
        pair: PairEntity,
        account: Optional[str],
    ) -> Optional[AccountOrdersEntity]:
        """
        Filled orders where the account was maker or taker, newest first,
        with perspective-aware side and a "+"/"-" sign.
        """
        if not pair.is_ready:
            return None
        account = self._normalize(account)
        if account is None:
            return AccountOrdersEntity()

        orders = [o for o in filled_orders if o.maker == account or o.taker == account]
        orders = PairFilterService.filter(orders, pair)
        decorated, skipped = self._decorator.decorate_many(orders, pair)

        mine = []
        for order in decorated:
            side = order.side if order.maker == account else order.side.opposite
            mine.append(order.extend(AccountOrderEntity, side=side, sign=ChangeSign.for_side(side)))

        mine.sort(key=lambda o: o.timestamp, reverse=True)
        return AccountOrdersEntity(orders=tuple(mine), skipped=skipped)
