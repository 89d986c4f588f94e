# core/usecases/market_views_use_case.py
from __future__ import annotations

import logging
from typing import Optional, Tuple

from core.domain.entities.market_state_entity import MarketStateEntity
from core.domain.entities.market_view_entities import (
    AccountOrdersEntity,
    OrderBookEntity,
    PriceChartEntity,
    TradeTapeEntity,
)
from core.domain.entities.raw_order_entity import RawOrderEntity
from core.domain.entities.token_entity import PairEntity
from core.repositories.order_event_repository import OrderEventRepository
from core.repositories.token_repository import TokenRepository
from core.services.account_orders_service import AccountOrdersService
from core.services.derivation_cache import DerivationCache
from core.services.open_order_service import OpenOrderService
from core.services.order_book_service import OrderBookService
from core.services.price_chart_service import PriceChartService
from core.services.trade_tape_service import TradeTapeService


class MarketViewsUseCase:
    """
    Derives the market views exposed to rendering clients.

    Every view is a pure function of a MarketStateEntity (records snapshot +
    pair + account). Results are memoized in a DerivationCache keyed by the
    view, the pair key and the account, and bound to the records snapshot and its
    generation counters, so repeated calls on an unchanged snapshot return the same object.

    Views return None while the pair is not ready (a token is still unknown).
    """

    def __init__(
        self,
        *,
        order_event_repository: OrderEventRepository,
        order_book_service: OrderBookService,
        trade_tape_service: TradeTapeService,
        price_chart_service: PriceChartService,
        account_orders_service: AccountOrdersService,
        token_repository: Optional[TokenRepository] = None,
        cache: Optional[DerivationCache] = None,
        logger: logging.Logger | None = None,
    ):
        self._events = order_event_repository
        self._tokens = token_repository
        self._order_book = order_book_service
        self._trade_tape = trade_tape_service
        self._price_chart = price_chart_service
        self._account_orders = account_orders_service
        self._cache = cache or DerivationCache()
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    # --- State -----------------------------------------------------------------

    def resolve_pair(self, base_address: Optional[str], quote_address: Optional[str]) -> PairEntity:
        """
        Build the selected pair from token addresses.

        Unknown addresses leave the leg empty so the pair is reported as not ready.
        """
        if self._tokens is None:
            return PairEntity()
        base = self._tokens.get_by_address(base_address) if base_address else None
        quote = self._tokens.get_by_address(quote_address) if quote_address else None
        if not (base and quote):
            self._logger.debug("Pair not ready base=%s quote=%s", base_address, quote_address)
        return PairEntity(base=base, quote=quote)

    def state(self, pair: PairEntity, account: Optional[str] = None) -> MarketStateEntity:
        return MarketStateEntity(records=self._events.snapshot(), pair=pair, account=account)

    # --- Derivations over an explicit state --------------------------------------

    def open_orders(self, state: MarketStateEntity) -> Tuple[RawOrderEntity, ...]:
        records = state.records
        return self._cache.get_or_compute(
            ("open_orders",),
            records.generations,
            lambda: tuple(OpenOrderService.resolve(records.created, records.filled, records.cancelled)),
            source=records,
        )

    def order_book(self, state: MarketStateEntity) -> Optional[OrderBookEntity]:
        return self._cache.get_or_compute(
            ("order_book", state.pair.key),
            state.records.generations,
            lambda: self._order_book.build(self.open_orders(state), state.pair),
            source=state.records,
        )

    def trade_tape(self, state: MarketStateEntity) -> Optional[TradeTapeEntity]:
        return self._cache.get_or_compute(
            ("trade_tape", state.pair.key),
            state.records.generations,
            lambda: self._trade_tape.build(state.records.filled, state.pair),
            source=state.records,
        )

    def price_chart(self, state: MarketStateEntity) -> Optional[PriceChartEntity]:
        return self._cache.get_or_compute(
            ("price_chart", state.pair.key, self._price_chart.interval),
            state.records.generations,
            lambda: self._price_chart.build(state.records.filled, state.pair),
            source=state.records,
        )

    def my_open_orders(self, state: MarketStateEntity) -> Optional[AccountOrdersEntity]:
        return self._cache.get_or_compute(
            ("my_open_orders", state.pair.key, state.account),
            state.records.generations,
            lambda: self._account_orders.build_open_orders(self.open_orders(state), state.pair, state.account),
            source=state.records,
        )

    def my_filled_orders(self, state: MarketStateEntity) -> Optional[AccountOrdersEntity]:
        return self._cache.get_or_compute(
            ("my_filled_orders", state.pair.key, state.account),
            state.records.generations,
            lambda: self._account_orders.build_filled_orders(state.records.filled, state.pair, state.account),
            source=state.records,
        )

    # --- Current-snapshot entry points -------------------------------------------

    def get_open_orders(self) -> Tuple[RawOrderEntity, ...]:
        return self.open_orders(self.state(PairEntity()))

    def get_open_order_book(self, pair: PairEntity) -> Optional[OrderBookEntity]:
        return self.order_book(self.state(pair))

    def get_trade_tape(self, pair: PairEntity) -> Optional[TradeTapeEntity]:
        return self.trade_tape(self.state(pair))

    def get_price_chart(self, pair: PairEntity) -> Optional[PriceChartEntity]:
        return self.price_chart(self.state(pair))

    def get_my_open_orders(self, pair: PairEntity, account: Optional[str]) -> Optional[AccountOrdersEntity]:
        return self.my_open_orders(self.state(pair, account))

    def get_my_filled_orders(self, pair: PairEntity, account: Optional[str]) -> Optional[AccountOrdersEntity]:
        return self.my_filled_orders(self.state(pair, account))
