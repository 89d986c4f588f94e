from __future__ import annotations

from typing import Optional

import pytest

from adapters.external.memory.order_event_repository_memory import OrderEventRepositoryMemory
from adapters.external.memory.token_repository_memory import TokenRepositoryMemory
from core.domain.entities.raw_order_entity import RawOrderEntity
from core.domain.entities.token_entity import PairEntity, TokenEntity
from core.services.account_orders_service import AccountOrdersService
from core.services.derivation_cache import DerivationCache
from core.services.order_book_service import OrderBookService
from core.services.order_decorator_service import OrderDecoratorService
from core.services.price_chart_service import PriceChartService
from core.services.trade_tape_service import TradeTapeService
from core.usecases.market_views_use_case import MarketViewsUseCase

TOKEN_A = "0x" + "a" * 40
TOKEN_B = "0x" + "b" * 40
TOKEN_C = "0x" + "c" * 40

ALICE = "0x" + "1" * 40
BOB = "0x" + "2" * 40

WEI = 10**18
DAY = 24 * 60 * 60


def make_order(
    order_id,
    *,
    give: str,
    amount_give: float,
    get: str,
    amount_get: float,
    timestamp: int = 1000,
    maker: str = ALICE,
    taker: Optional[str] = None,
) -> RawOrderEntity:
    """Build a raw order with whole-token amounts (scaled to 18 decimals)."""
    return RawOrderEntity(
        id=order_id,
        maker=maker,
        taker=taker,
        token_give=give,
        amount_give=int(amount_give * WEI),
        token_get=get,
        amount_get=int(amount_get * WEI),
        timestamp=timestamp,
    )


def buy(order_id, *, base: float, quote: float, timestamp: int = 1000, **kwargs) -> RawOrderEntity:
    """Order giving the quote token B (a BUY); price = quote / base with the decoration rule."""
    return make_order(order_id, give=TOKEN_B, amount_give=base, get=TOKEN_A, amount_get=quote, timestamp=timestamp, **kwargs)


def sell(order_id, *, base: float, quote: float, timestamp: int = 1000, **kwargs) -> RawOrderEntity:
    """Order giving the base token A (a SELL); price = quote / base with the decoration rule."""
    return make_order(order_id, give=TOKEN_A, amount_give=quote, get=TOKEN_B, amount_get=base, timestamp=timestamp, **kwargs)


@pytest.fixture
def token_a() -> TokenEntity:
    return TokenEntity(address=TOKEN_A, symbol="DAPP", decimals=18)


@pytest.fixture
def token_b() -> TokenEntity:
    return TokenEntity(address=TOKEN_B, symbol="mETH", decimals=18)


@pytest.fixture
def pair(token_a, token_b) -> PairEntity:
    return PairEntity(base=token_a, quote=token_b)


@pytest.fixture
def incomplete_pair(token_a) -> PairEntity:
    return PairEntity(base=token_a, quote=None)


@pytest.fixture
def decorator() -> OrderDecoratorService:
    return OrderDecoratorService(default_decimals=18, price_precision=5, skipped_sample_size=2)


@pytest.fixture
def event_repo() -> OrderEventRepositoryMemory:
    return OrderEventRepositoryMemory()


@pytest.fixture
def token_repo(token_a, token_b) -> TokenRepositoryMemory:
    repo = TokenRepositoryMemory()
    repo.upsert(token_a)
    repo.upsert(token_b)
    return repo


@pytest.fixture
def market_views(event_repo, token_repo, decorator) -> MarketViewsUseCase:
    return MarketViewsUseCase(
        order_event_repository=event_repo,
        token_repository=token_repo,
        order_book_service=OrderBookService(decorator=decorator),
        trade_tape_service=TradeTapeService(decorator=decorator),
        price_chart_service=PriceChartService(decorator=decorator),
        account_orders_service=AccountOrdersService(decorator=decorator),
        cache=DerivationCache(max_entries=32),
    )
