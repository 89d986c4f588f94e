from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from adapters.external.memory.order_event_repository_memory import OrderEventRepositoryMemory
from adapters.external.memory.token_repository_memory import TokenRepositoryMemory
from config.settings import Settings, settings as default_settings
from core.domain.entities.raw_order_entity import OrderEventKind
from core.domain.entities.token_entity import TokenEntity
from core.services.account_orders_service import AccountOrdersService
from core.services.derivation_cache import DerivationCache
from core.services.order_book_service import OrderBookService
from core.services.order_decorator_service import OrderDecoratorService
from core.services.price_chart_service import PriceChartService
from core.services.trade_tape_service import TradeTapeService
from core.usecases.ingest_order_events_use_case import IngestOrderEventsUseCase
from core.usecases.market_views_use_case import MarketViewsUseCase


class MarketSupervisor:
    """
    High-level supervisor for api-market-views.

    Responsibilities:
    - Build the in-memory record store and token registry.
    - Wire the derivation services and use cases from settings.
    - Bootstrap tokens and ledger records from .env / a JSON file when configured.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self._settings = config or default_settings
        self._logger = logging.getLogger(self.__class__.__name__)

        self._events: OrderEventRepositoryMemory | None = None
        self._tokens: TokenRepositoryMemory | None = None
        self._market_views: MarketViewsUseCase | None = None
        self._ingest: IngestOrderEventsUseCase | None = None

    @property
    def market_views(self) -> MarketViewsUseCase | None:
        return self._market_views

    @property
    def ingest(self) -> IngestOrderEventsUseCase | None:
        return self._ingest

    def start(self) -> None:
        """
        Initialize repositories, services and use cases, then bootstrap data.
        """
        cfg = self._settings
        self._events = OrderEventRepositoryMemory()
        self._tokens = TokenRepositoryMemory()

        decorator = OrderDecoratorService(
            default_decimals=cfg.DEFAULT_TOKEN_DECIMALS,
            price_precision=cfg.PRICE_PRECISION,
            skipped_sample_size=cfg.SKIPPED_SAMPLE_SIZE,
        )

        self._market_views = MarketViewsUseCase(
            order_event_repository=self._events,
            token_repository=self._tokens,
            order_book_service=OrderBookService(decorator=decorator, ask_sort_order=cfg.ASK_SORT_ORDER),
            trade_tape_service=TradeTapeService(decorator=decorator),
            price_chart_service=PriceChartService(decorator=decorator, interval=cfg.CANDLE_INTERVAL),
            account_orders_service=AccountOrdersService(decorator=decorator),
            cache=DerivationCache(max_entries=cfg.CACHE_MAX_ENTRIES),
        )
        self._ingest = IngestOrderEventsUseCase(order_event_repo=self._events, token_repo=self._tokens)

        for token in self._parse_bootstrap_tokens(cfg.BOOTSTRAP_TOKENS):
            self._ingest.upsert_token(token.model_dump())

        if cfg.BOOTSTRAP_RECORDS_PATH:
            self._bootstrap_records(Path(cfg.BOOTSTRAP_RECORDS_PATH))

        self._logger.info(
            "Market views ready. tokens=%s records=%s ask_sort=%s candle_interval=%s",
            len(self._tokens.list_all()),
            self._events.count_all(),
            cfg.ASK_SORT_ORDER,
            cfg.CANDLE_INTERVAL,
        )

    def stop(self) -> None:
        """
        Drop in-memory state.
        """
        self._market_views = None
        self._ingest = None
        self._events = None
        self._tokens = None

    def _parse_bootstrap_tokens(self, raw: str) -> List[TokenEntity]:
        """
        Parse "SYMBOL:address[:decimals],..." into token descriptors.
        """
        tokens: List[TokenEntity] = []
        for item in (raw or "").split(","):
            item = item.strip()
            if not item:
                continue
            parts = [p.strip() for p in item.split(":")]
            if len(parts) not in (2, 3):
                self._logger.error("Invalid BOOTSTRAP_TOKENS entry %r (expected SYMBOL:address[:decimals])", item)
                continue
            try:
                decimals = int(parts[2]) if len(parts) == 3 else self._settings.DEFAULT_TOKEN_DECIMALS
                tokens.append(TokenEntity(symbol=parts[0], address=parts[1], decimals=decimals))
            except ValueError as exc:
                # pydantic ValidationError is a ValueError too
                self._logger.error("Invalid BOOTSTRAP_TOKENS entry %r: %s", item, exc)
        return tokens

    def _bootstrap_records(self, path: Path) -> None:
        """
        Load {"tokens": [...], "created": [...], "filled": [...], "cancelled": [...]} from JSON.

        Logs are loaded Created first so that short Filled/Cancelled events resolve.
        """
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self._logger.exception("Failed to read bootstrap records from %s: %s", path, exc)
            return

        for token in doc.get("tokens") or []:
            self._ingest.upsert_token(token)

        for kind in (OrderEventKind.CREATED, OrderEventKind.FILLED, OrderEventKind.CANCELLED):
            added = 0
            for payload in doc.get(kind.value) or []:
                try:
                    if self._ingest.record(kind, payload) is not None:
                        added += 1
                except ValueError as exc:
                    self._logger.warning("Skipping bootstrap %s record: %s", kind.value, exc)
            self._logger.info("Bootstrapped %s %s records from %s", added, kind.value, path)
