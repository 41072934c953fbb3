"""Companies, share holdings and the order book of the stock market."""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional

PLAYER_SHARE_KEY_RANGE = range(1, 1000)

ORDER_INTERVAL = 5.0
_ORDER_COUNTS = ((1, 10), (10, 20))
_ORDER_COUNT_WEIGHTS = (1, 1)


@dataclass
class CompanyShare:
    quantity: int = 0
    owner: int = 0


@dataclass
class Company:
    """A listed company, its shareholders by share key and its cash balance."""

    company_ticker: str = ""
    company_shares: dict[int, CompanyShare] = field(default_factory=dict)
    available_shares: int = 0
    name: str = ""
    balance: int = 0


@dataclass
class SharePortfolio:
    share_key: int = 0

    @classmethod
    def new_player_portfolio(cls, rng: Optional[random.Random] = None) -> "SharePortfolio":
        """A portfolio with a random key from the player key range."""
        r = rng or random
        return cls(r.randrange(PLAYER_SHARE_KEY_RANGE.start, PLAYER_SHARE_KEY_RANGE.stop))


@dataclass
class SharePortfolioCache:
    """Copies of a portfolio's holdings, by company ticker."""

    company_shares: dict[str, CompanyShare] = field(default_factory=dict)


def update_share_cache(
    changed_companies: Iterable[Company],
    portfolios: Iterable[tuple[SharePortfolio, SharePortfolioCache]],
) -> None:
    """Copy the holdings of changed companies into the caches of their owners."""
    caches = {portfolio.share_key: cache for portfolio, cache in portfolios}
    for company in changed_companies:
        for key, share in company.company_shares.items():
            cache = caches.get(key)
            if cache is not None:
                cache.company_shares[company.company_ticker] = replace(share)


@dataclass(frozen=True)
class _CompanyTemplate:
    name: str
    ticker: str
    shares: int
    money: int


_COMPANY_TEMPLATES = (
    _CompanyTemplate("Atlassian", "TEAM", 259717000, 2330000000),
    _CompanyTemplate("Microsoft", "MSFT", 7433000000, 112150000000),
    _CompanyTemplate("Google", "GOOGL", 12343000000, 149560000000),
)


def initialize_companies(existing_companies: Iterable[Company]) -> list[Company]:
    """Create the standard companies whose tickers are not yet present."""
    existing = {company.company_ticker for company in existing_companies}
    return [
        Company(
            company_ticker=template.ticker,
            available_shares=template.shares,
            name=template.name,
            balance=template.money,
        )
        for template in _COMPANY_TEMPLATES
        if template.ticker not in existing
    ]


@dataclass(frozen=True)
class Order:
    ticker: str
    quantity: int
    price: int


class OrderSide(Enum):
    BUY = "Buy"
    SELL = "Sell"


@dataclass(frozen=True)
class BuySellOrder:
    side: OrderSide
    order: Order


@dataclass
class OrderBook:
    orders: list[BuySellOrder] = field(default_factory=list)


@dataclass
class OrderGenerator:
    """Every few seconds, decides how many orders to generate."""

    interval: float = ORDER_INTERVAL
    elapsed: float = 0.0

    def tick(self, delta: float, rng: Optional[random.Random] = None) -> Optional[int]:
        """Advance by ``delta`` seconds; return an order count when the timer fires."""
        self.elapsed += delta
        if self.elapsed < self.interval:
            return None
        self.elapsed %= self.interval
        r = rng or random
        low, high = r.choices(_ORDER_COUNTS, weights=_ORDER_COUNT_WEIGHTS)[0]
        return r.randint(low, high)