"""YNAB API budget source implementation."""

from datetime import date
from typing import Any, Optional

import requests

from nabreport.domain.entities import BudgetSummary, Category, CategoryGroup, Transaction
from nabreport.domain.errors import SourceError
from nabreport.logging_setup import get_logger
from nabreport.sources import mappers
from nabreport.sources.base import BudgetSource

logger = get_logger(__name__)

BASE_URL = "https://api.ynab.com/v1"
DEFAULT_TIMEOUT = 30


class YnabClient(BudgetSource):
    """Blocking YNAB API client using a single requests session."""

    def __init__(
        self,
        token: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize YNAB client.

        Args:
            token: Personal access token
            base_url: API root URL
            timeout: Request timeout in seconds
            session: Optional preconfigured session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Bearer {token}"

    def get_json(self, path: str, params: Optional[dict[str, str]] = None) -> dict[str, Any]:
        """GET ``path`` and return the ``data`` object of the response."""
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise SourceError(f"GET {url} failed: {e}") from e

        if not resp.ok:
            raise SourceError(
                f"YNAB API returned {resp.status_code} for {url}: {resp.text}"
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise SourceError(f"Could not parse response from {url}: {e}") from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise SourceError(f"Response from {url} has no 'data' object")
        return data

    def list_budgets(self) -> list[BudgetSummary]:
        data = self.get_json("/budgets")
        return [mappers.budget_to_domain(item) for item in data.get("budgets", [])]

    def get_category_groups(
        self, budget_id: str
    ) -> tuple[list[CategoryGroup], list[Category]]:
        data = self.get_json(f"/budgets/{budget_id}/categories")
        return mappers.category_groups_to_domain(data.get("category_groups", []))

    def get_month_category(
        self, budget_id: str, month: date, category_id: str
    ) -> Category:
        month_str = month.replace(day=1).isoformat()
        data = self.get_json(
            f"/budgets/{budget_id}/months/{month_str}/categories/{category_id}"
        )
        if "category" not in data:
            raise SourceError(f"No category in response for category {category_id}")
        return mappers.category_to_domain(data["category"])

    def get_transactions(self, budget_id: str, since_date: date) -> list[Transaction]:
        data = self.get_json(
            f"/budgets/{budget_id}/transactions",
            params={"since_date": since_date.isoformat()},
        )
        return mappers.transactions_to_domain(data.get("transactions", []))
