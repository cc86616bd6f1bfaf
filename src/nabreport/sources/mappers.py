"""Mapper functions to convert YNAB API payloads into domain entities.

This layer isolates the wire format, so the domain never sees milliunits,
sub-transactions or the API's optional fields.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from nabreport.domain import entities as domain
from nabreport.domain.errors import SourceError

MILLIUNITS = Decimal(1000)
MONTHLY_GOAL_CADENCE = 1


def milliunits_to_decimal(value: Optional[int]) -> Decimal:
    """Convert YNAB milliunits (1000 per currency unit) to a Decimal."""
    if value is None:
        return Decimal("0")
    return Decimal(value) / MILLIUNITS


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise SourceError(f"Invalid date '{value}' in API response: {e}")


def _required(payload: dict[str, Any], key: str) -> Any:
    try:
        return payload[key]
    except KeyError:
        raise SourceError(f"API response object is missing '{key}'")


def budget_to_domain(payload: dict[str, Any]) -> domain.BudgetSummary:
    """Convert a budget summary payload."""
    return domain.BudgetSummary(
        id=_required(payload, "id"),
        name=_required(payload, "name"),
    )


def goal_cadence(payload: dict[str, Any]) -> str:
    """Classify a category goal as ``monthly`` or ``annual``."""
    if (
        payload.get("goal_target") is not None
        and payload.get("goal_cadence") == MONTHLY_GOAL_CADENCE
    ):
        return "monthly"
    return "annual"


def category_to_domain(
    payload: dict[str, Any], group_id: Optional[str] = None
) -> domain.Category:
    """Convert a category payload.

    Deleted categories are kept as hidden so that old transactions still
    resolve to a known category.
    """
    return domain.Category(
        id=_required(payload, "id"),
        name=_required(payload, "name"),
        group_id=group_id or _required(payload, "category_group_id"),
        hidden=bool(payload.get("hidden")) or bool(payload.get("deleted")),
        budgeted=milliunits_to_decimal(payload.get("budgeted")),
        balance=milliunits_to_decimal(payload.get("balance")),
        goal_cadence=goal_cadence(payload),
    )


def category_group_to_domain(payload: dict[str, Any]) -> domain.CategoryGroup:
    """Convert a category group payload (without its categories)."""
    return domain.CategoryGroup(
        id=_required(payload, "id"),
        name=_required(payload, "name"),
        hidden=bool(payload.get("hidden")) or bool(payload.get("deleted")),
    )


def category_groups_to_domain(
    payloads: list[dict[str, Any]],
) -> tuple[list[domain.CategoryGroup], list[domain.Category]]:
    """Split nested category group payloads into groups and categories."""
    groups = []
    categories = []
    for payload in payloads:
        group = category_group_to_domain(payload)
        groups.append(group)
        for category_payload in payload.get("categories") or []:
            categories.append(category_to_domain(category_payload, group_id=group.id))
    return groups, categories


def transaction_to_domain(payload: dict[str, Any]) -> list[domain.Transaction]:
    """Expand a transaction payload into categorised domain transactions.

    A split transaction yields one entry per categorised sub-transaction; a
    sub-transaction without a payee inherits the parent's. Uncategorised
    lines and deleted records are dropped.
    """
    if payload.get("deleted"):
        return []

    txn_date = _parse_date(_required(payload, "date"))
    payee_name = payload.get("payee_name")
    subtransactions = payload.get("subtransactions") or []

    if subtransactions:
        return [
            domain.Transaction(
                date=txn_date,
                category_id=sub["category_id"],
                amount=milliunits_to_decimal(sub.get("amount")),
                payee_name=sub.get("payee_name") or payee_name,
            )
            for sub in subtransactions
            if sub.get("category_id") and not sub.get("deleted")
        ]

    category_id = payload.get("category_id")
    if not category_id:
        return []
    return [
        domain.Transaction(
            date=txn_date,
            category_id=category_id,
            amount=milliunits_to_decimal(payload.get("amount")),
            payee_name=payee_name,
        )
    ]


def transactions_to_domain(payloads: list[dict[str, Any]]) -> list[domain.Transaction]:
    """Convert and expand a list of transaction payloads."""
    transactions = []
    for payload in payloads:
        transactions.extend(transaction_to_domain(payload))
    return transactions
