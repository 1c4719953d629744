"""Donation record derivation from completed gateway transactions.

Name and email are resolved through explicit, priority-ordered tiers. A tier
yields a value or `None`; the first tier with a value wins and the chain ends
with the empty string.
"""

from collections.abc import Callable

from givepay.services.donations.schemas import DonationDetails, Transaction


NameTier = Callable[[Transaction], str | None]


def _coalesce(*values: str | None) -> str | None:
    # Falls through on absence only, so an empty customer value is kept.
    for value in values:
        if value is not None:
            return value
    return None


def resolve_first_name(transaction: Transaction) -> str | None:
    paypal = transaction.paypal_account
    return _coalesce(transaction.customer.first_name, paypal.payer_first_name if paypal else None)


def resolve_last_name(transaction: Transaction) -> str | None:
    paypal = transaction.paypal_account
    return _coalesce(transaction.customer.last_name, paypal.payer_last_name if paypal else None)


def cardholder_tier(transaction: Transaction) -> str | None:
    """Cardholder name, when the card carries a non-empty one."""

    card = transaction.credit_card
    if card is not None and card.cardholder_name:
        return card.cardholder_name
    return None


def full_name_tier(transaction: Transaction) -> str | None:
    """`"{first} {last}"` only when both halves resolve to non-empty strings."""

    first_name = resolve_first_name(transaction)
    last_name = resolve_last_name(transaction)
    if first_name and last_name:
        return f"{first_name} {last_name}"
    return None


NAME_TIERS: list[tuple[str, NameTier]] = [
    ("cardholder", cardholder_tier),
    ("full_name", full_name_tier),
]


def resolve_donor_name(transaction: Transaction) -> str:
    for _, tier in NAME_TIERS:
        name = tier(transaction)
        if name:
            return name
    return ""


def resolve_donor_email(transaction: Transaction) -> str:
    paypal = transaction.paypal_account
    email = _coalesce(transaction.customer.email, paypal.payer_email if paypal else None)
    return email if email is not None else ""


def build_donation_record(transaction: Transaction) -> DonationDetails:
    """Derive the stored donation record from a settled transaction."""

    return DonationDetails(
        name=resolve_donor_name(transaction),
        email=resolve_donor_email(transaction),
        amount=float(transaction.amount),
        currency=transaction.currency_iso_code,
        created_at=transaction.created_at,
    )
