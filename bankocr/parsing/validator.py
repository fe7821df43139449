"""Account number validation utilities."""

from typing import Optional

from bankocr.models import DIGITS_PER_ENTRY, EntryResult, EntryStatus, ILLEGIBLE_MARK

# Position weights, leftmost digit first: d9 ... d1
_CHECKSUM_WEIGHTS = list(range(DIGITS_PER_ENTRY, 0, -1))


def validate_checksum(account: Optional[str]) -> bool:
    """
    Validate a 9-digit account number using the modulo-11 checksum.

    With digits numbered d9..d1 from left to right, the weighted sum
    9*d9 + 8*d8 + ... + 1*d1 must be divisible by 11.
    """
    if not account or len(account) != DIGITS_PER_ENTRY or not account.isdigit():
        return False

    total = sum(int(d) * w for d, w in zip(account, _CHECKSUM_WEIGHTS))
    return total % 11 == 0


def classify_status(token: str) -> EntryStatus:
    """Status of a token before any repair: ILL, ERR or OK."""
    if ILLEGIBLE_MARK in token:
        return EntryStatus.ILL
    if not validate_checksum(token):
        return EntryStatus.ERR
    return EntryStatus.OK


def validate_entry_result(result: EntryResult) -> list[str]:
    """
    Validate a decoded entry and return a list of warnings.

    Also penalizes the entry confidence when the number is unusable.
    """
    warnings = []

    illegible = result.token.count(ILLEGIBLE_MARK)
    if illegible:
        warnings.append(
            f"{illegible} illegible digit{'s' if illegible > 1 else ''}"
        )
    elif not validate_checksum(result.token):
        warnings.append("Account number failed checksum validation")

    if result.status is EntryStatus.AMB:
        warnings.append(
            f"Ambiguous: {len(result.candidates)} candidates pass the checksum"
        )

    penalty = _compute_confidence_penalty(warnings)
    if penalty > 0:
        result.confidence *= 1.0 - penalty

    return warnings


def _compute_confidence_penalty(warnings: list[str]) -> float:
    penalty = 0.0

    for w in warnings:
        if "illegible" in w:
            penalty += 0.50
        elif "checksum" in w:
            penalty += 0.40
        elif "Ambiguous" in w:
            penalty += 0.30

    return min(penalty, 1.0)
