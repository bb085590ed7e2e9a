"""
Selector Panel - Selection panel seats of a division

A division has at most MAX_SELECTORS seats and at most one chair. Every
function returns a new snapshot in which the chair invariant holds; chairs
are cleared before a new chair is written, never after.
"""

from config import settings
from exceptions import (
    ChairInvariantException,
    ResourceNotFoundException,
    ValidationException,
)
from logging_config import logger
from models.rosters import Roster, Selector
from utils import EntityRef, resolve_index


def count_chairs(selectors: list[Selector]) -> int:
    return sum(1 for s in selectors if s.isChair)


def assert_single_chair(roster: Roster) -> None:
    """Raise ChairInvariantException unless exactly one seat is the chair"""
    chairs = count_chairs(roster.selectors)
    if chairs != 1:
        logger.bind(ageGroup=roster.ageGroup, season=roster.season, chairs=chairs).error(
            "Chair invariant violated"
        )
        raise ChairInvariantException(
            chair_count=chairs, details={"ageGroup": roster.ageGroup, "season": roster.season}
        )


def validate_panel(roster: Roster) -> None:
    """Check capacity and chair count of a complete panel"""
    if len(roster.selectors) > settings.MAX_SELECTORS:
        raise ValidationException(
            field="selectors",
            message=f"Maximum {settings.MAX_SELECTORS} selectors allowed per age group",
            details={"ageGroup": roster.ageGroup, "count": len(roster.selectors)},
        )
    if count_chairs(roster.selectors) > 1:
        raise ValidationException(
            field="selectors",
            message="Only one selector can be chair",
            details={"ageGroup": roster.ageGroup, "chairs": count_chairs(roster.selectors)},
        )


def _require_seat(roster: Roster, ref: EntityRef) -> int:
    idx = resolve_index(roster.selectors, ref)
    if idx is None:
        raise ResourceNotFoundException(
            resource_type="Selector",
            resource_id=str(ref),
            details={"ageGroup": roster.ageGroup, "season": roster.season},
        )
    return idx


def add_selector(roster: Roster, selector: Selector) -> Roster:
    if len(roster.selectors) >= settings.MAX_SELECTORS:
        raise ValidationException(
            field="selectors",
            message=f"Maximum {settings.MAX_SELECTORS} selectors allowed per age group",
            details={"ageGroup": roster.ageGroup, "count": len(roster.selectors)},
        )
    updated = roster.model_copy(deep=True)
    if selector.isChair:
        for seat in updated.selectors:
            seat.isChair = False
    updated.selectors.append(selector.model_copy(deep=True))
    return updated


def update_selector(roster: Roster, ref: EntityRef, selector: Selector) -> Roster:
    idx = _require_seat(roster, ref)
    updated = roster.model_copy(deep=True)
    if selector.isChair:
        for seat in updated.selectors:
            seat.isChair = False
    updated.selectors[idx] = selector.model_copy(update={"id": updated.selectors[idx].id}, deep=True)
    return updated


def set_chair(roster: Roster, ref: EntityRef) -> Roster:
    idx = _require_seat(roster, ref)
    updated = roster.model_copy(deep=True)
    for pos, seat in enumerate(updated.selectors):
        seat.isChair = pos == idx
    assert_single_chair(updated)
    return updated


def delete_selector(roster: Roster, ref: EntityRef) -> Roster:
    """Remove a seat; removing the chair leaves the panel without one"""
    idx = _require_seat(roster, ref)
    updated = roster.model_copy(deep=True)
    del updated.selectors[idx]
    return updated


def replace_selectors(roster: Roster, selectors: list[Selector]) -> Roster:
    """Reassign the whole panel at once"""
    updated = roster.model_copy(deep=True)
    updated.selectors = [s.model_copy(deep=True) for s in selectors]
    validate_panel(updated)
    return updated
