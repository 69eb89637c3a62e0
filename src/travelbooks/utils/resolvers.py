"""Utilities for resolving party and treasury names to IDs."""

from travelbooks.domain.entities import PartyKind
from travelbooks.domain.errors import NotFoundError, party_not_found, treasury_not_found
from travelbooks.domain.party import PartyService
from travelbooks.domain.treasury import TreasuryService


def _as_id(value: str | int) -> int | None:
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def resolve_party(party_service: PartyService, kind: PartyKind, party: str | int) -> int:
    """Resolve a client or agent name or ID to its ID.

    Args:
        party_service: PartyService instance
        kind: Which kind of party to look for
        party: Party name, or ID (int or string representation of int)

    Returns:
        Party ID

    Raises:
        NotFoundError: If no party of that kind matches
    """
    party_id = _as_id(party)
    if party_id is not None:
        return party_service.require_party(party_id, kind).id

    found = party_service.find_by_name(kind, str(party).strip())
    if found is None:
        raise NotFoundError(party_not_found(kind.value, f"'{party}'"))
    return found.id


def resolve_treasury(treasury_service: TreasuryService, treasury: str | int) -> int:
    """Resolve a treasury name or ID to its ID.

    Raises:
        NotFoundError: If no treasury matches
    """
    treasury_id = _as_id(treasury)
    if treasury_id is not None:
        return treasury_service.require_treasury(treasury_id).id

    for candidate in treasury_service.list_treasuries():
        if candidate.name == treasury:
            return candidate.id
    raise NotFoundError(treasury_not_found(f"'{treasury}'"))
