"""Field name matching and ordering for outgoing request data."""
from typing import Any, Dict, Iterable, List, Sequence

NIL_ATTRIBUTE = "xsi:nil"


def matching_key(name: str) -> str:
    """Reduce a field name to its case- and underscore-insensitive form."""
    return str(name).replace("_", "").lower()


def match_field_names(names: Sequence[str], declared_names: Sequence[str]) -> Dict[int, str]:
    """Map positions in ``names`` to the declared name they fuzzy match.

    Args:
        names: Field names as supplied by the caller
        declared_names: Canonical element names in declaration order

    Returns:
        Dictionary of ``{index in names: canonical name}``. Names without a
        match are absent from the result.
    """
    lookup: Dict[str, str] = {}
    for declared in declared_names:
        # first declaration wins on key clashes
        lookup.setdefault(matching_key(declared), declared)

    renames: Dict[int, str] = {}
    for index, name in enumerate(names):
        canonical = lookup.get(matching_key(name))
        if canonical is not None:
            renames[index] = canonical
    return renames


def normalize_request(records: List[Dict[str, Any]], declared_names: Sequence[str]) -> List[Dict[str, Any]]:
    """Rename records to their declared element names and sort them in declaration order.

    Records are ``{"name": str, "args": list}`` dictionaries. The list is
    modified in place and returned. Records whose name is not declared keep
    their name and are moved after all declared ones, in their original order.

    Args:
        records: Outgoing field records
        declared_names: Element names of the type being built, in order

    Returns:
        The same list, renamed and sorted
    """
    declared = list(declared_names)
    renames = match_field_names([record["name"] for record in records], declared)
    for index, canonical in renames.items():
        records[index]["name"] = canonical

    positions = {}
    for position, name in enumerate(declared):
        positions.setdefault(name, position)

    # list.sort is stable, unknown names share the same +inf key
    records.sort(key=lambda record: positions.get(record["name"], float("inf")))
    return records


def mark_nil_values(records: List[Dict[str, Any]], nillable_names: Iterable[str]) -> List[Dict[str, Any]]:
    """Flag records holding a single ``None`` for a nillable element.

    The flag is an ``{"xsi:nil": True}`` attribute mapping appended to the
    record args, which the request builder renders as an explicit nil element.
    """
    nillable = set(nillable_names)
    for record in records:
        if record["name"] in nillable and record["args"] == [None]:
            record["args"].append({NIL_ATTRIBUTE: True})
    return records


def is_nil(args: Sequence[Any]) -> bool:
    """Return True when record args carry the nil attribute."""
    return any(isinstance(arg, dict) and arg.get(NIL_ATTRIBUTE) is True for arg in args[1:])
