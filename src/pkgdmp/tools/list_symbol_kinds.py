"""List the symbol kind names accepted by the kind filters."""

from ..config import KIND_FLAG_NAMES, KIND_NAMES


def list_symbol_kinds() -> dict:
    """List filterable symbol kinds.

    Returns:
        Dict with count and the kind names with their symbol kind values
    """
    kinds = [
        {"name": name, "kind": str(KIND_NAMES[name.lower()])}
        for name in KIND_FLAG_NAMES
    ]

    return {
        "count": len(kinds),
        "kinds": kinds,
    }
