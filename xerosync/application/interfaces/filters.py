"""Helpers for the Xero ``where`` filters passed to IAccountingClient."""


def quote(value: str) -> str:
    """Quote a value for a where expression, escaping backslashes and quotes."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def equals(field: str, value: str) -> str:
    """Build a ``Field=="value"`` comparison."""
    return f"{field}=={quote(value)}"
