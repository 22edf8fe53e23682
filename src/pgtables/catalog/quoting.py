"""Identifier quoting for dynamically generated PostgreSQL statements."""


def quote_ident(identifier: str) -> str:
    """Quote an identifier, doubling any embedded double quotes.

    >>> quote_ident('a"b')
    '"a""b"'
    """
    return '"' + identifier.replace('"', '""') + '"'


def qualify(schema: str, name: str) -> str:
    """Schema-qualified, quoted relation name."""
    return f"{quote_ident(schema)}.{quote_ident(name)}"
