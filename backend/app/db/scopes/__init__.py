"""Composable query predicates.

Each scope takes a ``Select`` and returns it narrowed (and sometimes ordered),
so scopes chain freely::

    query = tag_scopes.approved(tag_scopes.by_category(select(Tag), TagCategory.STYLE))
"""

from app.db.scopes import tag as tag_scopes
from app.db.scopes import tattoo as tattoo_scopes

__all__ = ["tag_scopes", "tattoo_scopes"]
