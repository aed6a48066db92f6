"""
Form record dataclasses.

Named, ordered field records that sit between free-text forms and the
catalog tables.
"""
from .entry_fields import ArticleFields, BookFields, EntryFields

__all__ = ["ArticleFields", "BookFields", "EntryFields"]
