"""Static book catalog: name forms and verse counts for the 66 books."""

from scriptref.catalog.books import (
    DEFAULT_CATALOG_PATH,
    BookCatalog,
    BookEntry,
    BookNames,
    CatalogValidationError,
    get_catalog,
    normalize_token,
)

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "BookCatalog",
    "BookEntry",
    "BookNames",
    "CatalogValidationError",
    "get_catalog",
    "normalize_token",
]
