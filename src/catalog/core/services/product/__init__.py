from .history import next_price_entry
from .ledger import UNKNOWN_ACTOR, ProductLedgerService, parse_identifier
from .query import ProductListQuery

__all__ = [
    "UNKNOWN_ACTOR",
    "ProductLedgerService",
    "ProductListQuery",
    "next_price_entry",
    "parse_identifier",
]
