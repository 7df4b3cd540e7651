"""Product catalog service.

Users register and authenticate, then create, edit, list and delete products.
Every product keeps an append-only history of its price.
"""

__version__ = "0.1.0"
