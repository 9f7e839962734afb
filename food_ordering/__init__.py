"""
                Food Ordering Backend

Catalog and order API for a food-ordering storefront, persisting to
flat JSON documents with an optional relational document store.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
