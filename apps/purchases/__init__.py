"""
Purchases App - Cart and Purchase Records

This app turns the quantities picked for one seller into dated purchase
records. A purchase snapshots the seller name and each item's name and
price at the moment of saving, so later catalog edits never change it.

Key Features:
- Cart engine: pending quantity per item for the selected seller
- Per-user tracker state holding the selected seller, cart and last bill ids
- Purchase creation with zero-quantity lines filtered out
- Purchase listing with seller/billed/date filters

Architecture:
- Domain: Purchase, PurchaseLine (typed views of stored documents)
- Cart: Cart (pure, no persistence)
- Session: TrackerSession (stored per user in TrackerState)
- Services: list_purchases, select_seller, save_purchase, ...
- Views: function-based API views under /api/purchases/
"""

__version__ = '1.0.0'
