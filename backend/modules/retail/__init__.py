"""
Retail record store.

Products, stock receipts (inventory entries) and sales: the raw records
every analytics figure is derived from.
"""
