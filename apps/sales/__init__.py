"""
Sales app for the Odin POS backend.

Owns the checkout workflow: cart validation, stock decrement, payment
reconciliation and the immutable sale record.
"""
