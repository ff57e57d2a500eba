"""Catalog module: products, categories, sizes and colors.

Owns product lookup (price, stock, variant surcharges) used by the cart
and checkout, plus the public shop pages.
"""
