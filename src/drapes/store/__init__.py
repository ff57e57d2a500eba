"""Store module for e-commerce functionality.

Provides the session shopping cart and checkout that turns a cart
into an order.
"""
