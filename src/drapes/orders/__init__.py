"""Orders module: placed orders, their line items and status history."""
