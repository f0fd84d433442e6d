"""Remote asset store boundary (product images)."""
