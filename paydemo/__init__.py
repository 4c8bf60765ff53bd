"""Payment domain: orders, coupons, identity and shared money types."""

__version__ = "0.1.0"