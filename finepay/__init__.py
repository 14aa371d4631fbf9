"""Fine payment bridge between the fine-management backend and Stripe Checkout."""

__version__ = "1.0.0"
