"""Concrete cancellation implementations; import from ``base.cancellation``."""
