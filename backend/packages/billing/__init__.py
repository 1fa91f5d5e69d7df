"""
Billing package - subscriptions, orders, activations and plan upgrades.

Payment confirmation arrives as an explicit call; no payment provider is
integrated here.
"""
