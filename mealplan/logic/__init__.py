"""Core scheduling logic layer.

Subpackages:
- profile: health summary -> needs profile
- scoring: candidate scoring and gap analysis
- scheduling: the weekly assigner and its fallback tiers
- reporting: plan validation, summary text, pool statistics
- planning: end-to-end planning requests (with optional gap filling)
"""
__all__ = ["profile", "scoring", "scheduling", "reporting", "planning"]
