"""
Plan and market data module.

Holds the canonical plan, bar and execution models, the plan boundary
normalizer, and parsers for provider payloads.
"""
