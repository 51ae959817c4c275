"""
Weather forecast lookup.

Responsibilities:
- Resolve the forecast district nearest to a destination.
- Return that district's short-range forecast as a request-scoped value.
"""
