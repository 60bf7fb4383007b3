"""
Calendar Feed Service package.

Clients request an opaque feed token and then poll a token-scoped URL for
an iCalendar document. Documents are derived from an upstream JSON source
and regenerated lazily once their cache entry has gone stale.

Structure:
- app.main: FastAPI app, routes, and wiring.
- app.adapters: Upstream entries client and iCalendar encoder.
- app.caching: Token-keyed feed cache with time-based staleness.
- app.tokens: Cryptographically random token minting.
- app.domain: Entry model and create/read feed orchestration.
"""
