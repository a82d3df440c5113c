"""HTTP interface (FastAPI routers and dependencies)."""
