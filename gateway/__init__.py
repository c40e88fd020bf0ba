"""
gateway
=======

FastAPI app exposing the scan trigger (for an external scheduler / cron
hitting `/api/scan`) and the browser quote proxy (`/api/sina`).
Run with `python -m gateway`.
"""
