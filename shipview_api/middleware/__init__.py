"""
ShipView API — Middleware Package
===================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Origin Guard] → [GZip] → [CORS] → Route

    1. Request ID first: every later log line carries the correlation ID
    2. Logging: records status and duration, including origin rejections
    3. Origin Guard: rejects disallowed origins before any route runs
    4. GZip / CORS: Starlette's built-ins (compression, Access-Control-* headers)
"""
