"""
HealthTracker — Middleware Package
====================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Log] → [Timeout] → Route Handler

    - Request ID runs first so every later log line and error body can carry it
    - Access Log measures the full duration, including timed-out requests
    - Timeout bounds the handler itself; it answers 504 when the bound expires
"""
