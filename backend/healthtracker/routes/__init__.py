"""
HealthTracker — API Routes Package
====================================

Route Inventory:
    - weight.py:  POST /weight                 (log a weigh-in)
                  GET  /weight/last/{count}    (most recent weigh-ins)
    - runs.py:    POST /run                    (log a run)
                  GET  /run/last/{count}       (most recent runs)
    - health.py:  GET  /health                 (liveness probe)
                  GET  /about                  (version + aggregate status)

Routes stay thin: parse the body, call the store or status service, pick the
status code. Range checks and error translation happen below them.
"""
