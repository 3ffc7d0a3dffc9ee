"""
HealthTracker — Command-Line Client
=====================================

Runs in its own process and reaches the API only over HTTP.

    api_client.py  ApiClient contract + HttpApiClient (httpx)
    commands.py    Command handlers that render results for a terminal
    main.py        argparse entry point (console script `healthtracker`)
"""
