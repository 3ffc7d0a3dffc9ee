"""
HealthTracker — Services Layer
================================

Inventory:
    - RecordStore (abstract):   data-access contract for weigh-ins and runs
    - SQLiteRecordStore:        RecordStore on async SQLAlchemy + aiosqlite
    - StatusService (abstract): liveness probe + aggregate status contract
    - HealthService:            StatusService built on a RecordStore

Routes depend on the abstract types only; the concrete classes are chosen
in main.create_app().
"""
