"""
Pydantic models for the HTTP contract.

JSON keys are camelCase (restingMetab, distanceUnit, weighInsCount, ...);
Python attributes stay snake_case. Both spellings are accepted on input.
"""
