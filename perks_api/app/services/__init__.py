"""
Service layer.

Business rules live here: validation of perk payloads and the
orchestration of repository calls.  The API handlers only relay
results and errors.
"""
