"""
Endpoint subpackage for API v1.

Each module defines an ``APIRouter`` for one concern; ``router.py``
mounts them under their prefixes.
"""
