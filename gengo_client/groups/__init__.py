"""Resource groups, one class per Gengo API area.

WHY: The API is organised in areas (account, job, jobs, service, order).
Mirroring that layout keeps each method next to its siblings and lets
GengoClient expose them as ``client.job.get(...)`` and so on.

HOW: Each group subclasses MethodGroup, holds the owning client, and
calls its transport methods. Groups never touch httpx directly.

RULES:
- One module per API area
- Every group method makes at most one request
- Argument validation happens before that request
"""

from __future__ import annotations

from gengo_client.groups.account import AccountMethodGroup
from gengo_client.groups.base import MethodGroup
from gengo_client.groups.job import JobMethodGroup
from gengo_client.groups.jobs import JobsMethodGroup
from gengo_client.groups.order import OrderMethodGroup
from gengo_client.groups.service import ServiceMethodGroup

__all__ = [
    "AccountMethodGroup",
    "JobMethodGroup",
    "JobsMethodGroup",
    "MethodGroup",
    "OrderMethodGroup",
    "ServiceMethodGroup",
]
