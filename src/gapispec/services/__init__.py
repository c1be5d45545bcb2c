"""Ready-made service handles for individual Google APIs.

Every factory takes the shared :class:`~gapispec.client.AsyncClient` and an
optional server override and returns a :class:`~gapispec.service.Service`
with the API's generated methods plus the hand-written ones that do not fit
the action pattern.

Example::

    from gapispec.services import drive

    async with AsyncClient(credentials) as client:
        files = await drive(client).listFiles({"maxResults": 10})
"""

from __future__ import annotations

from typing import Callable

from gapispec.service import Service
from gapispec.services.blogger import blogger
from gapispec.services.calendar import calendar
from gapispec.services.drive import drive
from gapispec.services.plus import plus
from gapispec.services.youtube import youtube

ServiceFactory = Callable[..., Service]

SERVICES: dict[str, ServiceFactory] = {
    "blogger": blogger,
    "calendar": calendar,
    "drive": drive,
    "plus": plus,
    "youtube": youtube,
}

__all__ = ["SERVICES", "ServiceFactory", "blogger", "calendar", "drive", "plus", "youtube"]
