"""Perks API client.

A thin wrapper around the ``/api/v1/perks`` routes using the
``requests`` library.  It exposes one method per operation:

* :meth:`PerksAPIClient.create_perk` – create a perk and return it.
* :meth:`PerksAPIClient.get_perk` – fetch a perk by id.
* :meth:`PerksAPIClient.list_perks` – list all perks, newest first.
* :meth:`PerksAPIClient.filter_perks` – perks with an exact title.
* :meth:`PerksAPIClient.update_perk` – partially update a perk.
* :meth:`PerksAPIClient.delete_perk` – delete a perk.

Error responses are raised as the same exception classes the server
uses (``NotFoundError``, ``ConflictError``, ...), carrying the
server's message.  Transport failures propagate as
``requests.RequestException``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from perks_api.app.core.exceptions import ERRORS_BY_STATUS, PerkAPIError


logger = logging.getLogger(__name__)

PERKS_PATH = "/api/v1/perks"


class PerksAPIClient:
    """Client for the Perks API.

    Args:
        base_url: Root URL of the service, e.g. ``http://localhost:8000``.
        timeout: Per-request timeout in seconds.
        session: Optional ``requests.Session`` to reuse connections or
            inject a stub in tests.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Any:
        url = f"{self.base_url}{PERKS_PATH}{path}"
        logger.debug("Sending %s request to %s", method, url)
        response = self.session.request(
            method=method,
            url=url,
            params=params,
            json=json_body,
            timeout=self.timeout,
        )
        if response.status_code >= 400:
            raise self._error_from(response)
        return response.json() if response.content else None

    @staticmethod
    def _error_from(response: requests.Response) -> PerkAPIError:
        try:
            body = response.json()
            message = body.get("message") or body.get("detail") or str(body)
        except ValueError:
            message = response.text
        logger.error("Perks API request failed (%s): %s", response.status_code, message)
        error_cls = ERRORS_BY_STATUS.get(response.status_code, PerkAPIError)
        error = error_cls(message)
        if error_cls is PerkAPIError:
            error.status_code = response.status_code
        return error

    def create_perk(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/", json_body=fields)["perk"]

    def get_perk(self, perk_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/{perk_id}")["perk"]

    def list_perks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/")

    def filter_perks(self, title: str) -> List[Dict[str, Any]]:
        """Return perks whose title is exactly ``title``."""
        return self._request("GET", "/filter", params={"title": title})

    def update_perk(self, perk_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Send only ``fields``; everything else keeps its stored value."""
        return self._request("PATCH", f"/{perk_id}", json_body=fields)["perk"]

    def delete_perk(self, perk_id: str) -> bool:
        return bool(self._request("DELETE", f"/{perk_id}")["ok"])
