"""Async client for the EAN hotel API."""
from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from typing import Any, Dict, List, Mapping, Optional

import httpx

from ean_mobile.config.settings import Settings
from ean_mobile.destinations.destination import Destination, parse_destinations
from ean_mobile.hotels import Reservation, parse_reservation
from ean_mobile.utils.json_fields import opt_dict, opt_str

from .errors import RedirectError, ServiceError, raise_for_ws_error

logger = logging.getLogger(__name__)

RESERVATION_ENVELOPE = "HotelRoomReservationResponse"


def parse_reservation_response(payload: Any) -> Reservation:
    """Unwrap a booking response envelope and parse the reservation inside it."""
    document = opt_dict(payload, RESERVATION_ENVELOPE)
    if not document and isinstance(payload, dict):
        document = payload
    raise_for_ws_error(document)
    return parse_reservation(document)


class EanClient(AbstractAsyncContextManager["EanClient"]):
    """Performs API calls and maps failures onto :class:`ServiceError`/:class:`RedirectError`."""

    def __init__(
        self,
        settings: Settings,
        *,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        default_headers = {
            "Accept": "application/json",
            "User-Agent": "ean-mobile/0.1.0",
        }
        if headers:
            default_headers.update(headers)
        self._settings = settings
        self._client = httpx.AsyncClient(
            timeout=settings.request_timeout_s,
            headers=default_headers,
            follow_redirects=False,
            transport=transport,
        )
        self._customer_session_id: Optional[str] = None

    @property
    def customer_session_id(self) -> Optional[str]:
        return self._customer_session_id

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aexit__(self, exc_type, exc, exc_tb) -> None:
        await self.aclose()

    async def lookup_destinations(self, query: str) -> List[Destination]:
        logger.debug("Destination lookup query='%s'", query)
        payload = await self._request("GET", self._settings.destination_url, params={"query": query})
        if isinstance(payload, dict):
            raise_for_ws_error(payload)
        return parse_destinations(payload)

    async def book_reservation(self, form: Mapping[str, str]) -> Reservation:
        url = f"{self._settings.api_base_url}/res"
        logger.info("Submitting reservation request for hotel %s", form.get("hotelId"))
        payload = await self._request("POST", url, data=dict(form))
        self._remember_session(opt_dict(payload, RESERVATION_ENVELOPE))
        return parse_reservation_response(payload)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, str]] = None,
        data: Optional[Dict[str, str]] = None,
    ) -> Any:
        query = self._settings.common_params()
        if self._customer_session_id:
            query["customerSessionId"] = self._customer_session_id
        if params:
            query.update(params)
        try:
            response = await self._client.request(method, url, params=query, data=data)
        except httpx.HTTPError as exc:
            raise ServiceError(f"Request to {url} failed: {exc}") from exc

        if response.is_redirect:
            location = response.headers.get("Location", "")
            logger.warning("Request to %s redirected (%s) to %s", url, response.status_code, location)
            raise RedirectError(location, status=response.status_code)
        if response.is_error:
            raise ServiceError(
                f"Request to {url} failed ({response.status_code}): {response.text[:256]}",
                status=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceError(f"Response from {url} was not JSON", status=response.status_code) from exc

    def _remember_session(self, document: Mapping[str, Any]) -> None:
        session_id = opt_str(document, "customerSessionId")
        if session_id and session_id != self._customer_session_id:
            logger.debug("Using customerSessionId %s", session_id)
            self._customer_session_id = session_id
