from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    AuthenticationError,
    ConnectionError,
    NotFoundError,
    ServerError,
    UpstreamDataError,
)
from .models import Point, ZoneStat

logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)

APP_KEY_HEADER = "X-ParsemapAppKey"


class ParsemapClient:
    """Zone statistics source and point lookup backed by the zone store API."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000/v2",
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ParsemapClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def list_zones(self, list_id: str, max_points: int) -> List[ZoneStat]:
        response = self._request(
            "GET",
            f"/lists/{list_id}/zones/",
            params={"max_points": str(max_points)},
        )
        return self._parse_list(response, ZoneStat)

    def zone_stats(
        self, list_id: str, prefixes: Iterable[str], precision: int
    ) -> List[ZoneStat]:
        params: Dict[str, Any] = {
            "precision": str(precision),
            "prefix": sorted(prefixes),
        }
        response = self._request("GET", f"/lists/{list_id}/zone-tree/", params=params)
        return self._parse_list(response, ZoneStat)

    def points_with_prefixes(
        self, list_id: str, prefixes: Iterable[str], limit: int
    ) -> List[Point]:
        params: Dict[str, Any] = {"prefix": list(prefixes), "limit": str(limit)}
        response = self._request("GET", f"/lists/{list_id}/points/", params=params)
        return self._parse_list(response, Point)

    def list_points(
        self,
        list_id: str,
        geohash: str,
        exclude: Iterable[str] = (),
        last_point_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Point]:
        params: Dict[str, Any] = {"prefix": geohash}
        excluded = list(exclude)
        if excluded:
            params["exclude"] = excluded
        if last_point_date is not None:
            params["since"] = last_point_date.isoformat()
        if limit is not None:
            params["limit"] = str(limit)
        response = self._request("GET", f"/lists/{list_id}/points/", params=params)
        return self._parse_list(response, Point)

    def _headers(self) -> Dict[str, str]:
        headers = {}
        if self.api_key:
            headers[APP_KEY_HEADER] = self.api_key
        return headers

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.request(
                method,
                url,
                headers=self._headers(),
                params=params,
            )
        except httpx.RequestError as exc:
            raise ConnectionError(str(exc)) from exc

        if 200 <= response.status_code < 300:
            return response

        message = response.text or response.reason_phrase
        logger.warning("%s %s failed with %d", method, path, response.status_code)
        self._raise_for_status(response.status_code, message)
        return response

    @staticmethod
    def _parse_list(response: httpx.Response, model: Type[TModel]) -> List[TModel]:
        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamDataError(f"response is not JSON: {exc}") from exc
        if not isinstance(data, list):
            raise UpstreamDataError(
                f"expected a JSON array of {model.__name__}, got {type(data).__name__}"
            )
        try:
            return [model.model_validate(item) for item in data]
        except PydanticValidationError as exc:
            raise UpstreamDataError(f"malformed {model.__name__}: {exc}") from exc

    @staticmethod
    def _raise_for_status(status_code: int, message: str) -> None:
        if status_code == 401:
            raise AuthenticationError(message)
        if status_code == 404:
            raise NotFoundError(message)
        if status_code >= 500:
            raise ServerError(message)
        raise UpstreamDataError(message)
