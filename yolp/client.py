from __future__ import annotations

import logging
from io import BytesIO
from typing import Dict, Optional

import requests
from PIL import Image
from requests import Response

from .config import ClientConfig, RequestConfig
from .entities import Document
from .errors import ConfigurationError, DecodeError, RequestError
from .static import StaticOptions, format_coordinate


logger = logging.getLogger(__name__)


class YOLPClient:
    """Client for the Yahoo! Open Local Platform weather, zip code and static map APIs.

    Every request carries the ``appid`` query parameter. A ``session`` may be
    passed in to share connections or customise TLS and proxies; otherwise
    the client creates its own and closes it in :meth:`close`.
    """

    place_url = "https://map.yahooapis.jp/weather/V1/place"
    zip_code_search_url = "https://map.yahooapis.jp/search/zip/V1/zipCodeSearch"
    static_url = "https://map.yahooapis.jp/map/V1/static"

    # Minutes between weather records returned by the place endpoint.
    PLACE_INTERVAL = 5

    def __init__(
        self,
        app_id: str,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
        *,
        place_url: Optional[str] = None,
        zip_code_search_url: Optional[str] = None,
        static_url: Optional[str] = None,
    ) -> None:
        if not app_id:
            raise ConfigurationError("app_id is required")
        self._app_id = app_id
        self.request_config = request_config or RequestConfig()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.place_url = place_url or self.place_url
        self.zip_code_search_url = zip_code_search_url or self.zip_code_search_url
        self.static_url = static_url or self.static_url
        self._log = logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_env(cls, session: Optional[requests.Session] = None, **kwargs) -> "YOLPClient":
        config = ClientConfig.from_env()
        return cls(config.app_id, session=session, request_config=config.request, **kwargs)

    @property
    def app_id(self) -> str:
        return self._app_id

    # Public API ---------------------------------------------------------
    def fetch_place(self, latitude: float, longitude: float) -> Document:
        """Return weather records for the place at the given coordinates."""
        params = {
            # The weather endpoint takes longitude first.
            "coordinates": f"{format_coordinate(longitude)},{format_coordinate(latitude)}",
            "interval": str(self.PLACE_INTERVAL),
            "output": "json",
        }
        return self._document(self._get(self.place_url, params))

    def fetch_by_postal_code(self, code: str) -> Document:
        """Return the places registered under a Japanese postal code."""
        params = {"query": code, "output": "json"}
        return self._document(self._get(self.zip_code_search_url, params))

    def fetch_static_map(
        self,
        latitude: float,
        longitude: float,
        options: Optional[StaticOptions] = None,
    ) -> Image.Image:
        """Render a static map centred on the given coordinates.

        ``options`` are validated before anything is sent; a
        :class:`~yolp.errors.ValidationError` means no request was made.
        """
        params = {"lat": format_coordinate(latitude), "lon": format_coordinate(longitude)}
        if options is not None:
            options.validate()
            params.update(options.query_params())
        return self._image(self._get(self.static_url, params))

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "YOLPClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Helpers ------------------------------------------------------------
    def _get(self, url: str, params: Dict[str, str]) -> Response:
        query = dict(params)
        query["appid"] = self._app_id
        self._log.debug("GET %s %s", url, sorted(params))
        try:
            response = self.session.get(url, params=query, timeout=self.request_config.timeout)
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", url, exc_info=exc)
            raise RequestError(f"request to {url} failed") from exc
        self._log_response(url, response)
        if not response.ok:
            # YOLP reports most errors in the body, so decoding decides.
            self._log.warning("%s returned HTTP %s", url, response.status_code)
        return response

    def _document(self, response: Response) -> Document:
        try:
            payload = response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise DecodeError("invalid json") from exc
        try:
            return Document.from_dict(payload)
        except DecodeError as exc:
            self._log.error("Unexpected document shape: %s", exc)
            raise

    def _image(self, response: Response) -> Image.Image:
        try:
            image = Image.open(BytesIO(response.content))
            image.load()
        except OSError as exc:
            self._log.error("Failed to decode image", exc_info=exc)
            raise DecodeError("invalid image") from exc
        return image

    def _log_response(self, url: str, response: Response) -> None:
        if not self.request_config.debug_responses:
            return
        body_preview = response.content[:500]
        logger.info(
            "YOLP response",
            extra={"url": url, "status": response.status_code, "body": body_preview},
        )


__all__ = ["YOLPClient"]
