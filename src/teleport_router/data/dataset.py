"""Teleporter dataset download with a TTL-gated local cache."""
from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

import requests

from teleport_router.core.config import DatasetConfig
from teleport_router.core.errors import DataUnavailableError, SchemaInvalidError
from teleport_router.data.features import LineFeature, parse_features, validate_collection

logger = logging.getLogger(__name__)


class FeatureProvider(Protocol):
    def get_features(self) -> list[LineFeature]:
        ...


class StaticFeatureProvider:
    """Serve features from an in-memory GeoJSON FeatureCollection."""

    def __init__(self, collection: Any) -> None:
        self._collection = collection

    def get_features(self) -> list[LineFeature]:
        return parse_features(self._collection)


class DatasetProvider:
    """Keep a local copy of the remote GeoJSON fresh and parse it on demand.

    The local file is refreshed when it is missing or older than the TTL.
    A failed refresh is reported to the caller; a stale file is never used
    in its place.
    """

    def __init__(
        self,
        config: DatasetConfig,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self._session = session
        self._clock = clock

    @property
    def cache_path(self) -> Path:
        return self.config.cache_path

    @property
    def tmp_path(self) -> Path:
        return self.cache_path.with_suffix(".tmp")

    def age_hours(self) -> Optional[float]:
        """Age of the local copy, or None when it is missing or unreadable."""
        try:
            mtime = self.cache_path.stat().st_mtime
        except OSError:
            return None
        return (self._clock() - mtime) / 3600.0

    def needs_update(self) -> bool:
        age = self.age_hours()
        if age is None:
            return True
        return age > max(1, self.config.ttl_hours)

    def refresh(self) -> Path:
        """Download the remote dataset and replace the local copy."""
        url = (self.config.remote_url or "").strip()
        if not url:
            raise DataUnavailableError("Remote URL not set")

        tmp = self.tmp_path
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DataUnavailableError(
                f"cannot create data dir {self.cache_path.parent}: {exc}",
                details={"path": str(self.cache_path.parent)},
            ) from exc

        logger.info("[DATA] downloading %s", url)
        try:
            if self._session is not None:
                self._download(self._session, url, tmp)
            else:
                with requests.Session() as session:
                    self._download(session, url, tmp)
        except requests.RequestException as exc:
            _discard(tmp)
            raise DataUnavailableError(f"error loading: {exc}", details={"url": url}) from exc
        except OSError as exc:
            _discard(tmp)
            raise DataUnavailableError(f"cannot write {tmp}: {exc}", details={"url": url}) from exc
        except DataUnavailableError:
            _discard(tmp)
            raise

        try:
            with open(tmp, "r", encoding="utf-8") as handle:
                validate_collection(json.load(handle))
        except SchemaInvalidError:
            _discard(tmp)
            raise
        except ValueError as exc:
            _discard(tmp)
            raise SchemaInvalidError(f"Invalid GeoJSON: {exc}") from exc
        except OSError as exc:
            _discard(tmp)
            raise DataUnavailableError(f"cannot read {tmp}: {exc}") from exc

        try:
            os.replace(tmp, self.cache_path)
        except OSError as exc:
            _discard(tmp)
            raise DataUnavailableError(f"cannot replace {self.cache_path}: {exc}") from exc
        logger.info("[DATA] dataset saved to %s", self.cache_path)
        return self.cache_path

    def _download(self, session: requests.Session, url: str, tmp: Path) -> None:
        with session.get(url, timeout=self.config.timeout_s, stream=True) as resp:
            if resp.status_code != 200:
                raise DataUnavailableError(
                    f"HTTP {resp.status_code}",
                    details={"url": url, "status": resp.status_code},
                )
            with open(tmp, "wb") as handle:
                for chunk in resp.iter_content(chunk_size=64 * 1024):
                    if chunk:
                        handle.write(chunk)

    def ensure_fresh(self) -> Path:
        if self.needs_update():
            self.refresh()
        return self.cache_path

    def load_collection(self) -> Any:
        path = self.ensure_fresh()
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return json.load(handle)
        except OSError as exc:
            raise DataUnavailableError(f"cannot read {path}: {exc}") from exc
        except ValueError as exc:
            raise SchemaInvalidError(f"Invalid GeoJSON in {path}: {exc}") from exc

    def get_features(self) -> list[LineFeature]:
        return parse_features(self.load_collection())


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.debug("[DATA] could not remove %s: %s", path, exc)
