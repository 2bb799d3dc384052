"""
HTTP client for the medal backend.

Three endpoints: the country list, the per-country medal summary and the
prediction endpoint. Everything that can go wrong on the wire surfaces as a
``MedalApiError`` whose message is fit to show to the user.
"""
import logging
from dataclasses import dataclass

import pandas as pd
import requests

from medal_views import COLUMNS, snapshot_frame

logger = logging.getLogger(__name__)

MEDAL_FIELDS = ["gold", "silver", "bronze", "total"]


class MedalApiError(Exception):
    """The backend could not be reached or answered with something unusable."""


class PredictionError(MedalApiError):
    """The backend rejected a prediction request."""


@dataclass(frozen=True)
class Prediction:
    gold: int
    silver: int
    bronze: int
    total: int

    @classmethod
    def from_payload(cls, payload):
        try:
            return cls(**{k: int(payload[k]) for k in MEDAL_FIELDS})
        except (KeyError, TypeError, ValueError) as e:
            raise MedalApiError(f"Malformed prediction response: {e}") from e


def clean_summary(rows):
    """Validate raw summary rows into a snapshot frame.

    Rows without a country, or whose medal counts are not non-negative
    whole numbers, are dropped.
    """
    rows = list(rows or [])
    records = [r for r in rows if isinstance(r, dict)]
    if len(records) != len(rows):
        logger.warning("Dropping %d non-object summary rows", len(rows) - len(records))
    df = pd.DataFrame.from_records(records)
    if df.empty:
        return snapshot_frame([])
    df = df.reindex(columns=COLUMNS)
    for col in MEDAL_FIELDS:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    counts = df[MEDAL_FIELDS]
    ok = (df["country"].notna()
          & (df["country"].astype(str).str.strip() != "")
          & counts.notna().all(axis=1)
          & (counts >= 0).all(axis=1)
          & (counts % 1 == 0).all(axis=1))
    if not ok.all():
        logger.warning("Dropping %d malformed summary rows: %s",
                       (~ok).sum(), df.loc[~ok, "country"].tolist())
    df = df[ok].astype({col: "int64" for col in MEDAL_FIELDS})
    df["country"] = df["country"].astype(str)
    return df.reset_index(drop=True)


class MedalApiClient:
    def __init__(self, base_url, timeout=10, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise MedalApiError(f"Could not reach {url}: {e}") from e

    def _json(self, response, path):
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s returned invalid JSON (HTTP %s)", path, response.status_code)
            raise MedalApiError(f"Invalid JSON from {self.base_url}{path}") from e

    def countries(self):
        response = self._request("GET", "/countries")
        if not response.ok:
            raise MedalApiError(f"Country list failed (HTTP {response.status_code})")
        data = self._json(response, "/countries")
        names = (data.get("countries") or []) if isinstance(data, dict) else None
        if not isinstance(names, list):
            raise MedalApiError("Malformed country list")
        return names

    def summary(self):
        response = self._request("GET", "/medals/summary")
        if not response.ok:
            raise MedalApiError(f"Medal summary failed (HTTP {response.status_code})")
        data = self._json(response, "/medals/summary")
        if not isinstance(data, list):
            raise MedalApiError("Malformed medal summary")
        return clean_summary(data)

    def predict(self, country, year):
        payload = {"country_name": country, "year": int(year)}
        response = self._request("POST", "/predict", json=payload)
        if not response.ok:
            try:
                data = response.json()
            except ValueError:
                data = None
            detail = data.get("detail") if isinstance(data, dict) else None
            logger.error("Prediction for %s/%s rejected (HTTP %s): %s",
                         country, year, response.status_code, detail)
            raise PredictionError(str(detail) if detail
                                  else f"Prediction failed (HTTP {response.status_code})")
        data = self._json(response, "/predict")
        if not isinstance(data, dict):
            raise MedalApiError("Malformed prediction response")
        return Prediction.from_payload(data)
