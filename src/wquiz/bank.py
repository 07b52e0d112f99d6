"""Question bank sources.

A bank is fetched once per session start. ``HttpBankClient`` talks to the
bank service; ``DirectoryBankClient`` serves banks from local JSON or CSV
files, which is handy for development and offline use.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from urllib.parse import quote

import httpx
import pandas as pd
from pydantic import ValidationError as SchemaError

from .errors import BankFormatError, NetworkError
from .models import Bank

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("week", "question", "options", "answer")
CSV_LIST_SEPARATOR = "|"


class BankSource(ABC):
    """Abstract Base Class for question bank retrieval."""

    @abstractmethod
    async def fetch(self, course_code: str) -> Bank:
        pass


class HttpBankClient(BankSource):
    """Fetches ``<base_url>/courses/<course_code>`` from the bank service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def course_url(self, course_code: str) -> str:
        return f"{self.base_url}/courses/{quote(course_code, safe='')}"

    async def fetch(self, course_code: str) -> Bank:
        url = self.course_url(course_code)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Bank request to {url} failed: {e}")
            raise NetworkError(f"Error fetching quiz content: {e}") from e

        if not response.is_success:
            logger.error(f"Bank request to {url} returned {response.status_code}")
            raise NetworkError(
                f"Error fetching quiz content: {response.reason_phrase}",
                status=response.status_code,
            )

        try:
            bank = Bank.model_validate(response.json())
        except (ValueError, SchemaError) as e:
            raise BankFormatError(f"Malformed bank for {course_code}: {e}") from e

        logger.info(f"Fetched bank {bank.title!r} with {len(bank.weeks)} weeks")
        return bank


class DirectoryBankClient(BankSource):
    """Serves banks from ``<directory>/<course_code>.json`` or ``.csv``.

    CSV banks have one row per question with the columns ``week``,
    ``question``, ``options`` and ``answer``; options and answers are
    ``|``-separated.
    """

    def __init__(self, directory: str):
        self.directory = directory

    async def fetch(self, course_code: str) -> Bank:
        json_path = os.path.join(self.directory, f"{course_code}.json")
        csv_path = os.path.join(self.directory, f"{course_code}.csv")

        if os.path.exists(json_path):
            bank = self._load_json(json_path)
        elif os.path.exists(csv_path):
            bank = self._load_csv(csv_path, course_code)
        else:
            logger.warning(f"No bank file for {course_code} in {self.directory}")
            raise NetworkError(
                f"Error fetching quiz content: no bank for {course_code}", status=404
            )

        logger.info(f"Loaded bank {bank.title!r} with {len(bank.weeks)} weeks")
        return bank

    def _load_json(self, path: str) -> Bank:
        try:
            with open(path, encoding="utf-8") as f:
                return Bank.model_validate(json.load(f))
        except (ValueError, SchemaError) as e:
            raise BankFormatError(f"Malformed bank file {path}: {e}") from e

    def _load_csv(self, path: str, title: str) -> Bank:
        try:
            df = pd.read_csv(path, encoding="utf-8", dtype=str, keep_default_na=False)
        except (ValueError, pd.errors.ParserError) as e:
            raise BankFormatError(f"Unreadable bank file {path}: {e}") from e

        missing = [c for c in CSV_COLUMNS if c not in df.columns]
        if missing:
            raise BankFormatError(f"Bank file {path} is missing columns: {missing}")

        weeks: Dict[str, List[dict]] = {}
        for row in df.to_dict("records"):
            weeks.setdefault(row["week"].strip(), []).append(
                {
                    "question": row["question"],
                    "options": _split_list(row["options"]),
                    "answer": _split_list(row["answer"]),
                }
            )

        try:
            return Bank.model_validate(
                {
                    "title": title,
                    "weeks": [
                        {"name": name, "questions": questions}
                        for name, questions in weeks.items()
                    ],
                }
            )
        except SchemaError as e:
            raise BankFormatError(f"Malformed bank file {path}: {e}") from e


def _split_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(CSV_LIST_SEPARATOR) if part.strip()]
