# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Pagination block built from the current request's query string."""

from __future__ import annotations

from typing import Any, Iterable
from urllib.parse import urlencode

from .contracts import PaginatorFactory


class DefaultPaginatorFactory(PaginatorFactory):
    """Builds pagination metadata; page links keep the request's other query params.

    {
        "total": 100,
        "count": 20,
        "per_page": 20,
        "current_page": 2,
        "total_pages": 5,
        "links": {"previous": "/posts?with=author&page=1", "next": "/posts?with=author&page=3"}
    }
    """

    page_parameter = "page"

    def __init__(self, query: Iterable[tuple[str, str]] = (), path: str = ""):
        self.query = [(key, value) for key, value in query if key != self.page_parameter]
        self.path = path

    def make(self, *, total: int, page: int, per_page: int, count: int) -> dict[str, Any]:
        total_pages = (total + per_page - 1) // per_page if per_page > 0 else 0

        links: dict[str, str] = {}
        if page > 1:
            links["previous"] = self._url(page - 1)
        if page < total_pages:
            links["next"] = self._url(page + 1)

        return {
            "total": total,
            "count": count,
            "per_page": per_page,
            "current_page": page,
            "total_pages": total_pages,
            "links": links,
        }

    def _url(self, page: int) -> str:
        return f"{self.path}?{urlencode(self.query + [(self.page_parameter, str(page))])}"
