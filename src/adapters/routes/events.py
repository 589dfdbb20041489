"""Rutas de Events (lectura)."""

from __future__ import annotations

from adapters.routes.base import BaseRoutes
from core.domain.events import Event
from core.domain.models import StripeList
from core.domain.request import HttpMethod
from core.params import ParamTree


class EventRoutes(BaseRoutes):
    _base_path = "/events"

    async def retrieve(self, event: str) -> Event:
        return await self._requester.send(HttpMethod.GET, self._path(event), expect=Event)

    async def list_all(self, filters: ParamTree = None) -> StripeList[Event]:
        return await self._requester.send(
            HttpMethod.GET,
            self._path(),
            query=filters,
            expect=StripeList[Event],
        )
