"""URL layout of the apps API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class AppEndpoints:
    host: str

    @property
    def collection(self) -> str:
        return f"{self.host.rstrip('/')}/api/2/apps"

    def app(self, app_id: int) -> str:
        return f"{self.collection}/{app_id}"

    def rules(self, app_id: int) -> str:
        return f"{self.app(app_id)}/rules"

    def rule(self, app_id: int, rule_id: int) -> str:
        return f"{self.rules(app_id)}/{rule_id}"

    def parameter(self, app_id: int, parameter_id: int) -> str:
        return f"{self.app(app_id)}/parameters/{parameter_id}"
