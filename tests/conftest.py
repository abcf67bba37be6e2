import json
import sys
from pathlib import Path
from typing import Any

import pytest


PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from enhetsoppslag.integrations.brreg_models import EntityKind, RawResponse  # noqa: E402


def entity_json(orgnr: str, name: str, **extra: Any) -> str:
    payload: dict[str, Any] = {"organisasjonsnummer": orgnr, "navn": name}
    payload.update(extra)
    return json.dumps(payload, ensure_ascii=False)


def children_json(*children: tuple[str, str]) -> str:
    return json.dumps(
        {
            "_embedded": {
                "underenheter": [
                    {"organisasjonsnummer": orgnr, "navn": name}
                    for orgnr, name in children
                ]
            },
            "page": {"size": 20, "totalElements": len(children)},
        },
        ensure_ascii=False,
    )


class FakeRegistryClient:
    """Svarer med forhåndsdefinerte svar og husker hvilke kall som ble gjort."""

    def __init__(self) -> None:
        self.entities: dict[tuple[str, EntityKind], RawResponse | Exception] = {}
        self.children: dict[str, RawResponse | Exception] = {}
        self.calls: list[tuple[str, str, EntityKind | None]] = []

    def add_entity(
        self, orgnr: str, kind: EntityKind, status: int, body: str = ""
    ) -> "FakeRegistryClient":
        self.entities[(orgnr, kind)] = RawResponse(status, body)
        return self

    def add_children(
        self, parent_orgnr: str, status: int, body: str = ""
    ) -> "FakeRegistryClient":
        self.children[parent_orgnr] = RawResponse(status, body)
        return self

    def fail_entity(
        self, orgnr: str, kind: EntityKind, error: Exception
    ) -> "FakeRegistryClient":
        self.entities[(orgnr, kind)] = error
        return self

    def fail_children(
        self, parent_orgnr: str, error: Exception
    ) -> "FakeRegistryClient":
        self.children[parent_orgnr] = error
        return self

    def fetch_entity(self, orgnr: str, kind: EntityKind) -> RawResponse:
        self.calls.append(("entity", orgnr, kind))
        result = self.entities.get((orgnr, kind))
        if result is None:
            raise AssertionError(f"Uventet oppslag av {kind.value} {orgnr}")
        if isinstance(result, Exception):
            raise result
        return result

    def fetch_children(self, parent_orgnr: str) -> RawResponse:
        self.calls.append(("children", parent_orgnr, None))
        result = self.children.get(parent_orgnr)
        if result is None:
            raise AssertionError(f"Uventet underenhetssøk for {parent_orgnr}")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_client() -> FakeRegistryClient:
    return FakeRegistryClient()
