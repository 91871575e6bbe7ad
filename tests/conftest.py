import io
import json
import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installation when running tests locally
pkg_src = Path(__file__).resolve().parents[1] / "src"
if str(pkg_src) not in sys.path:
    sys.path.insert(0, str(pkg_src))

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class FakeSubgraph:
    """Stand-in for ``urlopen`` answering GraphQL POSTs from fixture files."""

    def __init__(self) -> None:
        self.responses: dict[str, dict] = {
            "xfLobbyEnters": json.loads((FIXTURES / "lobby_enters.json").read_text()),
            "stakeStarts": json.loads((FIXTURES / "stake_starts.json").read_text()),
        }
        self.requests: list[dict] = []
        self.error: Exception | None = None

    def __call__(self, req, timeout=None):  # noqa: ANN001
        payload = json.loads(req.data.decode())
        self.requests.append(payload)
        if self.error is not None:
            raise self.error
        for root, body in self.responses.items():
            if root in payload["query"]:
                return io.BytesIO(json.dumps(body).encode())
        raise AssertionError(f"unexpected query: {payload['query']}")


@pytest.fixture()
def fake_subgraph(monkeypatch: pytest.MonkeyPatch) -> FakeSubgraph:
    fake = FakeSubgraph()
    monkeypatch.setattr("hex_lab.sources.subgraph.urllib.request.urlopen", fake)
    return fake


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES
