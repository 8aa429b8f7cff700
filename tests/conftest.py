"""Pytest configuration and shared fixtures for all tests."""

from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from machina_mcp.config import get_settings


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop cached settings so environment changes apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    test_env = {
        "DOCS_BASE_URL": "https://docs.example.test",
        "GITHUB_API_BASE": "https://api.github.example.test",
        "TEMPLATES_REPO": "machina-sports/machina-templates",
        "GITHUB_TOKEN": "test_github_token_12345",
        "CACHE_TTL_SECONDS": "120",
        "FETCH_CONTENT_LIMIT": "2",
    }
    for key, value in test_env.items():
        monkeypatch.setenv(key, value)
    return test_env


@pytest.fixture
def sample_docs_html() -> str:
    """Docs page with navigation outside <main> and content inside it."""
    return """<!DOCTYPE html>
<html>
<head><title>Introduction - Machina</title><style>body { color: red; }</style></head>
<body>
<nav><a href="/">Home</a><a href="/agents">Agents</a></nav>
<main class="docs">
  <h1>Introduction</h1>
  <p>Machina lets you <strong>deploy sports agents</strong> backed by
  <a href="https://docs.machina.gg/connectors">connectors</a> &amp; workflows.</p>
  <ul>
    <li>Agents</li>
    <li>Workflows</li>
  </ul>
  <pre><code>machina deploy --agent reporter-recap</code></pre>
</main>
<footer>Copyright Machina</footer>
</body>
</html>"""


@pytest.fixture
def templates_listing() -> List[Dict[str, Any]]:
    """GitHub contents API listing for agent-templates."""
    names = [
        "reporter-recap-soccer-en",
        "reporter-quizzes-nba-es",
        "reporter-summary-pt-br",
        "dazn-soccer-briefing",
        "estelarbet-polls",
        "chat-completion",
        "gameday-nfl-superbowl",
    ]
    return [
        {
            "name": name,
            "path": f"agent-templates/{name}",
            "type": "dir",
            "download_url": None,
        }
        for name in names
    ]


@pytest.fixture
def connectors_listing() -> List[Dict[str, Any]]:
    """GitHub contents API listing for connectors."""
    names = ["openai", "sportradar-soccer", "sportradar-nba", "machina-db", "docling"]
    return [
        {"name": name, "path": f"connectors/{name}", "type": "dir", "download_url": None}
        for name in names
    ]


@pytest.fixture
def sample_template_yaml() -> str:
    """Template configuration using parameter placeholders."""
    return """# Reporter recap template
setup:
  title: Reporter Recap
  description: Creates post-game recaps
  version: 1.0.0

workflow:
  name: reporter-recap
  inputs:
    event_code:
      type: parameter
      description: Sport event identifier
      required: true
    language:
      type: parameter
      description: Output language
      default: en
  outputs:
    status: "$.get('workflow-status')"
"""


@pytest.fixture
def mock_response_cache():
    """Mock response cache for testing."""
    cache = MagicMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    cache.clear = AsyncMock(return_value=3)
    cache.get_stats = MagicMock(
        return_value={
            "size": 15,
            "hits": 245,
            "misses": 87,
            "hit_rate": 0.738,
            "ttl_seconds": 300,
        }
    )
    return cache


def make_mock_session(status: int = 200, json_data: Any = None, text: str = "", reason: str = "OK"):
    """Build an aiohttp.ClientSession replacement returning a single canned response."""
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.reason = reason
    mock_response.json = AsyncMock(return_value=json_data)
    mock_response.text = AsyncMock(return_value=text)

    mock_session = MagicMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    mock_session.get = MagicMock(
        return_value=AsyncMock(
            __aenter__=AsyncMock(return_value=mock_response), __aexit__=AsyncMock(return_value=None)
        )
    )
    return mock_session


@pytest.fixture
def mock_session_factory():
    """Factory fixture for canned aiohttp sessions."""
    return make_mock_session
