"""Session-wide fixtures (Level 1).

Feature-level fixtures live in the conftest.py next to each test package.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.commands`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from infrastructure.commands.context import CommandContext
from infrastructure.i18n import Locale, Translator, YAMLTranslationLoader
from infrastructure.i18n.factory import DEFAULT_TRANSLATIONS_DIR


@pytest.fixture(scope="session")
def core_translator():
    """Translator loaded with the bundled core catalogs."""
    loader = YAMLTranslationLoader(DEFAULT_TRANSLATIONS_DIR)
    translator = Translator(loader, fallback_locale=Locale.EN_US)
    translator.load_all()
    return translator


@pytest.fixture
def mock_responder():
    """Async response channel capturing replies."""
    responder = MagicMock()
    responder.send_message = AsyncMock()
    responder.send_ephemeral = AsyncMock()
    return responder


@pytest.fixture
def context_factory(core_translator, mock_responder):
    """Factory for CommandContext instances wired to the core catalogs.

    Returns:
        Callable that creates CommandContext with default or custom values
    """

    def _factory(
        user_id: str = "100",
        channel_id: str = "200",
        guild_id: str = "300",
        locale: str = "en-US",
        guild_locale=None,
        member_role_ids=None,
        translator=None,
        responder=None,
        resolver=None,
        use_translator: bool = True,
    ):
        return CommandContext(
            user_id=user_id,
            channel_id=channel_id,
            guild_id=guild_id,
            locale=locale,
            guild_locale=guild_locale,
            member_role_ids=list(member_role_ids or []),
            translator=(translator or core_translator) if use_translator else None,
            responder=responder or mock_responder,
            resolver=resolver,
        )

    return _factory


@pytest.fixture
def ctx(context_factory):
    """Default guild context in en-US."""
    return context_factory()
