"""Shared fixtures for summary generation tests.

Provides:
- FakeModelClient: ModelClient test double whose AsyncMock ``call`` returns a ModelReply
- Sample raw model output with typical wrapping/formatting artifacts
- A transcript rich in decisions, action items and figures
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from src.summarizer.services.llm import ModelReply


class FakeModelClient:
    """In-memory ModelClient returning a canned response."""

    def __init__(self, response: str = "", model_name: str = "fake/summary-model") -> None:
        self.model_name = model_name
        self.call = AsyncMock(return_value=ModelReply(content=response, model=model_name))


RAW_MODEL_OUTPUT = (
    "## Key Decision\n"
    "s\n"
    "\n\n\n"
    "*   The team agreed to migrate to the new CRM platform\n"
    ".\n"
    "* Jordan: Verify backups (2024 (08-15))\n"
    "+ Priya: Prepare short (term budget of $50,000 - by Friday\n"
    "\n"
    "## Next Step\n"
    "s\n"
    "- Follow-up review scheduled for August 20, 2024 ** **\n"
)

RICH_TRANSCRIPT = (
    "Alice: Thanks everyone for joining the planning call.\n"
    "Bob: We reviewed the vendor proposals and decided to go with Acme.\n"
    "Alice: Agreed. The budget is $50,000 and we expect a 15% saving.\n"
    "Bob: Action item for Jordan: verify the backups by Friday.\n"
    "Alice: Priya is assigned the migration plan, due 8/15.\n"
    "Bob: Next steps are a follow-up review next week.\n"
)


@pytest.fixture
def fake_client_factory():
    """Build a FakeModelClient returning the given raw text."""

    def _make(response: str = RAW_MODEL_OUTPUT) -> FakeModelClient:
        return FakeModelClient(response)

    return _make


@pytest.fixture
def rich_transcript() -> str:
    return RICH_TRANSCRIPT


@pytest.fixture
def raw_model_output() -> str:
    return RAW_MODEL_OUTPUT
