"""
Unit tests for the AI data-entry helpers and API key handling.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from pathlib import Path

import pytest

from src.ai_proxy.prompts import file_block, format_ministry_list
from src.api.error_handlers import APIError
from src.api.schemas.ai_schemas import (
    ColumnAnalysisInput,
    DomainLookupInput,
    EnrichInput,
    SignupSheetInput,
)
from src.api.services.ai_service import AiService
from src.common.property_store import AI_API_KEY_PROPERTY, PropertyStore
from tests.api.support import FakeClaudeClient


def _service(
    tmp_path: Path,
    *,
    env_key: str = "",
    stored_key: str = "",
    client: FakeClaudeClient | None = None,
) -> AiService:
    properties = PropertyStore(tmp_path)
    if stored_key:
        properties.set(AI_API_KEY_PROPERTY, stored_key)
    return AiService(client=client or FakeClaudeClient(), properties=properties, env_api_key=env_key)


def test_store_api_key_validates_prefix(tmp_path: Path) -> None:
    service = _service(tmp_path)

    with pytest.raises(APIError, match="Invalid API key format"):
        service.store_api_key("not-a-key")
    assert service.check_api_key() == {"hasKey": False}

    service.store_api_key("  sk-ant-abc  ")
    assert service.properties.get(AI_API_KEY_PROPERTY) == "sk-ant-abc"
    assert service.check_api_key() == {"hasKey": True}


def test_environment_key_takes_precedence(tmp_path: Path) -> None:
    client = FakeClaudeClient()
    service = _service(tmp_path, env_key="sk-env", stored_key="sk-stored", client=client)

    service.lookup_domain(DomainLookupInput(domain="stmary.org"))

    assert client.calls[0]["api_key"] == "sk-env"


def test_missing_key_messages(tmp_path: Path) -> None:
    service = _service(tmp_path)

    with pytest.raises(APIError, match="No API key configured on server"):
        service.lookup_domain(DomainLookupInput(domain="stmary.org"))
    with pytest.raises(APIError, match="Add one in Settings"):
        service.enrich(EnrichInput(source_type="booklet", file_data="abc"))


def test_lookup_and_analyze_validate_inputs(tmp_path: Path) -> None:
    client = FakeClaudeClient(result={"isReligiousOrg": True})
    service = _service(tmp_path, stored_key="sk-stored", client=client)

    with pytest.raises(APIError, match="No domain provided"):
        service.lookup_domain(DomainLookupInput())
    with pytest.raises(APIError, match="No sample data provided"):
        service.analyze_columns(ColumnAnalysisInput(prompt="Map these"))
    with pytest.raises(APIError, match="No prompt provided"):
        service.analyze_columns(ColumnAnalysisInput(sample_data="a,b"))

    assert service.lookup_domain(DomainLookupInput(domain="stmary.org")) == {"isReligiousOrg": True}
    assert '"stmary.org"' in client.calls[0]["content"]
    assert client.calls[0]["max_tokens"] == 256

    service.analyze_columns(ColumnAnalysisInput(sample_data="a,b", prompt="Map these"))
    assert client.calls[1]["content"] == "Map these"
    assert client.calls[1]["max_tokens"] == 1024


def test_parse_signups_sends_image_with_known_ministries(tmp_path: Path) -> None:
    client = FakeClaudeClient(result={"entries": []})
    service = _service(tmp_path, stored_key="sk-stored", client=client)

    with pytest.raises(APIError, match="No image data provided"):
        service.parse_signups(SignupSheetInput())

    payload = SignupSheetInput.model_validate(
        {"imageData": "BASE64", "defaultMinistry": "Choir", "ministryNames": ["Choir", "", "Lectors"]}
    )
    assert service.parse_signups(payload) == {"entries": []}

    image, text = client.calls[0]["content"]
    assert image["source"] == {"type": "base64", "media_type": "image/jpeg", "data": "BASE64"}
    assert 'Default ministry if not identifiable: "Choir"' in text["text"]
    assert "Known ministry names: Choir, Lectors" in text["text"]
    assert client.calls[0]["max_tokens"] == 4096


def test_enrich_booklet_and_spreadsheet(tmp_path: Path) -> None:
    client = FakeClaudeClient()
    service = _service(tmp_path, stored_key="sk-stored", client=client)
    existing = [{"name": "Choir", "description": "Sings at Mass"}]

    service.enrich(EnrichInput(source_type="booklet", file_data="PDFDATA", existing_ministries=existing))
    service.enrich(
        EnrichInput(source_type="booklet", file_data="IMG", media_type="image/png", existing_ministries=existing)
    )
    service.enrich(EnrichInput(source_type="spreadsheet", sample_data="Name,About\nChoir,Sings"))

    assert client.calls[0]["content"][0]["type"] == "document"
    assert "- Choir (Sings at Mass...)" in client.calls[0]["content"][1]["text"]
    assert client.calls[1]["content"][0]["type"] == "image"
    assert "SUPPLEMENTARY SPREADSHEET DATA:\nName,About\nChoir,Sings" in client.calls[2]["content"]

    with pytest.raises(APIError, match="No file data provided"):
        service.enrich(EnrichInput(source_type="booklet"))
    with pytest.raises(APIError, match="No spreadsheet data provided"):
        service.enrich(EnrichInput(source_type="spreadsheet"))
    with pytest.raises(APIError, match="Unknown sourceType: website"):
        service.enrich(EnrichInput(source_type="website"))


def test_upstream_failures_become_bad_gateway(tmp_path: Path) -> None:
    service = _service(tmp_path, stored_key="sk-stored", client=FakeClaudeClient(error="Claude API returned 500"))

    with pytest.raises(APIError) as excinfo:
        service.lookup_domain(DomainLookupInput(domain="stmary.org"))

    assert excinfo.value.status_code == 502
    assert excinfo.value.error_code == "AI_UPSTREAM_ERROR"
    assert excinfo.value.message == "Claude API returned 500"


def test_prompt_helpers() -> None:
    assert format_ministry_list([{"name": "Choir"}, {"name": "Youth", "description": "x" * 70}]) == (
        "- Choir\n- Youth (" + "x" * 60 + "...)"
    )
    assert file_block("DATA", "application/pdf")["type"] == "document"
    assert file_block("DATA", "image/webp")["type"] == "image"
