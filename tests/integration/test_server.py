"""Integration tests for the HealthBridge MCP server."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone

import pytest
from fastmcp import Client

from healthbridge.core.server.app import create_app
from healthbridge.domains.health.connectors.in_memory import InMemoryHealthAdapter
from healthbridge.domains.health.models import HeartRateData
from healthbridge.domains.health.taxonomy.data_types import HealthDataType, Platform
from healthbridge.domains.health.taxonomy.permissions import AccessType, Permission


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


ALL_EXPECTED_TOOLS = [
    "health_check",
    "data_type_capabilities",
    "available_permissions",
    "request_health_permissions",
    "read_latest_health_data",
    "detect_fhir_resource_type",
    "parse_fhir_resources",
]


def _payload(result) -> dict:
    return json.loads(result.content[0].text)


@pytest.fixture
def adapter() -> InMemoryHealthAdapter:
    adapter = InMemoryHealthAdapter(Platform.IOS)
    adapter.grant(Permission(HealthDataType.HEART_RATE, AccessType.READ))
    return adapter


@pytest.fixture
def client(adapter):
    """Create an MCP client connected to a server over the given adapter."""
    return Client(create_app(adapter_override=adapter))


def test_server_starts_and_lists_tools(client):
    """Server should start and expose all registered tools."""
    async def _check():
        async with client:
            tools = await client.list_tools()
            tool_names = [t.name for t in tools]
            for expected in ALL_EXPECTED_TOOLS:
                assert expected in tool_names, f"Missing tool: {expected}"
    _run(_check())


def test_health_check_returns_ok(client):
    async def _check():
        async with client:
            result = await client.call_tool("health_check", {})
            result_text = str(result)
            assert "ok" in result_text
            assert "Immunization" in result_text
    _run(_check())


def test_default_adapter_follows_settings(monkeypatch):
    monkeypatch.setenv("HB_PLATFORM", "android")

    async def _check():
        async with Client(create_app()) as client:
            result = await client.call_tool("health_check", {})
            assert "android" in str(result)
    _run(_check())


def test_capabilities_for_single_type(client):
    async def _check():
        async with client:
            result = await client.call_tool(
                "data_type_capabilities", {"platform": "android", "data_type": "WalkingSpeed"}
            )
            return _payload(result)

    payload = _run(_check())
    assert payload["status"] == "ok"
    assert payload["capabilities"] == [{
        "data_type": "WalkingSpeed", "can_read": False, "can_write": False, "notes": None,
    }]
    assert payload["profile"]["supports_live_workout_metrics"] is False


def test_capabilities_unknown_platform(client):
    async def _check():
        async with client:
            return _payload(await client.call_tool("data_type_capabilities", {"platform": "tizen"}))

    assert _run(_check())["status"] == "error"


def test_available_permissions(client):
    async def _check():
        async with client:
            result = await client.call_tool(
                "available_permissions", {"data_types": ["HeartRate", "WalkingSpeed", "Mood"]}
            )
            return _payload(result)

    payload = _run(_check())
    assert payload["platform"] == "ios"
    assert payload["permissions"] == ["HeartRate:READ", "HeartRate:WRITE", "WalkingSpeed:READ"]
    assert payload["unknown_data_types"] == ["Mood"]


def test_read_latest_health_data(client, adapter):
    _run(adapter.write(HeartRateData(timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc), bpm=58)))

    async def _check():
        async with client:
            return _payload(await client.call_tool("read_latest_health_data", {"data_type": "HeartRate"}))

    payload = _run(_check())
    assert payload["status"] == "ok"
    assert payload["record_type"] == "HeartRateData"
    assert payload["data"]["bpm"] == 58
    assert payload["data"]["timestamp"] == "2024-05-01T00:00:00+00:00"


def test_read_latest_without_permission(client):
    async def _check():
        async with client:
            return _payload(await client.call_tool("read_latest_health_data", {"data_type": "Steps"}))

    payload = _run(_check())
    assert payload["status"] == "error"
    assert payload["error_type"] == "PermissionDeniedError"


def test_read_latest_no_data(client):
    async def _check():
        async with client:
            return _payload(await client.call_tool("read_latest_health_data", {"data_type": "HeartRate"}))

    assert _run(_check())["status"] == "no_data"


def test_detect_fhir_resource_type(client):
    async def _check():
        async with client:
            found = await client.call_tool(
                "detect_fhir_resource_type", {"document": '{"resourceType": "Patient"}'}
            )
            missing = await client.call_tool("detect_fhir_resource_type", {"document": "{oops"})
            return _payload(found), _payload(missing)

    found, missing = _run(_check())
    assert found == {"status": "ok", "resource_type": "Patient", "supported": False}
    assert missing["status"] == "not_found"


def test_parse_fhir_resources(client, immunization_doc, condition_doc):
    documents = [
        json.dumps(immunization_doc),
        "{garbage",
        '{"resourceType": "Patient"}',
        json.dumps(condition_doc),
    ]

    async def _check():
        async with client:
            return _payload(await client.call_tool("parse_fhir_resources", {"documents": documents}))

    payload = _run(_check())
    assert payload["parsed_count"] == 2
    assert payload["skipped_count"] == 1
    assert [r["resourceType"] for r in payload["resources"]] == ["Immunization", "Condition"]
    assert payload["errors"][0]["index"] == 1
    assert payload["errors"][0]["input_preview"] == "{garbage"


def test_request_then_read_without_manual_grant():
    adapter = InMemoryHealthAdapter(
        Platform.IOS,
        points=[HeartRateData(timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc), bpm=61)],
    )

    async def _check():
        async with Client(create_app(adapter_override=adapter)) as client:
            before = _payload(
                await client.call_tool("read_latest_health_data", {"data_type": "HeartRate"})
            )
            granted = _payload(
                await client.call_tool(
                    "request_health_permissions", {"data_types": ["HeartRate", "Mood"]}
                )
            )
            after = _payload(
                await client.call_tool("read_latest_health_data", {"data_type": "HeartRate"})
            )
            return before, granted, after

    before, granted, after = _run(_check())
    assert before["error_type"] == "PermissionDeniedError"
    assert granted["status"] == "ok"
    assert granted["permission_status"] == "granted"
    assert granted["granted"] == ["HeartRate:READ", "HeartRate:WRITE"]
    assert granted["denied"] == []
    assert granted["unknown_data_types"] == ["Mood"]
    assert after["status"] == "ok"
    assert after["data"]["bpm"] == 61


def test_request_permissions_partially_denied():
    adapter = InMemoryHealthAdapter(Platform.IOS, grant_all=False)
    adapter.grant(Permission(HealthDataType.STEPS, AccessType.READ))

    async def _check():
        async with Client(create_app(adapter_override=adapter)) as client:
            return _payload(
                await client.call_tool("request_health_permissions", {"data_types": ["Steps"]})
            )

    payload = _run(_check())
    assert payload["permission_status"] == "partially_granted"
    assert payload["granted"] == ["Steps:READ"]
    assert payload["denied"] == ["Steps:WRITE"]
