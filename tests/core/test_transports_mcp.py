"""Tests for ``hipaa_guardian.core.transports.mcp``: MCP server scaffold."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import mcp.types as types
import pytest
from mcp.server.lowlevel import Server
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.testclient import TestClient

from hipaa_guardian.core.transports.mcp import (
    HTTP_MOUNT_PATH,
    create_guardian_mcp,
    create_http_app,
    run_guardian_mcp,
)


async def _list_tools():
    return []


async def _call_tool(name, arguments):
    return []


class TestCreateGuardianMcp:
    def test_create_guardian_mcp(self):
        server = create_guardian_mcp(
            "test-guardian",
            version="9.9.9",
            instructions="Test guardian MCP server",
            list_tools=_list_tools,
            call_tool=_call_tool,
        )
        assert isinstance(server, Server)
        assert server.name == "test-guardian"
        assert server.version == "9.9.9"
        assert server.instructions == "Test guardian MCP server"

    @patch("hipaa_guardian.core.transports.mcp.Server")
    def test_handlers_registered(self, mock_server_cls):
        mock_server = MagicMock()
        mock_server_cls.return_value = mock_server

        create_guardian_mcp(
            "test",
            version="1",
            instructions="",
            list_tools=_list_tools,
            call_tool=_call_tool,
        )

        mock_server.list_tools.return_value.assert_called_once_with(_list_tools)
        mock_server.call_tool.assert_called_once_with(validate_input=False)
        mock_server.call_tool.return_value.assert_called_once_with(_call_tool)


class TestCreateHttpApp:
    def test_mounts_mcp_endpoint(self):
        server = create_guardian_mcp(
            "test", version="1", instructions="", list_tools=_list_tools, call_tool=_call_tool
        )
        app = create_http_app(server)
        assert isinstance(app, Starlette)
        assert [route.path for route in app.routes] == [HTTP_MOUNT_PATH]
        assert isinstance(app.routes[0], Route)

    @pytest.mark.integration
    def test_post_to_endpoint_without_trailing_slash(self):
        server = create_guardian_mcp(
            "test", version="1", instructions="", list_tools=_list_tools, call_tool=_call_tool
        )
        initialize = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "initialize",
            "params": {
                "protocolVersion": types.LATEST_PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": "test-client", "version": "1"},
            },
        }
        with TestClient(create_http_app(server)) as client:
            response = client.post(
                HTTP_MOUNT_PATH,
                json=initialize,
                headers={"Accept": "application/json, text/event-stream"},
                follow_redirects=False,
            )
        assert response.status_code == 200


class TestRunGuardianMcp:
    @patch("hipaa_guardian.core.transports.mcp.asyncio")
    def test_run_stdio_default(self, mock_asyncio):
        server = MagicMock()
        run_guardian_mcp(server)
        mock_asyncio.run.assert_called_once()

    @patch("hipaa_guardian.core.transports.mcp.create_http_app")
    @patch("hipaa_guardian.core.transports.mcp.uvicorn")
    def test_run_http_transport(self, mock_uvicorn, mock_create_app):
        server = MagicMock()
        run_guardian_mcp(server, transport="streamable-http", host="0.0.0.0", port=9999)

        mock_create_app.assert_called_once_with(server)
        mock_uvicorn.run.assert_called_once_with(
            mock_create_app.return_value, host="0.0.0.0", port=9999, log_level="warning"
        )

    @patch("hipaa_guardian.core.transports.mcp.create_http_app")
    @patch("hipaa_guardian.core.transports.mcp.uvicorn")
    def test_http_alias(self, mock_uvicorn, mock_create_app):
        run_guardian_mcp(MagicMock(), transport="http")
        mock_uvicorn.run.assert_called_once()
        assert mock_uvicorn.run.call_args.kwargs["port"] == 8100

    def test_unknown_transport(self):
        with pytest.raises(ValueError, match="websocket"):
            run_guardian_mcp(MagicMock(), transport="websocket")
