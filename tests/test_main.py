"""Tests for app assembly: serving entry point and public health check."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient

from shiftlog import main
from shiftlog.core.config import settings
from shiftlog.schemas.common import HealthStatus


def test_run_serves_app_with_uvicorn():
    with patch.object(main.uvicorn, "run") as serve:
        main.run()
    serve.assert_called_once_with("shiftlog.main:app", host=settings.HOST, port=settings.PORT)


@pytest.mark.asyncio
async def test_health_reports_version_and_db(anon_client: AsyncClient):
    resp = await anon_client.get("/api/health")
    assert resp.status_code == 200
    status = HealthStatus(**resp.json()["data"])
    assert status == HealthStatus(status="OK", version=settings.VERSION, db=True)
