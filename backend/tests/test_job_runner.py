"""
Tests for the command-line job runner.
"""
from contextlib import asynccontextmanager
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.shared.core.exceptions import ConfigurationError
from src.worker import job_runner
from src.worker.job_runner import CronJobProcessor, run_job


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def processor(session):
    @asynccontextmanager
    async def factory():
        yield session

    return CronJobProcessor(session_factory=factory)


def test_job_types(processor):
    assert processor.job_types == ["publish_scheduled", "send_reminders", "submit_indexnow"]


class TestProcess:
    @pytest.mark.asyncio
    async def test_dispatches_with_job_session(self, processor, session):
        with patch.object(job_runner, "PostService") as service_cls:
            service_cls.return_value.publish_scheduled_posts = AsyncMock(
                return_value={"published": 1, "posts": []}
            )
            result = await run_job("publish_scheduled", processor)

        assert result == {"published": 1, "posts": []}
        service_cls.assert_called_once_with(session)

    @pytest.mark.asyncio
    async def test_unknown_job(self, processor):
        with pytest.raises(ValueError, match="Unknown job type: rebuild"):
            await processor.process({"job_type": "rebuild"})

    @pytest.mark.asyncio
    async def test_failure_propagates(self, processor):
        with patch.object(job_runner, "AssignmentService") as service_cls:
            service_cls.return_value.send_deadline_reminders = AsyncMock(side_effect=RuntimeError("boom"))
            with pytest.raises(RuntimeError):
                await run_job("send_reminders", processor)


class TestMain:
    def test_prints_result(self, capsys):
        with patch.object(job_runner, "run_job", AsyncMock(return_value={"success": True, "sent": 2})):
            code = job_runner.main(["send_reminders"])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {"success": True, "sent": 2}

    def test_application_error_exit_code(self, capsys):
        error = ConfigurationError("IndexNow key not configured")
        with patch.object(job_runner, "run_job", AsyncMock(side_effect=error)):
            code = job_runner.main(["submit_indexnow"])

        assert code == 1
        payload = json.loads(capsys.readouterr().err)
        assert payload["error"]["code"] == "CONFIGURATION_ERROR"

    def test_rejects_unknown_job(self):
        with pytest.raises(SystemExit):
            job_runner.main(["rebuild"])
