from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from explainer.core import InvalidInput
from explainer.main import app
from explainer.models import FinalArtifact, JobStatus, JobSubmission
from explainer.services.infrastructure.orchestration import Job, JobQueue

client = TestClient(app)


@pytest.fixture
def mock_queue():
    queue = MagicMock()
    with patch("explainer.routes.jobs.get_job_queue", return_value=queue):
        yield queue


def test_create_job_returns_id(mock_queue):
    mock_queue.submit.return_value = "job-123"

    response = client.post("/jobs", json={"topic": "Entropy", "quality": "high", "skipCleanup": True})

    assert response.status_code == 200
    assert response.json() == {"jobId": "job-123"}
    submission = mock_queue.submit.call_args[0][0]
    assert submission.topic == "Entropy"
    assert submission.skip_cleanup is True


def test_create_job_invalid_input_is_400(mock_queue):
    mock_queue.submit.side_effect = InvalidInput("Prompt is required and must be a non-empty string")

    response = client.post("/jobs", json={"topic": "   "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Prompt is required and must be a non-empty string"


def test_get_job(mock_queue):
    job = Job(id="job-1", input=JobSubmission(topic="Entropy"), status=JobStatus.FAILED,
              error="Planning failed: boom", error_type="PlanningFailed")
    mock_queue.get_status.return_value = job

    response = client.get("/jobs/job-1")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "failed"
    assert data["error_type"] == "PlanningFailed"
    assert data["input"]["topic"] == "Entropy"


def test_get_unknown_job_is_404(mock_queue):
    mock_queue.get_status.return_value = None

    response = client.get("/jobs/missing")

    assert response.status_code == 404
    assert response.json() == {"detail": "Job not found"}


def test_list_jobs(mock_queue):
    mock_queue.list_jobs.return_value = [
        Job(id="a", input=JobSubmission(topic="one")),
        Job(id="b", input=JobSubmission(topic="two"), status=JobStatus.RUNNING),
    ]

    response = client.get("/jobs")

    assert [j["id"] for j in response.json()] == ["a", "b"]
    assert response.json()[1]["status"] == "running"


def test_health_always_ok():
    with patch("explainer.main.runtime_tool_report", return_value={"manim": False, "ffmpeg": True, "ffprobe": True}):
        response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["tools"]["manim"] is False
    assert "time" in data


def test_request_id_echoed():
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert client.get("/").headers["X-Request-ID"]


def test_end_to_end_with_real_queue():
    async def runner(submission):
        return FinalArtifact(final_path="/out/f.mp4", project_root="/out", layout={},
                             duration_seconds=9.0, title=submission.topic, scene_class="S", attempts=1)

    queue = JobQueue(runner)
    with patch("explainer.routes.jobs.get_job_queue", return_value=queue), TestClient(app) as live_client:
        job_id = live_client.post("/jobs", json={"topic": "Fourier"}).json()["jobId"]
        assert live_client.post("/jobs", json={"topic": ""}).status_code == 400

        live_client.portal.call(queue.drain)

        job = live_client.get(f"/jobs/{job_id}").json()
        assert job["status"] == "completed"
        assert job["result"]["duration_seconds"] == 9.0
        assert len(live_client.get("/jobs").json()) == 1
