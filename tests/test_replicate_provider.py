from clonesome.models import JobState
from clonesome.providers.replicate_provider import parse_status


def test_parse_status_maps_in_progress_states():
    assert parse_status({"status": "starting"}).state is JobState.PENDING
    assert parse_status({"status": "processing"}).state is JobState.RUNNING
    assert not parse_status({"status": "processing"}).is_terminal


def test_parse_status_normalises_single_output_string():
    status = parse_status({"status": "succeeded", "output": "https://img.test/a.webp"})
    assert status.is_terminal
    assert status.artifacts == ["https://img.test/a.webp"]


def test_parse_status_missing_output_yields_empty_list():
    assert parse_status({"status": "succeeded", "output": None}).artifacts == []


def test_parse_status_failure_reasons():
    assert parse_status({"status": "failed", "error": "NSFW content detected"}).reason == "NSFW content detected"
    assert parse_status({"status": "failed"}).reason == "Image generation failed"
    canceled = parse_status({"status": "canceled"})
    assert canceled.state is JobState.FAILED
    assert canceled.reason == "Prediction was canceled"
