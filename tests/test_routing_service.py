import pytest

from core.exceptions import RouteNotFound
from core.headers import HeaderBuilder
from core.router import PrefixRouter
from services.routing_service import RoutingService


@pytest.fixture
def service(recorder):
    return RoutingService(recorder, PrefixRouter(), HeaderBuilder(recorder))


def test_prepare_builds_target_and_headers(service, recorder):
    prepared = service.prepare(
        "POST",
        "/huggingface/models/gpt2",
        "wait_for_model=true",
        {"Authorization": "Bearer hf_abc", "Cookie": "x=1"},
    )

    assert prepared.prefix == "/huggingface"
    assert prepared.method == "POST"
    assert prepared.target_url == (
        "https://api-inference.huggingface.co/models/gpt2?wait_for_model=true"
    )
    assert prepared.headers == {"Authorization": "Bearer hf_abc"}
    assert recorder.of_kind("header") == [("Authorization", "***")]
    assert recorder.of_kind("forward") == [("/huggingface", prepared.target_url)]


def test_prepare_unknown_path_raises(service, recorder):
    with pytest.raises(RouteNotFound) as exc_info:
        service.prepare("GET", "/gemini-pro/v1", "", {})

    assert exc_info.value.path == "/gemini-pro/v1"
    assert recorder.events == []
