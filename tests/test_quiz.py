import pytest

from api.error_utils import UpstreamServiceError
from api.quiz import QUIZ_CATALOG, pick_samples, placeholder_url
from fakes import FakeGeminiService

BINS = {"Blanco (Aprovechables)", "Verde (Orgánicos)", "Negro (No Aprovechables)"}


def test_single_item_without_count(client, fake_service):
    response = client.get("/api/create")

    assert response.status_code == 200
    body = response.get_json()
    assert isinstance(body, dict)
    assert body["imageUrl"] == "data:image/png;base64,AAAA"
    assert body["wasteName"] == "Botella de plástico"
    assert body["correctContainer"] == "Blanco (Aprovechables)"
    assert body["justification"]
    assert fake_service.calls == [("generate_image", QUIZ_CATALOG[0].image_subject)]


def test_count_returns_list(client, fake_service):
    response = client.get("/api/create?count=3")

    assert response.status_code == 200
    body = response.get_json()
    assert [item["wasteName"] for item in body] == ["Botella de plástico", "Cáscara de banano", "Lata de aluminio"]
    assert [item["correctContainer"] for item in body] == [
        "Blanco (Aprovechables)", "Verde (Orgánicos)", "Blanco (Aprovechables)",
    ]
    assert len(fake_service.calls) == 3


def test_missing_image_in_response_uses_placeholder(make_client):
    client = make_client(FakeGeminiService(image_url=None))

    body = client.get("/api/create?count=2").get_json()

    assert body[0]["imageUrl"] == "https://placehold.co/400x400/png?text=Botella"
    assert body[1]["imageUrl"] == "https://placehold.co/400x400/png?text=Banano"
    assert body[0]["wasteName"] == "Botella de plástico"


def test_upstream_failure_falls_back_to_placeholders(make_client):
    service = FakeGeminiService(error=UpstreamServiceError(details="403 PERMISSION_DENIED"))
    client = make_client(service)

    response = client.get("/api/create?count=3")

    assert response.status_code == 200
    body = response.get_json()
    assert len(body) == 3
    assert all(item["imageUrl"].startswith("https://placehold.co/") for item in body)
    assert all(item["wasteName"].endswith("(Fallback)") for item in body)
    assert all(item["correctContainer"] in BINS for item in body)
    # Generation stops at the first failure
    assert len(service.calls) == 1


def test_upstream_failure_single_item(make_client):
    client = make_client(FakeGeminiService(error=UpstreamServiceError()))

    body = client.get("/api/create").get_json()

    assert body["wasteName"] == "Botella de plástico (Fallback)"
    assert body["correctContainer"] == "Blanco (Aprovechables)"


@pytest.mark.parametrize("count", ["0", "11", "tres", "-1"])
def test_invalid_count_is_rejected(client, count):
    response = client.get(f"/api/create?count={count}")

    assert response.status_code == 400
    assert response.get_json()["error_code"] == "VALIDATION_ERROR"


def test_questions_strategy_keeps_only_known_bins(make_client):
    service = FakeGeminiService(questions=[
        {"wasteName": "Periódico", "correctContainer": "Blanco (Aprovechables)", "justification": "Papel limpio."},
        {"wasteName": "Pila", "correctContainer": "Rojo (Peligrosos)", "justification": "Residuo peligroso."},
        {"wasteName": "Restos de arroz", "correctContainer": "Verde (Orgánicos)"},
    ])
    client = make_client(service, QUIZ_STRATEGY="questions")

    body = client.get("/api/create?count=3").get_json()

    assert [item["wasteName"] for item in body] == ["Periódico", "Restos de arroz"]
    assert body[0]["imageUrl"] == placeholder_url("Periódico")
    assert body[0]["justification"] == "Papel limpio."
    assert "justification" in body[1] and body[1]["justification"] is None
    assert service.calls == [("generate_questions", 3)]


def test_questions_strategy_falls_back_when_nothing_usable(make_client):
    service = FakeGeminiService(questions=[
        {"wasteName": "Pila", "correctContainer": "Rojo (Peligrosos)"},
    ])
    client = make_client(service, QUIZ_STRATEGY="questions")

    body = client.get("/api/create?count=2").get_json()

    assert len(body) == 2
    assert all(item["wasteName"].endswith("(Fallback)") for item in body)


def test_questions_strategy_falls_back_on_upstream_error(make_client):
    client = make_client(FakeGeminiService(error=UpstreamServiceError()), QUIZ_STRATEGY="questions")

    body = client.get("/api/create").get_json()

    assert body["imageUrl"].startswith("https://placehold.co/")


def test_pick_samples_cycles_catalog():
    samples = pick_samples(len(QUIZ_CATALOG) + 2)

    assert samples[len(QUIZ_CATALOG)] == QUIZ_CATALOG[0]
    assert samples[-1] == QUIZ_CATALOG[1]


def test_catalog_uses_known_bins():
    assert {sample.container for sample in QUIZ_CATALOG} == BINS
