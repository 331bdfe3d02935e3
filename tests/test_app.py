from pathlib import Path

from fastapi.testclient import TestClient

from haiku_worker.app.main import create_app
from haiku_worker.app.settings import Settings


def _settings(tmp_path: Path, body: str, **overrides: object) -> Settings:
    lexicon_path = tmp_path / "dictionary.txt"
    lexicon_path.write_text(body, encoding="utf-8")
    return Settings(lexicon_path=lexicon_path, **overrides)


TINY = "cat | NOUN\nran | VERB\nred | ADJECTIVE\nfast | ADVERB\nby | PREPOSITION\nthe | ARTICLE\n"


def test_create_app() -> None:
    app = create_app()
    assert app.title == "Haiku Worker"
    assert app.state.lexicon.size() > 0


def test_health_endpoint(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, TINY))
    with TestClient(app) as client:
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["lexicon_size"] == 6
        assert body["part_of_speech_counts"]["NOUN"] == 1
        assert body["syllable_pattern"] == [5, 7, 5]


def test_haiku_endpoint_is_seeded(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, TINY, max_attempts=5000))
    with TestClient(app) as client:
        first = client.post("/haiku", json={"seed": 11})
        second = client.post("/haiku", json={"seed": 11})
    assert first.status_code == 200
    body = first.json()
    assert body["seed"] == 11
    assert [line["syllables"] for line in body["lines"]] == [5, 7, 5]
    assert body["text"].count("\n") == 2
    assert second.json()["text"] == body["text"]


def test_haiku_endpoint_reports_exhaustion(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, "ran | VERB\nthe | ARTICLE\n"))
    with TestClient(app) as client:
        response = client.post("/haiku", json={"max_attempts": 5})
    assert response.status_code == 503
    assert "5 attempts" in response.json()["detail"]


def test_haiku_endpoint_validates_payload(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, TINY))
    with TestClient(app) as client:
        response = client.post("/haiku", json={"max_attempts": 0})
    assert response.status_code == 422


def test_syllable_endpoint(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, TINY))
    with TestClient(app) as client:
        known = client.get("/syllables/cat").json()
        unknown = client.get("/syllables/canyon").json()
    assert known == {"word": "cat", "syllables": 1, "part_of_speech": "NOUN"}
    assert unknown["syllables"] == 2
    assert unknown["part_of_speech"] is None


def test_lexicon_endpoint(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, TINY + "river | NOUN\n"))
    with TestClient(app) as client:
        all_nouns = client.get("/lexicon/NOUN").json()
        short = client.get("/lexicon/NOUN", params={"min_syllables": 1, "max_syllables": 1})
        blank = client.get("/lexicon/BLANK")
        inverted = client.get("/lexicon/NOUN", params={"min_syllables": 3, "max_syllables": 1})
    assert all_nouns["words"] == ["cat", "river"]
    assert short.json()["words"] == ["cat"]
    assert blank.status_code == 404
    assert inverted.status_code == 422
