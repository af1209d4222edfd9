from fastapi.testclient import TestClient

from mjtools.main import app


client = TestClient(app)


def valid_payload() -> dict:
    return {
        "hand": {
            "closed_tiles": "23467m567p234s99s",
            "melds": [],
            "win_tile": "8m",
        },
        "context": {
            "seat_wind": "S",
            "round_wind": "E",
            "tsumo": False,
            "riichi": True,
            "dora_indicators": "1m",
            "honba": 1,
            "riichi_sticks": 0,
        },
    }


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_lists_endpoints():
    assert client.get("/").json()["docs"] == "/docs"


def test_shanten_endpoint():
    response = client.post("/api/v1/shanten", json={"hand": "123m456p789s東東東白"})
    assert response.status_code == 200
    body = response.json()
    assert body["shanten"] == 0
    assert body["normal"] == 0
    assert body["effective_tiles"] == ["白"]


def test_shanten_endpoint_variant():
    response = client.post("/api/v1/shanten", json={"hand": "19m19p19s東南西北白発中", "variant": "kokushi"})
    body = response.json()
    assert body["kokushi"] == 0
    assert len(body["effective_tiles"]) == 13


def test_shanten_endpoint_complete_hand_has_no_effective_tiles():
    body = client.post("/api/v1/shanten", json={"hand": "123m456p789s東東東白白"}).json()
    assert body["shanten"] == -1
    assert body["effective_tiles"] == []


def test_shanten_endpoint_rejects_bad_notation():
    response = client.post("/api/v1/shanten", json={"hand": "12x"})
    assert response.status_code == 422


def test_shanten_endpoint_rejects_a_fifth_copy():
    response = client.post("/api/v1/shanten", json={"hand": "11111m"})
    assert response.status_code == 422


def test_score_endpoint_success():
    response = client.post("/api/v1/score", json=valid_payload())
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    result = body["result"]
    assert result["han"] == 3
    assert result["fu"] == 30
    assert {item["name"] for item in result["yaku"]} == {"立直", "平和", "ドラ"}
    assert result["points"]["ron"] == 3900
    assert result["payments"]["honba_bonus"] == 300
    assert result["payments"]["total_received"] == 4200


def test_score_endpoint_uses_request_rules():
    payload = valid_payload()
    payload["context"]["dora_indicators"] = "1m4p"
    payload["rules"] = {"mangan_roundup": True}
    result = client.post("/api/v1/score", json=payload).json()["result"]
    assert result["han"] == 4
    assert result["points"]["ron"] == 8000


def test_score_endpoint_validation_error():
    payload = valid_payload()
    payload["hand"]["closed_tiles"] = "23467m567p234s9s"
    response = client.post("/api/v1/score", json=payload)
    assert response.status_code == 422
    assert "Total tiles must be 14" in response.text


def test_score_endpoint_no_yaku():
    payload = valid_payload()
    payload["hand"] = {
        "closed_tiles": "234m678m567p9s",
        "melds": [{"type": "chi", "tiles": "123s"}],
        "win_tile": "9s",
    }
    payload["context"]["riichi"] = False
    response = client.post("/api/v1/score", json=payload)
    assert response.status_code == 422
    assert "No yaku" in response.text
