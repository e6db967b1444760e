from __future__ import annotations

from web import create_app


def main() -> None:
    app = create_app({"OPPONENT_DELAY_MS": 300})
    client = app.test_client()

    # new game
    resp = client.post("/api/new", json={"difficulty": "amateur"})
    assert resp.status_code == 200, resp.data
    data = resp.get_json()
    assert "fen" in data and "legal_moves" in data

    # make a move, then let the computer reply as the browser would after the delay
    resp = client.post("/api/move", json={"from": "e2", "to": "e4"})
    assert resp.status_code == 200, resp.data
    assert resp.get_json()["phase"] == "applying_opponent_move"

    resp = client.post("/api/opponent")
    assert resp.status_code == 200, resp.data
    data = resp.get_json()
    assert data["ai_move"]

    resp = client.post("/api/hint")
    assert resp.status_code == 200, resp.data
    print("Smoke OK. AI replied:", data["ai_move"], "hint:", resp.get_json()["hint"]["san"])


if __name__ == "__main__":
    main()
