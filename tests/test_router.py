from fastapi.testclient import TestClient

PLAYERS = ["Ana", "Ben", "Carla", "Dani"]


def _create(client: TestClient, **overrides):
    payload = {
        "name": "Friday Padel",
        "tournamentType": "americano",
        "numberOfCourts": 1,
        "players": PLAYERS,
        "scoringOption": "points",
        "targetValue": 21,
    }
    payload.update(overrides)
    return client.post("/tournaments", json=payload)


class TestCreateTournament:

    def test_create_success(self, client: TestClient):
        response = _create(client, players=["  Ana ", "Ben", "", "Carla", "Dani"])
        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["players"] == PLAYERS
        assert data["rounds"] == []

    def test_target_defaults_per_scoring_option(self, client: TestClient):
        response = _create(client, scoringOption="sets", targetValue=None)
        assert response.status_code == 201
        assert response.json()["targetValue"] == 3

    def test_validation_errors(self, client: TestClient):
        assert _create(client, name="   ").status_code == 422
        assert _create(client, players=["Ana", " "]).status_code == 422
        assert _create(client, players=["Ana", "Ana"]).status_code == 422
        assert _create(client, numberOfCourts=11).status_code == 422
        assert _create(client, scoringOption="sets", targetValue=7).status_code == 422
        assert _create(client, targetValue=0).status_code == 422

    def test_list_and_clear(self, client: TestClient):
        _create(client)
        _create(client, name="Sunday")
        listed = client.get("/tournaments").json()
        assert [t["name"] for t in listed] == ["Friday Padel", "Sunday"]

        assert client.delete("/tournaments").status_code == 204
        assert client.get("/tournaments").json() == []


class TestTournamentView:

    def test_unknown_tournament(self, client: TestClient):
        assert client.get("/tournaments/missing").status_code == 404
        assert client.head("/tournaments/missing").status_code == 404

    def test_head(self, client: TestClient):
        tid = _create(client).json()["id"]
        assert client.head(f"/tournaments/{tid}").status_code == 200

    def test_first_view_generates_round_one_once(self, client: TestClient):
        tid = _create(client).json()["id"]

        first = client.get(f"/tournaments/{tid}").json()
        second = client.get(f"/tournaments/{tid}").json()

        rounds = first["tournament"]["rounds"]
        assert [r["round"] for r in rounds] == [1]
        assert second["tournament"]["rounds"] == rounds
        assert first["enoughPlayers"] is True
        assert first["hasPlayedMatches"] is False
        assert [row["points"] for row in first["standings"]] == [0, 0, 0, 0]

    def test_not_enough_players(self, client: TestClient):
        tid = _create(client, players=["Ana", "Ben", "Carla"]).json()["id"]
        data = client.get(f"/tournaments/{tid}").json()
        assert data["tournament"]["rounds"] == []
        assert data["enoughPlayers"] is False

        response = client.post(f"/tournaments/{tid}/rounds")
        assert response.status_code == 409
        assert client.get(f"/tournaments/{tid}").json()["tournament"]["rounds"] == []


class TestScoring:

    def _first_match(self, client: TestClient):
        tid = _create(client).json()["id"]
        match = client.get(f"/tournaments/{tid}").json()["tournament"]["rounds"][0]["matches"][0]
        return tid, match

    def test_submit_score(self, client: TestClient):
        tid, match = self._first_match(client)

        response = client.post(f"/tournaments/{tid}/matches/{match['id']}/score", json={"score1": 21})
        assert response.status_code == 200
        assert response.json()["score2"] == 0
        assert response.json()["status"] == "completed"

        standings = client.get(f"/tournaments/{tid}/standings").json()
        assert {row["name"] for row in standings[:2]} == set(match["team1"])
        assert [row["points"] for row in standings] == [21, 21, 0, 0]

    def test_no_score_is_a_no_op(self, client: TestClient):
        tid, match = self._first_match(client)
        response = client.post(f"/tournaments/{tid}/matches/{match['id']}/score", json={})
        assert response.status_code == 200
        assert response.json()["status"] == "upcoming"

    def test_error_responses(self, client: TestClient):
        tid, match = self._first_match(client)
        url = f"/tournaments/{tid}/matches/{match['id']}/score"

        assert client.post(url, json={"score1": 30}).status_code == 422
        assert client.post(f"/tournaments/{tid}/matches/nope/score", json={"score1": 3}).status_code == 404
        assert client.post(f"/tournaments/{tid}/matches/nope/score", json={}).status_code == 404
        assert client.post(url, json={"score1": 11}).status_code == 200
        assert client.post(url, json={"score1": 12}).status_code == 409


class TestRoundsAndPlayers:

    def test_generate_next_round(self, client: TestClient):
        tid = _create(client).json()["id"]
        client.get(f"/tournaments/{tid}")

        response = client.post(f"/tournaments/{tid}/rounds")
        assert response.status_code == 201
        assert response.json()["round"] == 2

        rounds = client.get(f"/tournaments/{tid}").json()["tournament"]["rounds"]
        assert [r["round"] for r in rounds] == [1, 2]

    def test_mexicano_second_round_follows_standings(self, client: TestClient):
        players = ["P1", "P2", "P3", "P4", "P5", "P6", "P7", "P8"]
        tid = _create(client, tournamentType="mexicano", numberOfCourts=2, players=players).json()["id"]
        matches = client.get(f"/tournaments/{tid}").json()["tournament"]["rounds"][0]["matches"]
        client.post(f"/tournaments/{tid}/matches/{matches[0]['id']}/score", json={"score1": 21})
        client.post(f"/tournaments/{tid}/matches/{matches[1]['id']}/score", json={"score1": 15})

        ranked = [row["name"] for row in client.get(f"/tournaments/{tid}/standings").json()]
        new_round = client.post(f"/tournaments/{tid}/rounds").json()

        court1, court2 = new_round["matches"]
        assert court1["team1"] == [ranked[0], ranked[3]]
        assert court1["team2"] == [ranked[1], ranked[2]]
        assert court2["team1"] == [ranked[4], ranked[7]]
        assert court2["team2"] == [ranked[5], ranked[6]]

    def test_edit_players(self, client: TestClient):
        tid = _create(client).json()["id"]
        client.get(f"/tournaments/{tid}")

        response = client.put(f"/tournaments/{tid}/players", json={"players": ["Ana", "Ben", " Eva "]})
        assert response.status_code == 200
        data = response.json()
        assert data["tournament"]["players"] == ["Ana", "Ben", "Eva"]
        assert len(data["tournament"]["rounds"]) == 1
        assert data["enoughPlayers"] is False

        assert client.post(f"/tournaments/{tid}/rounds").status_code == 409
        assert client.put(f"/tournaments/{tid}/players", json={"players": ["Ana"]}).status_code == 422

    def test_edit_players_rejects_duplicates(self, client: TestClient):
        tid = _create(client).json()["id"]
        client.get(f"/tournaments/{tid}")

        response = client.put(f"/tournaments/{tid}/players", json={"players": ["Ana", "Ana ", "Ben", "Carla"]})
        assert response.status_code == 422

        data = client.get(f"/tournaments/{tid}").json()
        assert data["tournament"]["players"] == PLAYERS

        new_round = client.post(f"/tournaments/{tid}/rounds").json()
        for match in new_round["matches"]:
            assert not set(match["team1"]) & set(match["team2"])

    def test_summary_and_delete(self, client: TestClient):
        tid = _create(client).json()["id"]
        match = client.get(f"/tournaments/{tid}").json()["tournament"]["rounds"][0]["matches"][0]
        client.post(f"/tournaments/{tid}/matches/{match['id']}/score", json={"score1": 5})

        summary = client.get(f"/tournaments/{tid}/summary").json()
        assert summary["totalRounds"] == 1
        assert summary["completedMatches"] == 1
        assert len(summary["podium"]) == 3
        assert summary["podium"][0]["points"] == 16

        assert client.delete(f"/tournaments/{tid}").status_code == 204
        assert client.get(f"/tournaments/{tid}").status_code == 404
        assert client.delete(f"/tournaments/{tid}").status_code == 404
