import pytest

from clarity.seed import load_seed_data, main, seed
from clarity.storage.prompts_db import PromptStore
from clarity.storage.questions_db import QuestionStore, parse_option
from clarity.prompting import DEFAULT_PROMPT_TEMPLATE, TEMPLATE_KEY


@pytest.fixture
def seeded(settings):
    seed(settings.db_path)
    return settings


def test_parse_option():
    choice = parse_option("burden_atlas|The Atlas|Booked, responsible, carrying everyone")
    assert choice.value == "burden_atlas"
    assert choice.title == "The Atlas"
    assert choice.label == "The Atlas — Booked, responsible, carrying everyone"

    plain = parse_option("Just words")
    assert plain.value == plain.title == plain.label == "Just words"
    assert plain.description == ""


class TestSeed:
    def test_dry_run_writes_nothing(self, tmp_path):
        db = tmp_path / "dry.db"
        assert seed(str(db), dry_run=True) == 10
        assert not db.exists()

    def test_seed_data_shape(self):
        data = load_seed_data()
        assert data["prompt_key"] == TEMPLATE_KEY
        assert [q["order"] for q in data["questions"]] == list(range(1, 11))
        assert all(len(q["options"]) >= 2 for q in data["questions"])

    def test_reseeding_replaces_category(self, settings):
        seed(settings.db_path)
        seed(settings.db_path)
        store = QuestionStore(settings.db_path)
        assert len(store.by_category("turning_of_year")) == 10

    def test_prompt_is_stored(self, settings):
        seed(settings.db_path)
        assert PromptStore(settings.db_path).get_template(TEMPLATE_KEY) == DEFAULT_PROMPT_TEMPLATE

    def test_cli(self, tmp_path, capsys):
        db = tmp_path / "cli.db"
        assert main(["--db", str(db)]) == 0
        assert "Seeded 10 questions" in capsys.readouterr().out
        assert len(QuestionStore(str(db)).list_questions()) == 10


class TestQuestionRoutes:
    def test_list_is_ordered(self, client, seeded):
        data = client.get("/api/questions").json()
        assert [q["order"] for q in data] == list(range(1, 11))
        first = data[0]
        assert first["text"].startswith("I — The Burden")
        assert first["choices"][0]["label"] == "The Atlas — Booked, responsible, carrying everyone"
        assert first["createdAt"]

    def test_category_is_newest_order_first(self, client, seeded):
        data = client.get("/api/questions/category/turning_of_year").json()
        assert [q["order"] for q in data] == list(range(10, 0, -1))
        assert client.get("/api/questions/category/nothing").json() == []

    def test_crud(self, client):
        r = client.post(
            "/api/questions",
            json={"text": "How do you recharge?", "options": ["solo|Solo|Quiet time", "crowd|Crowd"], "order": 3},
        )
        assert r.status_code == 201
        created = r.json()
        qid = created["id"]
        assert created["category"] is None
        assert [c["label"] for c in created["choices"]] == ["Solo — Quiet time", "Crowd"]

        r = client.patch(f"/api/questions/{qid}", json={"text": "How do you really recharge?", "category": "energy"})
        assert r.status_code == 200
        updated = r.json()
        assert updated["text"] == "How do you really recharge?"
        assert updated["category"] == "energy"
        assert updated["order"] == 3
        assert updated["options"] == created["options"]

        assert client.get(f"/api/questions/{qid}").json()["text"] == "How do you really recharge?"
        assert client.delete(f"/api/questions/{qid}").json() == {"ok": True}
        assert client.get(f"/api/questions/{qid}").status_code == 404

    def test_unknown_ids_are_404(self, client):
        assert client.get("/api/questions/missing").status_code == 404
        assert client.patch("/api/questions/missing", json={"order": 2}).status_code == 404
        assert client.delete("/api/questions/missing").status_code == 404

    def test_needs_two_options(self, client):
        r = client.post("/api/questions", json={"text": "Lonely?", "options": ["only"], "order": 1})
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid request data"
