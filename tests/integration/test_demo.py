from lexical_rag import demo
from lexical_rag.agent.completion import create_chat_model
from lexical_rag.config import Settings


def _clear_model_env(monkeypatch) -> None:
    # Empty process variables take precedence over a local .env file.
    for name in ("ARK_API_KEY", "ARK_BASE_URL", "ARK_MODEL", "LEXICAL_RAG_CORPUS_PATH"):
        monkeypatch.setenv(name, "")
    monkeypatch.setenv("LEXICAL_RAG_TOP_K", "2")


def test_create_chat_model_requires_full_endpoint(monkeypatch) -> None:
    _clear_model_env(monkeypatch)
    monkeypatch.setenv("ARK_API_KEY", "key")

    assert create_chat_model(Settings(_env_file=None)) is None


def test_demo_runs_offline(monkeypatch, capsys) -> None:
    _clear_model_env(monkeypatch)

    assert demo.main() == 0

    output = capsys.readouterr().out
    assert demo.GROUNDED_QUESTION in output
    assert "路由: retrieval" in output
    assert "路由: direct" in output


def test_demo_reads_corpus_file(monkeypatch, capsys, tmp_path) -> None:
    _clear_model_env(monkeypatch)
    corpus = tmp_path / "kb.txt"
    corpus.write_text("Eino 的 Stream 模式基于 SSE。\n", encoding="utf-8")
    monkeypatch.setenv("LEXICAL_RAG_CORPUS_PATH", str(corpus))

    assert demo.main() == 0
    assert "Eino 的 Stream 模式基于 SSE。 [1]" in capsys.readouterr().out


def test_settings_ignore_env_file_when_disabled(monkeypatch, tmp_path) -> None:
    _clear_model_env(monkeypatch)
    monkeypatch.delenv("ARK_API_KEY")
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("ARK_API_KEY=from-file\n", encoding="utf-8")

    assert Settings().ark_api_key == "from-file"
    assert Settings(_env_file=None).ark_api_key == ""
