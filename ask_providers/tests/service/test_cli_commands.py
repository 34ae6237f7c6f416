"""End-to-end CLI tests driving ``main`` with a temp config and a mock transport."""

from __future__ import annotations

import json

import httpx
import pytest

from ask_providers.config import store
from ask_providers.service.cli import main
from ask_providers.service.cli.cli_actions import FALLBACK_WARNING


@pytest.fixture()
def cfg_path(tmp_path):
    return tmp_path / "home" / "config.json"


def run(cfg_path, *argv, **kwargs) -> int:
    return main(["-c", str(cfg_path), *argv], **kwargs)


def _chat(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def test_version(cfg_path, capsys) -> None:
    assert run(cfg_path, "version") == 0
    assert capsys.readouterr().out.strip() == "0.2.2"
    assert run(cfg_path, "-v") == 0
    assert capsys.readouterr().out.strip() == "0.2.2"


def test_first_run_writes_config_and_template(cfg_path, capsys) -> None:
    assert run(cfg_path) == 0

    assert cfg_path.exists()
    assert (cfg_path.parent / "config.template.json").exists()
    out = capsys.readouterr().out
    assert "ask v0.2.2" in out
    assert str(cfg_path) in out


def test_help_topic(cfg_path, capsys) -> None:
    assert run(cfg_path, "help", "model") == 0
    assert "select" in capsys.readouterr().out


def test_ask_without_provider_fails(cfg_path, capsys) -> None:
    assert run(cfg_path, "what", "time") == 1
    assert capsys.readouterr().err.startswith("error: no default provider set")


def test_ask_json_output(cfg_path, capsys, recorder, monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    rec = recorder(lambda req: _chat('{"answer":"Shows disk usage","command":"df -h"}'))
    run(cfg_path, "provider", "set", "openai")
    capsys.readouterr()

    code = run(cfg_path, "--json", "disk", "usage", "-m", "gpt-4o-mini", http_client=rec.client())

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {
        "provider": "openai",
        "model": "gpt-4o-mini",
        "question": "disk usage",
        "answer": "Shows disk usage",
        "command": "df -h",
    }
    sent = rec.requests[0]
    assert str(sent.url) == "https://api.openai.com/v1/chat/completions"
    assert sent.headers["Authorization"] == "Bearer sk-test"
    body = rec.json_body()
    assert body["response_format"] == {"type": "json_object"}
    assert body["messages"][1]["content"] == "disk usage"


def test_ask_fallback_warning_and_no_run(cfg_path, capsys, recorder, monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    rec = recorder(lambda req: _chat("Try this:\n```sh\nls -la\n```"))

    code = run(cfg_path, "-p", "openai", "--no-run", "--no-markdown", "list", "files", http_client=rec.client())

    assert code == 0
    captured = capsys.readouterr()
    assert captured.out.rstrip().endswith("ls -la")
    assert "Try this:" in captured.out
    assert captured.err.strip() == FALLBACK_WARNING


def test_ask_provider_error_exits_one(cfg_path, capsys, recorder, monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    rec = recorder(lambda req: httpx.Response(500, text="upstream exploded"))

    assert run(cfg_path, "-p", "openai", "hello", http_client=rec.client()) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: provider returned 500 Internal Server Error: upstream exploded")


def test_ask_missing_key_exits_one(cfg_path, capsys, recorder) -> None:
    rec = recorder(lambda req: _chat("{}"))

    assert run(cfg_path, "-p", "anthropic", "-m", "claude", "hi", http_client=rec.client()) == 1
    assert "ANTHROPIC_API_KEY not configured" in capsys.readouterr().err
    assert rec.requests == []


def test_ask_autoselects_and_persists_model(cfg_path, capsys, recorder, monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ak")

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(
                200, json={"data": [{"id": "claude-3-opus"}, {"id": "claude-3-5-haiku"}, {"id": "claude-3-5-sonnet"}]}
            )
        return httpx.Response(200, json={"content": [{"type": "text", "text": '{"answer":"hi","command":""}'}]})

    rec = recorder(handler)

    assert run(cfg_path, "-p", "anthropic", "--json", "hello", http_client=rec.client()) == 0

    assert json.loads(capsys.readouterr().out)["model"] == "claude-3-5-haiku"
    assert rec.json_body()["model"] == "claude-3-5-haiku"
    cfg, _ = store.load(cfg_path)
    assert cfg.get_model("anthropic") == "claude-3-5-haiku"


def test_ask_no_models_available(cfg_path, capsys, recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"models": []}))

    assert run(cfg_path, "-p", "ollama", "hi", http_client=rec.client()) == 1
    assert "no models available for provider 'ollama'" in capsys.readouterr().err


def test_invalid_timeout_is_usage_error(cfg_path) -> None:
    with pytest.raises(SystemExit) as info:
        run(cfg_path, "--timeout", "soon", "hi")
    assert info.value.code == 2


def test_models_list_set_current(cfg_path, capsys, recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"models": [{"name": "qwen2:7b"}, {"name": "llama3:8b"}]}))

    assert run(cfg_path, "models", "set", "-p", "ollama", "llama3:8b") == 0
    assert run(cfg_path, "models", "-p", "ollama", http_client=rec.client()) == 0
    assert run(cfg_path, "models", "current", "-p", "ollama") == 0

    out = capsys.readouterr().out
    assert "set model for ollama to llama3:8b" in out
    assert "Provider:  ollama" in out
    assert "Models:    2" in out
    assert "*        llama3:8b" in out
    assert out.rstrip().endswith("provider=ollama model=llama3:8b")
    assert str(rec.requests[0].url) == "http://127.0.0.1:11434/api/tags"


def test_models_list_search(cfg_path, capsys, recorder) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"models": [{"name": "qwen2:7b"}, {"name": "llama3:8b"}]}))

    assert run(cfg_path, "models", "list", "-p", "ollama", "nomatch", http_client=rec.client()) == 0
    assert 'no models found for provider ollama matching "nomatch"' in capsys.readouterr().out


def test_models_select_by_number(cfg_path, capsys, recorder, monkeypatch) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"models": [{"name": "b-model"}, {"name": "a-model"}]}))
    answers = iter(["/b", "1"])
    monkeypatch.setattr("ask_providers.service.cli.cli_actions.read_line", lambda prompt: next(answers))

    assert run(cfg_path, "models", "select", "-p", "ollama", http_client=rec.client()) == 0

    assert "set model for ollama to b-model" in capsys.readouterr().out
    assert store.load(cfg_path)[0].get_model("ollama") == "b-model"


def test_models_select_eof_cancels(cfg_path, capsys, recorder, monkeypatch) -> None:
    rec = recorder(lambda req: httpx.Response(200, json={"models": [{"name": "a"}]}))
    monkeypatch.setattr("ask_providers.service.cli.cli_actions.read_line", lambda prompt: None)

    assert run(cfg_path, "models", "select", "-p", "ollama", http_client=rec.client()) == 0
    assert "selection cancelled" in capsys.readouterr().out


def test_provider_lifecycle(cfg_path, capsys, recorder) -> None:
    assert (
        run(
            cfg_path,
            "provider",
            "add",
            "Proxy",
            "--base-url",
            "http://localhost:8080/v1/",
            "--model",
            "local-7b",
            "--header",
            "X-Team=ops",
        )
        == 0
    )
    assert run(cfg_path, "provider", "set", "proxy") == 0
    capsys.readouterr()

    assert run(cfg_path, "provider", "show") == 0
    view = json.loads(capsys.readouterr().out)
    assert view == {
        "name": "proxy",
        "current": True,
        "model": "local-7b",
        "base_url": "http://localhost:8080/v1",
        "has_api_key": False,
        "custom": True,
    }

    assert run(cfg_path, "provider", "list") == 0
    listing = capsys.readouterr().out
    assert "custom-openai-compatible" in listing
    assert "openrouter" in listing

    rec = recorder(lambda req: _chat('{"answer":"ok","command":""}'))
    assert run(cfg_path, "--json", "ping", http_client=rec.client()) == 0
    sent = rec.requests[0]
    assert str(sent.url) == "http://localhost:8080/v1/chat/completions"
    assert sent.headers["X-Team"] == "ops"
    assert "Authorization" not in sent.headers
    capsys.readouterr()

    assert run(cfg_path, "provider", "remove", "proxy") == 0
    assert "removed provider proxy" in capsys.readouterr().out
    assert store.load(cfg_path)[0].current_provider == ""


def test_provider_add_builtin_is_rejected(cfg_path, capsys) -> None:
    assert run(cfg_path, "provider", "add", "openai", "--base-url", "http://x") == 1
    assert "error: 'openai' is a built-in provider" in capsys.readouterr().err


def test_provider_set_unknown(cfg_path, capsys) -> None:
    assert run(cfg_path, "provider", "set", "nope") == 1
    assert "provider 'nope' is not configured" in capsys.readouterr().err


def test_key_set_show_clear(cfg_path, capsys) -> None:
    assert run(cfg_path, "key", "set", "openai", "--value", "sk-abcdef123456") == 0
    assert run(cfg_path, "key", "show", "openai") == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "updated credentials for openai"
    assert out[1:] == [
        "provider=openai",
        "api_key=***********3456",
        "storage=plain",
        "api_key_env=OPENAI_API_KEY",
    ]

    assert run(cfg_path, "key", "clear", "openai") == 0
    assert run(cfg_path, "key", "show", "openai") == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "cleared credentials for openai"
    assert "api_key=<empty>" in out
    assert "storage=none" in out


def test_key_set_env_only(cfg_path, capsys, monkeypatch) -> None:
    monkeypatch.setenv("TEAM_KEY", "team-secret-9999")
    assert run(cfg_path, "key", "set", "openrouter", "--env", "TEAM_KEY") == 0
    assert run(cfg_path, "key", "show", "openrouter") == 0
    out = capsys.readouterr().out
    assert "updated credentials for openrouter (env=TEAM_KEY)" in out
    assert "api_key=************9999" in out
    assert "storage=none" in out


def test_markdown_toggle_and_config_commands(cfg_path, capsys) -> None:
    assert run(cfg_path, "markdown", "off") == 0
    assert run(cfg_path, "markdown") == 0
    assert run(cfg_path, "config", "path") == 0
    assert run(cfg_path, "config", "template") == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "markdown rendering disabled",
        "markdown=off",
        str(cfg_path),
        str(cfg_path.parent / "config.template.json"),
    ]

    assert run(cfg_path, "config") == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["render_markdown"] is False


def test_unknown_option_outside_ask_is_usage_error(cfg_path) -> None:
    with pytest.raises(SystemExit) as info:
        run(cfg_path, "provider", "list", "--bogus")
    assert info.value.code == 2
