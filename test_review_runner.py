"""End-to-end tests of the hook flow with a mocked Ollama server."""

import json
from unittest.mock import patch

import httpx
import pytest

import main
from review_hook.review_runner import run_review
from review_hook.services.llm_client import OllamaClient
from review_hook.utils.settings import Settings

PASSING_BODY = '{"response":"{\\"follows_best_practices\\":true,\\"suggestions\\":\\"\\"}"}'
FAILING_BODY = '{"response":"{\\"follows_best_practices\\":false,\\"suggestions\\":\\"use gofmt\\"}"}'

WARNING_LINE = (
    "Warning: Some files do not follow Golang best practices. "
    "Please review the suggestions above."
)
ALL_CLEAR_LINE = "All checked files follow Golang best practices."


class FakeOllama:
    """Records requests and answers with canned bodies keyed by filename."""

    def __init__(self, default=PASSING_BODY, **bodies):
        self.default = default
        self.bodies = bodies
        self.requests = []

    def __call__(self, request):
        body = json.loads(request.content)
        self.requests.append(body)
        for name, reply in self.bodies.items():
            if f"Filename: {name}" in body["prompt"]:
                return httpx.Response(200, text=reply)
        return httpx.Response(200, text=self.default)

    @property
    def filenames(self):
        return [
            line.split("Filename: ", 1)[1]
            for body in self.requests
            for line in body["prompt"].splitlines()
            if line.startswith("Filename: ")
        ]


@pytest.fixture()
def server():
    """Stop the runner from spawning a real `ollama serve`."""
    with patch("review_hook.review_runner.OllamaServer") as launcher:
        yield launcher


def _run(files, fake, settings=None):
    settings = settings or Settings()
    client = OllamaClient(settings, http_client=httpx.Client(transport=httpx.MockTransport(fake)))
    return run_review([str(f) for f in files], settings, client=client)


def _go_file(directory, name, body="package main\n"):
    path = directory / name
    path.write_text(body, encoding="utf-8")
    return path


# ===================================================================
# Guards
# ===================================================================


class TestGuards:

    def test_no_files(self, server, capsys):
        fake = FakeOllama()
        assert _run([], fake) == 0
        assert "No files provided for the hook." in capsys.readouterr().out
        assert fake.requests == []
        server.assert_not_called()

    def test_more_than_twenty_files_aborts_before_any_call(self, tmp_path, server, capsys):
        files = [_go_file(tmp_path, f"f{i}.go") for i in range(21)]
        fake = FakeOllama()

        assert _run(files, fake) == 0

        out = capsys.readouterr().out
        assert "Skipping as analysing more than 20 files would take too long" in out
        assert fake.requests == []
        server.assert_not_called()

    def test_exactly_twenty_files_are_processed(self, tmp_path, server):
        files = [_go_file(tmp_path, f"f{i}.go") for i in range(20)]
        fake = FakeOllama()
        _run(files, fake)
        assert len(fake.requests) == 20

    def test_count_includes_non_source_files(self, tmp_path, server):
        """The limit applies to the whole input list, not just eligible files."""
        files = [_go_file(tmp_path, "main.go")]
        files += [_go_file(tmp_path, f"notes{i}.md") for i in range(20)]
        fake = FakeOllama()
        _run(files, fake)
        assert fake.requests == []

    def test_non_source_extension_never_sent(self, tmp_path, server, capsys):
        files = [
            _go_file(tmp_path, "README.md"),
            _go_file(tmp_path, "go.mod"),
            _go_file(tmp_path, "main.go"),
        ]
        fake = FakeOllama()
        _run(files, fake)
        assert fake.filenames == [str(tmp_path / "main.go")]

    def test_oversized_file_skipped_and_reported(self, tmp_path, server, capsys):
        big = _go_file(tmp_path, "big.go", "a" * 8001)
        limit = _go_file(tmp_path, "limit.go", "a" * 8000)
        fake = FakeOllama()

        _run([big, limit], fake)

        out = capsys.readouterr().out
        assert f"Skipping file {big} as it has more than 8000 characters" in out
        assert fake.filenames == [str(limit)]

    def test_size_counts_characters_not_bytes(self, tmp_path, server):
        """8000 multi-byte characters are still within the limit."""
        wide = _go_file(tmp_path, "wide.go", "é" * 8000)
        fake = FakeOllama()
        _run([wide], fake)
        assert fake.filenames == [str(wide)]

    def test_unreadable_file_reported_and_skipped(self, tmp_path, server, capsys):
        missing = tmp_path / "missing.go"
        present = _go_file(tmp_path, "present.go")
        fake = FakeOllama()

        _run([missing, present], fake)

        out = capsys.readouterr().out
        assert f"Error reading file {missing}:" in out
        assert fake.filenames == [str(present)]


# ===================================================================
# Verdicts
# ===================================================================


class TestVerdicts:

    def test_passing_file_not_reported(self, tmp_path, server, capsys):
        path = _go_file(tmp_path, "main.go")
        assert _run([path], FakeOllama(PASSING_BODY)) == 0

        out = capsys.readouterr().out
        assert "does not follow best practices" not in out
        assert ALL_CLEAR_LINE in out
        assert WARNING_LINE not in out

    def test_failing_file_reported_with_suggestion(self, tmp_path, server, capsys):
        path = _go_file(tmp_path, "main.go")
        assert _run([path], FakeOllama(FAILING_BODY)) == 0

        out = capsys.readouterr().out
        assert f"File: {path} does not follow best practices:" in out
        assert "Suggestions: use gofmt" in out
        assert "--------------------------------------------" in out
        assert WARNING_LINE in out
        assert ALL_CLEAR_LINE not in out

    def test_malformed_body_skips_only_that_file(self, tmp_path, server, capsys):
        bad = _go_file(tmp_path, "bad.go")
        good = _go_file(tmp_path, "good.go")
        fake = FakeOllama(FAILING_BODY, **{str(bad): "<html>oops</html>"})

        assert _run([bad, good], fake) == 0

        out = capsys.readouterr().out
        assert f"Error querying LLM for file {bad}:" in out
        assert f"File: {good} does not follow best practices:" in out
        assert len(fake.requests) == 2

    def test_server_error_status_skips_file(self, tmp_path, server, capsys):
        path = _go_file(tmp_path, "main.go")

        def handler(request):
            return httpx.Response(500, json={"error": "model runner crashed"})

        assert _run([path], handler) == 0
        out = capsys.readouterr().out
        assert "model runner crashed" in out
        assert ALL_CLEAR_LINE in out

    def test_server_launched_on_configured_port(self, tmp_path, server):
        path = _go_file(tmp_path, "main.go")
        _run([path], FakeOllama(), Settings(port=12000, ollama_bin="ollama-dev"))
        server.assert_called_once_with(12000, "ollama-dev")
        server.return_value.__exit__.assert_called_once()


# ===================================================================
# Interaction log
# ===================================================================


class TestInteractionLog:

    def test_log_written_when_configured(self, tmp_path, server):
        log_file = tmp_path / "logs" / "review.json"
        ok = _go_file(tmp_path, "ok.go")
        bad = _go_file(tmp_path, "bad.go")
        fake = FakeOllama(PASSING_BODY, **{str(bad): "nope"})

        _run([ok, bad], fake, Settings(log_file=str(log_file)))

        entries = json.loads(log_file.read_text(encoding="utf-8"))
        assert [e["action"] for e in entries] == [
            "STARTUP", "CODE_REVIEW", "CODE_REVIEW", "COMPLETION",
        ]
        assert entries[1]["status"] == "SUCCESS"
        assert entries[2]["status"] == "FAILURE"
        assert entries[2]["details"]["error_type"] == "ResponseDecodeError"
        assert entries[3]["details"] == {"files_reviewed": 1, "warnings": False}

    def test_unusable_log_path_does_not_stop_review(self, tmp_path, server, capsys):
        log_dir = tmp_path / "logdir"
        log_dir.mkdir()
        path = _go_file(tmp_path, "main.go")
        fake = FakeOllama(FAILING_BODY)

        assert _run([path], fake, Settings(log_file=str(log_dir))) == 0

        out = capsys.readouterr().out
        assert "Interaction log disabled:" in out
        assert "Suggestions: use gofmt" in out
        assert WARNING_LINE in out

    def test_logged_prompt_is_the_prompt_sent(self, tmp_path, server):
        log_file = tmp_path / "review.json"
        path = _go_file(tmp_path, "main.go")
        fake = FakeOllama()

        with patch.object(OllamaClient, "build_request", autospec=True,
                          side_effect=OllamaClient.build_request) as build:
            _run([path], fake, Settings(log_file=str(log_file)))

        build.assert_called_once()
        entries = json.loads(log_file.read_text(encoding="utf-8"))
        assert entries[1]["details"]["input_prompt"] == fake.requests[0]["prompt"]

    def test_no_log_by_default(self, tmp_path, server, monkeypatch):
        monkeypatch.chdir(tmp_path)
        _run([_go_file(tmp_path, "main.go")], FakeOllama())
        assert not (tmp_path / "logs").exists()


# ===================================================================
# CLI
# ===================================================================


class TestMain:

    def test_no_arguments(self, capsys):
        assert main.main([]) == 0
        assert "No files provided for the hook." in capsys.readouterr().out

    def test_bad_port_does_not_block_commit(self, capsys):
        assert main.main(["--port", "not-a-port", "main.go"]) == 0
        assert "Configuration error" in capsys.readouterr().out

    def test_flags_reach_the_runner(self, monkeypatch):
        monkeypatch.delenv("REVIEW_HOOK_MODEL", raising=False)
        with patch("main.run_review", return_value=0) as run:
            assert main.main(["--model", "llama3", "--port", "9999", "--language", "python", "a.py"]) == 0

        files, settings = run.call_args[0]
        assert files == ["a.py"]
        assert settings.model == "llama3"
        assert settings.port == 9999
        assert settings.language.extension == ".py"
