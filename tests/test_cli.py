"""Tests for the Typer command-line interface."""
import pytest
from typer.testing import CliRunner

from mockchat.cli.app import app
from mockchat.cli.providers import get_response_provider, get_settings
from mockchat.responders import CannedResponseProvider, EchoResponseProvider

runner = CliRunner()

_ENV_VARS = (
    "MOCKCHAT_RESPONDER",
    "MOCKCHAT_RESPONSES_FILE",
    "MOCKCHAT_MIN_DELAY",
    "MOCKCHAT_MAX_DELAY",
    "MOCKCHAT_SEED",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Tests for resolving settings from arguments and environment."""

    def test_defaults(self):
        """Test defaults."""
        settings = get_settings()
        assert settings == {
            "responder": "canned",
            "responses_file": None,
            "min_delay": 1.0,
            "max_delay": 2.0,
            "seed": None,
        }

    def test_environment(self, monkeypatch, tmp_path):
        """Test environment."""
        replies = tmp_path / "replies.txt"
        monkeypatch.setenv("MOCKCHAT_RESPONDER", "echo")
        monkeypatch.setenv("MOCKCHAT_RESPONSES_FILE", str(replies))
        monkeypatch.setenv("MOCKCHAT_MIN_DELAY", "0.5")
        monkeypatch.setenv("MOCKCHAT_MAX_DELAY", "0.75")
        monkeypatch.setenv("MOCKCHAT_SEED", "9")

        settings = get_settings()

        assert settings["responder"] == "echo"
        assert settings["responses_file"] == replies
        assert settings["min_delay"] == 0.5
        assert settings["max_delay"] == 0.75
        assert settings["seed"] == 9

    def test_arguments_win(self, monkeypatch):
        """Test arguments win."""
        monkeypatch.setenv("MOCKCHAT_RESPONDER", "echo")
        monkeypatch.setenv("MOCKCHAT_MIN_DELAY", "0.5")

        settings = get_settings(responder="canned", min_delay=0.0)

        assert settings["responder"] == "canned"
        assert settings["min_delay"] == 0.0

    def test_bad_number(self, monkeypatch):
        """Test bad number."""
        monkeypatch.setenv("MOCKCHAT_MAX_DELAY", "soon")
        with pytest.raises(ValueError, match="MOCKCHAT_MAX_DELAY"):
            get_settings()

    def test_bad_seed(self, monkeypatch):
        """Test bad seed."""
        monkeypatch.setenv("MOCKCHAT_SEED", "1.5")
        with pytest.raises(ValueError, match="MOCKCHAT_SEED"):
            get_settings()

    def test_provider_from_settings(self, tmp_path):
        """Test provider from settings."""
        replies = tmp_path / "replies.txt"
        replies.write_text("one\ntwo\n", encoding="utf-8")

        canned = get_response_provider(get_settings(responses_file=replies, seed=1))
        echo = get_response_provider(get_settings(responder="echo"))

        assert isinstance(canned, CannedResponseProvider)
        assert canned.responses == ("one", "two")
        assert isinstance(echo, EchoResponseProvider)


class TestResponsesCommand:
    """Tests for the responses command."""

    def test_lists_default_replies(self):
        """Test lists default replies."""
        result = runner.invoke(app, ["responses"])
        assert result.exit_code == 0
        assert "Canned replies (7)" in result.output

    def test_lists_file_replies(self, tmp_path):
        """Test lists file replies."""
        replies = tmp_path / "replies.txt"
        replies.write_text("Sure thing.\nNo idea!\n", encoding="utf-8")

        result = runner.invoke(app, ["responses", "--responses-file", str(replies)])

        assert result.exit_code == 0
        assert "Canned replies (2)" in result.output
        assert "Sure thing." in result.output

    def test_echo_has_no_replies(self):
        """Test echo has no replies."""
        result = runner.invoke(app, ["responses", "--responder", "echo"])
        assert result.exit_code == 0
        assert "has no canned replies" in result.output

    def test_unknown_responder(self):
        """Test unknown responder."""
        result = runner.invoke(app, ["responses", "--responder", "oracle"])
        assert result.exit_code == 1
        assert "Unsupported response provider" in result.output


class TestChatCommand:
    """Tests for the line-mode chat command."""

    def test_send_and_list(self):
        """Test send and list."""
        result = runner.invoke(
            app,
            ["chat", "--min-delay", "0", "--max-delay", "0", "--seed", "3"],
            input="hello\n/list\nq\n",
        )
        assert result.exit_code == 0
        assert "Assistant:" in result.output
        assert "Conversations" in result.output
        assert "Goodbye!" in result.output

    def test_echo_responder(self):
        """Test echo responder."""
        result = runner.invoke(
            app,
            ["chat", "-r", "echo", "--min-delay", "0", "--max-delay", "0"],
            input="ping\nexit\n",
        )
        assert result.exit_code == 0
        assert "You said: ping" in result.output

    def test_commands(self):
        """Test commands."""
        result = runner.invoke(
            app,
            ["chat", "--min-delay", "0", "--max-delay", "0"],
            input="/help\n/new\n/delete nope\n/frobnicate\n/quit\n",
        )
        assert result.exit_code == 0
        assert "/select <id>" in result.output
        assert "New Conversation" in result.output
        assert "No conversation nope" in result.output
        assert "Unknown command" in result.output

    def test_end_of_input_exits_cleanly(self):
        """Test end of input exits cleanly."""
        result = runner.invoke(app, ["chat", "--min-delay", "0", "--max-delay", "0"], input="")
        assert result.exit_code == 0
        assert "Goodbye!" in result.output

    def test_invalid_delay_range(self):
        """Test invalid delay range."""
        result = runner.invoke(app, ["chat", "--min-delay", "2", "--max-delay", "1"], input="q\n")
        assert result.exit_code == 1
        assert "max_delay" in result.output

    def test_invalid_environment(self, monkeypatch):
        """Test invalid environment."""
        monkeypatch.setenv("MOCKCHAT_MIN_DELAY", "fast")
        result = runner.invoke(app, ["chat"], input="q\n")
        assert result.exit_code == 1
        assert "MOCKCHAT_MIN_DELAY" in result.output
