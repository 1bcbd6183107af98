"""Tests for the scenewright command line interface."""

import asyncio
import logging
from pathlib import Path

import pytest
import yaml

from scenewright import __version__
from scenewright.config import set_settings
from scenewright.store import SQLiteScreenplayStore

DUAL_SCENE = "INT. GARAGE - DAY\n\nBRICK\nNo.\n\nSTEEL ^\nYes."


@pytest.fixture(autouse=True)
def restore_root_handlers():
    """Undo logging reconfiguration done by --config/--verbose/--debug."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers.copy()

    yield

    root_logger.handlers[:] = original_handlers
    root_logger.setLevel(original_level)


def seed(settings, **fields):
    """Store a screenplay in the CLI's database and return its id."""

    async def create():
        async with SQLiteScreenplayStore(settings) as store:
            return await store.create(**fields)

    return asyncio.run(create()).id


def load(settings, screenplay_id):
    async def get():
        async with SQLiteScreenplayStore(settings) as store:
            return await store.get(screenplay_id)

    return asyncio.run(get())


@pytest.fixture
def seeded(isolated_settings, complete_screenplay):
    """Id of a complete screenplay stored in the CLI's database."""
    data = complete_screenplay.model_dump(exclude={"id", "created_at", "updated_at"})
    return seed(isolated_settings, **data)


class TestVersion:
    """Test the version command."""

    def test_text(self, cli_invoke):
        """Test the plain version line."""
        cli_invoke("version").assert_success().assert_contains(
            f"Scenewright v{__version__}"
        )

    def test_json(self, cli_invoke):
        """Test the JSON version payload."""
        data = cli_invoke("version", "--json").assert_success().parse_json()
        assert data["name"] == "Scenewright"
        assert data["version"] == __version__


class TestNewAndShow:
    """Test creating and showing screenplays."""

    def test_new(self, cli_invoke, isolated_settings):
        """Test creating a screenplay."""
        result = cli_invoke("new", "Heist", "--logline", "One last job.")

        result.assert_success().assert_contains("Created screenplay #1: Heist")
        stored = load(isolated_settings, 1)
        assert stored.title == "Heist"
        assert stored.logline == "One last job."

    def test_new_json(self, cli_invoke):
        """Test JSON output of the created screenplay."""
        data = cli_invoke("new", "Heist", "--json").assert_success().parse_json()

        assert data["id"] == 1
        assert data["current_state"] == "S1_SYNOPSIS"

    def test_show(self, cli_invoke, seeded):
        """Test the text summary with its scene table."""
        result = cli_invoke("show", str(seeded))

        result.assert_success().assert_contains(
            "The Last Job",
            "Stage: S1_SYNOPSIS",
            "Scenes: 5",
            "INT. WAREHOUSE - NIGHT",
        )

    def test_show_json(self, cli_invoke, seeded):
        """Test the full document as JSON."""
        data = cli_invoke("show", str(seeded), "--json").assert_success().parse_json()

        assert data["title"] == "The Last Job"
        assert len(data["turning_points"]) == 5

    def test_show_missing(self, cli_invoke):
        """Test a missing screenplay."""
        cli_invoke("show", "99").assert_failure(exit_code=1).assert_contains(
            "Screenplay 99 not found", "scenewright new"
        )

    def test_show_missing_json(self, cli_invoke):
        """Test the JSON error envelope."""
        data = cli_invoke("show", "99", "--json").assert_failure(1).parse_json()

        assert data["success"] is False
        assert data["code"] == 1
        assert "Screenplay 99 not found" in data["error"]


class TestAdvance:
    """Test workflow transitions from the command line."""

    def test_advance(self, cli_invoke, seeded, isolated_settings):
        """Test a guarded move that succeeds."""
        result = cli_invoke("advance", str(seeded), "S2")

        result.assert_success().assert_contains(
            f"Moved screenplay #{seeded} from S1_SYNOPSIS to S2_TREATMENT"
        )
        assert load(isolated_settings, seeded).current_state.value == "S2_TREATMENT"

    def test_guard_failure(self, cli_invoke, isolated_settings):
        """Test that a failed guard exits 1 with its hint."""
        screenplay_id = seed(isolated_settings, title="Heist")

        result = cli_invoke("advance", str(screenplay_id), "s2_treatment")

        result.assert_failure(exit_code=1).assert_contains(
            "Cannot enter S2_TREATMENT", "Guard fails"
        )
        assert load(isolated_settings, screenplay_id).current_state.value == (
            "S1_SYNOPSIS"
        )

    def test_guard_failure_json(self, cli_invoke, isolated_settings):
        """Test the JSON payload of a refused move."""
        screenplay_id = seed(isolated_settings, title="Heist")

        data = (
            cli_invoke("advance", str(screenplay_id), "S2", "--json")
            .assert_failure(exit_code=1)
            .parse_json()
        )

        assert data["success"] is False
        assert data["source"] == "S1_SYNOPSIS"
        assert data["hint"].startswith("Guard fails:")

    def test_skip_is_refused(self, cli_invoke, seeded):
        """Test that skipping a stage is refused."""
        cli_invoke("advance", str(seeded), "S4").assert_failure(1).assert_contains(
            "Cannot skip from"
        )

    def test_success_json(self, cli_invoke, seeded):
        """Test the JSON payload of an accepted move."""
        data = cli_invoke("advance", str(seeded), "S2", "--json").parse_json()

        assert data["success"] is True
        assert data["data"] == {
            "source": "S1_SYNOPSIS",
            "target": "S2_TREATMENT",
            "hint": None,
        }

    def test_unknown_stage(self, cli_invoke, seeded):
        """Test that an unknown stage name is reported."""
        cli_invoke("advance", str(seeded), "S42").assert_failure(1).assert_contains(
            "Unknown stage"
        )


class TestExport:
    """Test the export command."""

    @pytest.mark.parametrize(
        ("export_format", "filename", "start"),
        [
            ("fountain", "The Last Job.fountain", b"Title: The Last Job"),
            ("fdx", "The Last Job.fdx", b"<?xml"),
            ("pdf", "The Last Job.pdf", b"%PDF"),
            ("beats", "The Last Job-beats.md", "# Beat Sheet".encode()),
            ("characters", "The Last Job-characters.md", b"# Character Bios"),
        ],
    )
    def test_default_output_path(
        self, cli_invoke, seeded, tmp_path, export_format, filename, start
    ):
        """Test each format written next to the working directory."""
        result = cli_invoke("export", str(seeded), export_format)

        result.assert_success().assert_contains("Wrote", "bytes")
        assert (tmp_path / filename).read_bytes().startswith(start)

    def test_output_option(self, cli_invoke, seeded, tmp_path):
        """Test an explicit output path and a case-insensitive format."""
        target = tmp_path / "out" / "draft.fdx"
        target.parent.mkdir()

        cli_invoke("export", str(seeded), "FDX", "-o", str(target)).assert_success()

        assert "[#5]" in target.read_text(encoding="utf-8")

    def test_missing_screenplay(self, cli_invoke, tmp_path):
        """Test exporting a screenplay that does not exist."""
        cli_invoke("export", "99", "fountain").assert_failure(1).assert_contains(
            "Screenplay 99 not found"
        )
        assert not list(tmp_path.glob("*.fountain"))

    def test_unknown_format(self, cli_invoke, seeded):
        """Test that unknown formats are rejected by argument parsing."""
        cli_invoke("export", str(seeded), "docx").assert_failure(2)

    def test_strict_dual_dialogue(self, cli_invoke, isolated_settings):
        """Test that strict mode turns dual dialogue into an error."""
        screenplay_id = seed(
            isolated_settings,
            title="Heist",
            scenes=[{"id": 1, "order": 1, "formatted_text": DUAL_SCENE}],
        )
        strict = isolated_settings.model_copy(update={"strict_dual_dialogue": True})
        set_settings(strict)

        cli_invoke("export", str(screenplay_id), "fdx").assert_failure(
            1
        ).assert_contains("Dual dialogue cannot be exported")


class TestParse:
    """Test the parse command."""

    @pytest.fixture
    def fountain_file(self, tmp_path) -> Path:
        path = tmp_path / "scene.fountain"
        path.write_text(
            "INT. VAULT - NIGHT\n\nRosa listens.\n\nROSA\n(whispering)\nClick.\n",
            encoding="utf-8",
        )
        return path

    def test_text(self, cli_invoke, fountain_file):
        """Test the paragraph listing."""
        cli_invoke("parse", str(fountain_file)).assert_success().assert_contains(
            "Scene Heading",
            "INT. VAULT - NIGHT",
            "Parenthetical",
            "(whispering)",
        )

    def test_json(self, cli_invoke, fountain_file):
        """Test paragraphs as JSON objects tagged with their kind."""
        data = cli_invoke("parse", str(fountain_file), "--json").parse_json()

        assert [p["kind"] for p in data] == [
            "Scene Heading",
            "Action",
            "Character",
            "Parenthetical",
            "Dialogue",
        ]
        assert data[0] == {
            "kind": "Scene Heading",
            "text": "INT. VAULT - NIGHT",
            "scene_number": None,
        }

    def test_missing_file(self, cli_invoke, tmp_path):
        """Test that a missing file is a usage error."""
        cli_invoke("parse", str(tmp_path / "missing.fountain")).assert_failure(2)


class TestGlobalOptions:
    """Test the global callback options."""

    def test_config_file(self, cli_invoke, tmp_path, isolated_settings):
        """Test that --config selects the database."""
        db_path = tmp_path / "configured.db"
        config = tmp_path / "cli.yaml"
        config.write_text(yaml.safe_dump({"database_path": str(db_path)}))

        cli_invoke("--config", str(config), "new", "Heist").assert_success()

        assert db_path.exists()
        assert load(isolated_settings.model_copy(update={"database_path": db_path}), 1)

    def test_missing_config_file(self, cli_invoke, tmp_path):
        """Test that a missing config file fails cleanly."""
        cli_invoke(
            "--config", str(tmp_path / "missing.yaml"), "version"
        ).assert_failure(1).assert_contains("Config file not found")

    def test_verbose(self, cli_invoke, monkeypatch):
        """Test that --verbose raises the log level to INFO."""
        monkeypatch.setenv("SCENEWRIGHT_LOG_LEVEL", "WARNING")

        cli_invoke("--verbose", "version").assert_success()

        assert logging.getLogger().level == logging.INFO

    def test_debug(self, cli_invoke, monkeypatch):
        """Test that --debug enables DEBUG logging."""
        monkeypatch.setenv("SCENEWRIGHT_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("SCENEWRIGHT_DEBUG", "false")

        cli_invoke("--debug", "version").assert_success()

        assert logging.getLogger().level == logging.DEBUG

    def test_debug_before_command(self, cli_invoke, seeded, monkeypatch):
        """Test a global flag ahead of a command that reads the store."""
        monkeypatch.setenv("SCENEWRIGHT_DEBUG", "false")

        cli_invoke("--debug", "show", str(seeded)).assert_success().assert_contains(
            "The Last Job"
        )
