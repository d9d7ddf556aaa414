"""Tests for the CLI interface (cookbook_cli.py)."""

import pathlib
from unittest.mock import AsyncMock, Mock, patch

import pytest
from click.testing import CliRunner

from cookbook_cli import main


def make_repository(root: pathlib.Path) -> None:
    """Create the marker files the tutorial creator expects."""
    (root / "tutorials").mkdir()
    (root / "versions.yml").write_text("# versions\n")


def fake_run(returncodes=None):
    """Build a subprocess.run replacement keyed on the executable name."""
    returncodes = returncodes or {}
    calls = []

    def run(command, *args, **kwargs):
        calls.append((list(command), kwargs.get("cwd")))
        return Mock(returncode=returncodes.get(command[0], 0), stderr="")

    run.calls = calls
    return run


@pytest.fixture
def runner():
    return CliRunner()


class TestCreateTutorialHelp:
    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_exits_zero(self, runner, flag):
        result = runner.invoke(main, ["create-tutorial", flag])

        assert result.exit_code == 0
        assert "Usage" in result.output
        assert "SLUG" in result.output
        assert "zero-to-hero" in result.output

    def test_missing_slug_fails(self, runner):
        result = runner.invoke(main, ["create-tutorial"])
        assert result.exit_code != 0
        assert "Missing argument" in result.output


class TestCreateTutorialValidation:
    def test_invalid_slug_creates_nothing(self, runner):
        with runner.isolated_filesystem() as fs:
            root = pathlib.Path(fs)
            make_repository(root)

            result = runner.invoke(
                main, ["create-tutorial", "My_Tutorial", "--skip-install", "--no-branch"]
            )

            assert result.exit_code == 1
            assert "Invalid tutorial slug format" in result.output
            assert list((root / "tutorials").iterdir()) == []

    @pytest.mark.parametrize(
        "slug", ["My-Tutorial", "my_tutorial", "my--tutorial", "-x", "x-", "abc\n"]
    )
    def test_rejects_bad_slugs(self, runner, slug):
        with runner.isolated_filesystem() as fs:
            root = pathlib.Path(fs)
            make_repository(root)

            result = runner.invoke(
                main, ["create-tutorial", "--no-branch", "--skip-install", "--", slug]
            )

            assert result.exit_code == 1
            assert list((root / "tutorials").iterdir()) == []

    def test_requires_repository_root(self, runner):
        with runner.isolated_filesystem() as fs:
            result = runner.invoke(main, ["create-tutorial", "my-tutorial"])

            assert result.exit_code == 1
            assert "repository root" in result.output
            assert not (pathlib.Path(fs) / "tutorials").exists()

    def test_requires_versions_file(self, runner):
        with runner.isolated_filesystem() as fs:
            (pathlib.Path(fs) / "tutorials").mkdir()

            result = runner.invoke(main, ["create-tutorial", "my-tutorial"])

            assert result.exit_code == 1
            assert "versions.yml not found" in result.output

    def test_second_invocation_leaves_first_untouched(self, runner):
        with runner.isolated_filesystem() as fs:
            root = pathlib.Path(fs)
            make_repository(root)
            args = ["create-tutorial", "my-tutorial", "--skip-install", "--no-branch"]

            first = runner.invoke(main, args)
            assert first.exit_code == 0

            readme = root / "tutorials" / "my-tutorial" / "README.md"
            readme.write_text("# My edits\n")
            before = sorted(
                p.relative_to(root) for p in (root / "tutorials").rglob("*")
            )

            second = runner.invoke(main, args)

            assert second.exit_code == 1
            assert "already exists" in second.output
            assert readme.read_text() == "# My edits\n"
            after = sorted(p.relative_to(root) for p in (root / "tutorials").rglob("*"))
            assert after == before


class TestCreateTutorialScaffold:
    def test_creates_structure(self, runner):
        with runner.isolated_filesystem() as fs:
            root = pathlib.Path(fs)
            make_repository(root)

            result = runner.invoke(
                main,
                ["create-tutorial", "add-nft-pallet", "--skip-install", "--no-branch"],
            )

            assert result.exit_code == 0, result.output
            tutorial = root / "tutorials" / "add-nft-pallet"
            for relative in [
                "tests",
                "scripts",
                "add-nft-pallet-code",
                "README.md",
                "tutorial.yml",
                "justfile",
                ".gitignore",
                "pyproject.toml",
                "scripts/.gitkeep",
                "tests/test_add_nft_pallet_e2e.py",
            ]:
                assert (tutorial / relative).exists(), relative

            yml = (tutorial / "tutorial.yml").read_text()
            assert "name: Add Nft Pallet" in yml
            assert "slug: add-nft-pallet" in yml
            assert "needs_node: true" in yml

            readme = (tutorial / "README.md").read_text()
            assert readme.startswith("# add-nft-pallet")
            assert "cd tutorials/add-nft-pallet" in readme

            assert 'name = "add-nft-pallet"' in (tutorial / "pyproject.toml").read_text()
            assert "Tutorial created successfully" in result.output
            assert "feat/tutorial-add-nft-pallet" in result.output

    def test_installs_dependencies_with_package_manager(self, runner):
        run = fake_run()
        with runner.isolated_filesystem():
            root = pathlib.Path.cwd()
            make_repository(root)

            with patch("subprocess.run", run):
                result = runner.invoke(main, ["create-tutorial", "zero-to-hero"])

            assert result.exit_code == 0, result.output
            tutorial = root / "tutorials" / "zero-to-hero"
            commands = [command for command, _ in run.calls]
            assert commands == [
                ["git", "checkout", "-b", "feat/tutorial-zero-to-hero"],
                ["uv", "add", "--dev", "pytest", "pytest-asyncio"],
                ["uv", "add", "websockets"],
            ]
            assert run.calls[1][1] == tutorial
            assert run.calls[2][1] == tutorial
            assert "Created branch: feat/tutorial-zero-to-hero" in result.output

    def test_git_failure_is_not_fatal(self, runner):
        run = fake_run({"git": 128})
        with runner.isolated_filesystem() as fs:
            make_repository(pathlib.Path(fs))

            with patch("subprocess.run", run):
                result = runner.invoke(main, ["create-tutorial", "zero-to-hero"])

            assert result.exit_code == 0, result.output
            assert "Failed to create git branch" in result.output

    def test_package_manager_failure_exits_nonzero(self, runner):
        run = fake_run({"uv": 2})
        with runner.isolated_filesystem() as fs:
            root = pathlib.Path(fs)
            make_repository(root)

            with patch("subprocess.run", run):
                result = runner.invoke(
                    main, ["create-tutorial", "zero-to-hero", "--no-branch"]
                )

            assert result.exit_code == 1
            assert "uv add --dev" in result.output
            # No rollback: what was scaffolded stays.
            assert (root / "tutorials" / "zero-to-hero" / "README.md").exists()

    def test_missing_package_manager(self, runner):
        with runner.isolated_filesystem() as fs:
            make_repository(pathlib.Path(fs))

            with patch("subprocess.run", side_effect=FileNotFoundError("uv")):
                result = runner.invoke(
                    main, ["create-tutorial", "zero-to-hero", "--no-branch"]
                )

            assert result.exit_code == 1
            assert "uv not found" in result.output


class TestPreviewCommand:
    def test_preview_uses_port_from_environment(self, runner, tmp_path):
        with patch("cookbook_cli.PreviewServer") as mock_server:
            mock_server.return_value.serve = AsyncMock()

            result = runner.invoke(
                main, ["preview", str(tmp_path), "--no-open"], env={"PORT": "4321"}
            )

            assert result.exit_code == 0, result.output
            config = mock_server.call_args[0][0]
            assert config.port == 4321
            assert config.open_url is False
            assert config.tutorial_dir == tmp_path.resolve()
            assert "Tutorial Preview Server" in result.output
            mock_server.return_value.serve.assert_awaited_once()

    def test_preview_defaults_to_current_directory(self, runner):
        with runner.isolated_filesystem() as fs:
            with patch("cookbook_cli.PreviewServer") as mock_server:
                mock_server.return_value.serve = AsyncMock()

                result = runner.invoke(main, ["preview", "--no-open"], env={"PORT": None})

                assert result.exit_code == 0, result.output
                config = mock_server.call_args[0][0]
                assert config.tutorial_dir == pathlib.Path(fs).resolve()
                assert config.port == 3000

    def test_preview_interrupt_exits_cleanly(self, runner, tmp_path):
        with patch("cookbook_cli.PreviewServer") as mock_server:
            mock_server.return_value.serve = AsyncMock(side_effect=KeyboardInterrupt)

            result = runner.invoke(main, ["preview", str(tmp_path), "--no-open"])

            assert result.exit_code == 0
            assert "Shutting down preview server" in result.output

    def test_preview_rejects_missing_directory(self, runner, tmp_path):
        result = runner.invoke(main, ["preview", str(tmp_path / "missing")])
        assert result.exit_code != 0
        assert "does not exist" in result.output
