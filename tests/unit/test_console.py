"""Tests for console module."""

from io import StringIO

from rich.console import Console

from flake_info.console import console, err_console, sources_table, success
from flake_info.models.source import Git, Github, Nixpkgs


def _render(renderable) -> str:
    output = StringIO()
    Console(file=output, width=200).print(renderable)
    return output.getvalue()


class TestConsole:
    """Test console instances and helpers."""

    def test_consoles_are_rich_consoles(self):
        """Test that console and err_console are Rich Console instances."""
        assert isinstance(console, Console)
        assert isinstance(err_console, Console)
        assert err_console.stderr is True

    def test_success_prints_message(self):
        """Test that success() prints the message."""
        output = StringIO()
        success("Wrote 3 sources", console=Console(file=output, force_terminal=True))
        assert "Wrote 3 sources" in output.getvalue()


class TestSourcesTable:
    """Test the sources table."""

    def test_one_row_per_source(self):
        """Every source is listed with its origin and reference."""
        table = sources_table(
            [
                Github(owner="NixOS", repo="nix"),
                Git(url="https://x/y.git"),
                Nixpkgs(channel="unstable", git_ref="deadbeef"),
            ],
            title="sources.toml",
        )

        assert table.row_count == 3
        text = _render(table)
        assert "NixOS/nix" in text
        assert "github:NixOS/nix" in text
        assert "https://x/y.git" in text
        assert "nixos-unstable" in text
        assert "tarball/deadbeef" in text
