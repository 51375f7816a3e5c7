"""Tests for FileStoreCompleter."""

import pytest
from prompt_toolkit.document import Document

from cli.completer import FileStoreCompleter
from cli.constants import COMMANDS


@pytest.fixture
def work_dir(tmp_path):
    """
    Create a temporary directory with files to upload.

    Returns:
        Path to the temporary directory
    """
    (tmp_path / "document.txt").write_text("content")
    (tmp_path / "data.csv").write_text("content")
    (tmp_path / ".hidden").write_text("content")
    reports = tmp_path / "reports"
    reports.mkdir()
    (reports / "q1.pdf").write_text("content")
    return tmp_path


@pytest.fixture
def completer(work_dir):
    return FileStoreCompleter(base_dir=work_dir)


def get_completions_list(completer, text):
    """Helper to get list of completion texts from completer."""
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


class TestCommandCompletion:
    """Tests for command name completion."""

    def test_empty_input_shows_all_commands(self, completer):
        completions = get_completions_list(completer, "")
        assert completions == COMMANDS

    def test_partial_command_filters(self, completer):
        completions = get_completions_list(completer, "li")
        assert completions == ["list", "list-project"]

    def test_uppercase_partial_matches(self, completer):
        assert get_completions_list(completer, "REN") == ["renewable"]


class TestUploadPathCompletion:
    """Tests for local path completion after 'upload'."""

    def test_lists_visible_entries(self, completer):
        completions = get_completions_list(completer, "upload ")
        assert completions == ["data.csv", "document.txt", "reports/"]

    def test_filters_by_prefix(self, completer):
        assert get_completions_list(completer, "upload do") == ["document.txt"]

    def test_descends_into_directories(self, completer):
        assert get_completions_list(completer, "upload reports/") == ["reports/q1.pdf"]

    def test_missing_directory_yields_nothing(self, completer):
        assert get_completions_list(completer, "upload nowhere/") == []

    def test_options_not_completed(self, completer):
        assert get_completions_list(completer, "upload --ty") == []

    def test_other_commands_not_completed(self, completer):
        assert get_completions_list(completer, "delete ") == []
