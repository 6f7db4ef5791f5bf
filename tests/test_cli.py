"""
Tests for the ner.py command-line driver.

Runs the full pipeline over temporary descriptor and content files:
1. Result lines written to a file or to stdout
2. Progress, statistics and timing output
3. Exit status for usage, input and conflict errors
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from ner import main

DESCRIPTORS = """<?xml version="1.0"?>
<DescriptorRecordSet>
  <DescriptorRecord>
    <DescriptorUI>D1</DescriptorUI>
    <TermList><Term><String>Breast Neoplasms</String></Term></TermList>
  </DescriptorRecord>
  <DescriptorRecord>
    <DescriptorUI>D2</DescriptorUI>
    <TermList>
      <Term><String>Neoplasms</String></Term>
      <Term><String>Tumors</String></Term>
    </TermList>
  </DescriptorRecord>
</DescriptorRecordSet>
"""


@pytest.fixture
def inputs(tmp_path):
    descriptor_path = tmp_path / "desc.xml"
    descriptor_path.write_text(DESCRIPTORS, encoding="utf-8")
    content_path = tmp_path / "content.tsv"
    content_path.write_text(
        "1\tBreast Neoplasms are common; neoplasms of the liver differ.\n"
        "2\tNo entities here.\n"
        "3\tTUMORS\n",
        encoding="utf-8",
    )
    return descriptor_path, content_path


def test_cli_writes_results_file(inputs, tmp_path):
    """Test that recognized matches are written as tab-separated lines."""
    descriptor_path, content_path = inputs
    output_path = tmp_path / "out.tsv"

    assert main([str(descriptor_path), str(content_path), str(output_path), "-q"]) == 0

    assert output_path.read_text(encoding="utf-8") == (
        "1\tD1\t0\t16\n" "1\tD2\t29\t9\n" "3\tD2\t0\t6\n"
    )


def test_cli_writes_to_stdout(inputs, capsys):
    """Test that results go to stdout when no output file is given."""
    descriptor_path, content_path = inputs

    assert main([str(descriptor_path), str(content_path), "-q"]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["1\tD1\t0\t16", "1\tD2\t29\t9", "3\tD2\t0\t6"]
    assert captured.err == ""


def test_cli_progress_and_stats(inputs, tmp_path, capsys):
    """Test progress, statistics and timing output on stderr."""
    descriptor_path, content_path = inputs
    output_path = tmp_path / "out.tsv"

    assert (
        main(
            [
                str(descriptor_path),
                str(content_path),
                str(output_path),
                "--show-stats",
                "--show-timing",
            ]
        )
        == 0
    )

    err = capsys.readouterr().err
    assert "Loading descriptor list..." in err
    assert "Found 3 matches across 3 records" in err
    assert "D2: 2" in err
    assert "Recognition time:" in err


def test_cli_version(capsys):
    """Test the --version flag."""
    assert main(["--version"]) == 0
    assert "simplener:" in capsys.readouterr().out


def test_cli_requires_inputs():
    """Test that missing positional arguments are a usage error."""
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


def test_cli_malformed_content(inputs, tmp_path):
    """Test that a malformed content file exits with status 1."""
    descriptor_path, _ = inputs
    content_path = tmp_path / "bad.tsv"
    content_path.write_text("not-an-id\ttext\n", encoding="utf-8")

    assert main([str(descriptor_path), str(content_path), "-q"]) == 1


def test_cli_missing_file(inputs, tmp_path):
    """Test that an unreadable descriptor file exits with status 1."""
    _, content_path = inputs
    assert main([str(tmp_path / "missing.xml"), str(content_path), "-q"]) == 1


def test_cli_strict_conflict(tmp_path, caplog):
    """Test that --strict rejects a term shared by two descriptors."""
    descriptor_path = tmp_path / "dup.xml"
    descriptor_path.write_text(
        "<DescriptorRecordSet>"
        "<DescriptorRecord><DescriptorUI>D1</DescriptorUI>"
        "<TermList><Term><String>Tumor</String></Term></TermList></DescriptorRecord>"
        "<DescriptorRecord><DescriptorUI>D2</DescriptorUI>"
        "<TermList><Term><String>tumor</String></Term></TermList></DescriptorRecord>"
        "</DescriptorRecordSet>",
        encoding="utf-8",
    )
    content_path = tmp_path / "content.tsv"
    content_path.write_text("1\ttumor\n", encoding="utf-8")
    output_path = tmp_path / "out.tsv"

    assert main([str(descriptor_path), str(content_path), str(output_path), "-q", "--strict"]) == 1
    assert "Term 'tumor' already exists in the dictionary" in caplog.messages
    assert main([str(descriptor_path), str(content_path), str(output_path), "-q"]) == 0
    assert output_path.read_text(encoding="utf-8") == "1\tD2\t0\t5\n"
