#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Test the command-line interface
"""

import json
import os

import pytest

from DirSearch.main import main


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "cats.xml").write_text("<doc><p>cat cat cat</p></doc>", encoding="utf-8")
    (docs / "pets.xhtml").write_text("<html><p>cat</p><p>dog dog</p></html>", encoding="utf-8")
    (docs / "birds.txt").write_text("bird Bird BIRD cat", encoding="utf-8")
    (docs / "image.png").write_bytes(b"\x89PNG")
    return tmp_path


def result_lines(out):
    return [line for line in out.splitlines() if line.startswith("-> ")]


def test_index_writes_default_file(workdir, capsys):
    assert main(["index", "docs"]) == 0

    index_path = workdir / "index.json"
    data = json.loads(index_path.read_text(encoding="utf-8"))
    assert data == {
        os.path.join("docs", "birds.txt"): {"bird": 3, "cat": 1},
        os.path.join("docs", "cats.xml"): {"cat": 3},
        os.path.join("docs", "pets.xhtml"): {"cat": 1, "dog": 2},
    }

    err = capsys.readouterr().err
    assert "Indexed 3 files successfully" in err
    assert "Written to index.json." in err
    assert "WARN" in err


def test_index_and_search_with_explicit_path(workdir, capsys):
    assert main(["index", "docs", "custom.json"]) == 0
    assert (workdir / "custom.json").exists()
    capsys.readouterr()

    assert main(["search", "dog", "custom.json"]) == 0
    captured = capsys.readouterr()
    assert "Found 1 results:" in captured.out
    assert result_lines(captured.out) == ["-> " + os.path.join("docs", "pets.xhtml")]
    assert "Loaded 3 files from custom.json" in captured.err


def test_search_ranks_best_first(workdir, capsys):
    main(["index", "docs"])
    capsys.readouterr()

    assert main(["search", "bird dog"]) == 0
    out = capsys.readouterr().out
    assert "Found 2 results:" in out
    # bird: 3 * ln(3) ~ 3.30, dog: 2 * ln(3) ~ 2.20
    assert result_lines(out) == [
        "-> " + os.path.join("docs", "birds.txt"),
        "-> " + os.path.join("docs", "pets.xhtml"),
    ]


def test_search_without_matches(workdir, capsys):
    main(["index", "docs"])
    capsys.readouterr()

    # cat is in every document, Dog is never indexed with a capital letter
    assert main(["search", "cat Dog"]) == 0
    out = capsys.readouterr().out
    assert "Found 0 results:" in out
    assert result_lines(out) == []


def test_search_shows_at_most_top_results(workdir, capsys):
    docs = workdir / "many"
    docs.mkdir()
    for i in range(8):
        (docs / f"doc{i}.txt").write_text("needle " * (i + 1), encoding="utf-8")
    for i in range(14):
        (docs / f"other{i}.txt").write_text("haystack", encoding="utf-8")
    main(["index", "many"])
    capsys.readouterr()

    # idf = ln(22 / 8) > 1, so every needle count gives a distinct integer score
    assert main(["search", "needle"]) == 0
    out = capsys.readouterr().out
    assert "Found 8 results:" in out
    assert result_lines(out) == ["-> " + os.path.join("many", f"doc{i}.txt") for i in (7, 6, 5, 4, 3)]

    assert main(["search", "needle", "--top", "2", "--tie-break", "exact"]) == 0
    out = capsys.readouterr().out
    assert result_lines(out) == ["-> " + os.path.join("many", f"doc{i}.txt") for i in (7, 6)]


def test_config_file_sets_defaults(workdir, capsys):
    (workdir / "settings.json").write_text(
        '{"index": {"default_path": "from_config.json"}, "search": {"top_k": 1}}', encoding="utf-8"
    )
    assert main(["--config", "settings.json", "index", "docs"]) == 0
    assert (workdir / "from_config.json").exists()
    capsys.readouterr()

    assert main(["--config", "settings.json", "search", "bird dog"]) == 0
    assert len(result_lines(capsys.readouterr().out)) == 1


def test_no_subcommand(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "no subcommand provided" in err
    assert "usage:" in err


def test_unknown_subcommand(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["frobnicate"])
    assert exc_info.value.code == 2


def test_missing_arguments(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["search"])
    assert exc_info.value.code == 2


def test_index_missing_directory(workdir, capsys):
    assert main(["index", "nowhere"]) == 1
    assert "ERROR" in capsys.readouterr().err
    assert not (workdir / "index.json").exists()


def test_index_unwritable_output(workdir, capsys):
    assert main(["index", "docs", os.path.join("missing", "index.json")]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_search_missing_index(workdir, capsys):
    assert main(["search", "cat"]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_search_corrupt_index(workdir, capsys):
    (workdir / "index.json").write_text("{broken", encoding="utf-8")
    assert main(["search", "cat"]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_invalid_config(workdir, capsys):
    (workdir / "config.json").write_text("{broken", encoding="utf-8")
    assert main(["search", "cat"]) == 1
    assert "ERROR" in capsys.readouterr().err


@pytest.mark.parametrize("content", [
    '{"search": {"top_k": "3"}}',
    '{"search": {"top_k": -1}}',
    '{"index": {"default_path": null}}',
])
def test_invalid_config_values(workdir, capsys, content):
    main(["index", "docs"])
    capsys.readouterr()

    (workdir / "config.json").write_text(content, encoding="utf-8")
    assert main(["search", "dog"]) == 1
    captured = capsys.readouterr()
    assert "ERROR" in captured.err
    assert result_lines(captured.out) == []
