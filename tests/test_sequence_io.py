from pathlib import Path

import pytest

from seqdiffpack.compare import ComparisonConfigError, SequenceFormatError
from seqdiffpack.io import read_sequence

EXAMPLES = Path(__file__).resolve().parents[1] / "examples" / "sequences"


def test_read_json_sequence() -> None:
    assert read_sequence(EXAMPLES / "letters_left.json") == ["A", "B", "C", "D", "E"]


def test_read_json_records() -> None:
    records = read_sequence(EXAMPLES / "orders_left.json")

    assert [record["id"] for record in records] == [1, 2, 3]


def test_read_lines_sequence() -> None:
    assert read_sequence(EXAMPLES / "words_right.txt", input_format="lines") == [
        "alpha",
        "gamma",
        "beta",
        "delta",
    ]


def test_read_lines_normalizes_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"one\r\ntwo\r\n")

    assert read_sequence(path, input_format="lines") == ["one", "two"]


def test_json_sequence_must_be_array(tmp_path: Path) -> None:
    path = tmp_path / "object.json"
    path.write_text('{"a": 1}', encoding="utf-8")

    with pytest.raises(SequenceFormatError, match="must be a top-level array"):
        read_sequence(path)


def test_invalid_json_sequence(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[1, 2", encoding="utf-8")

    with pytest.raises(SequenceFormatError, match="Invalid JSON sequence"):
        read_sequence(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_sequence(tmp_path / "absent.json")


def test_unknown_format(tmp_path: Path) -> None:
    path = tmp_path / "values.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ComparisonConfigError, match="Unsupported input format"):
        read_sequence(path, input_format="csv")
