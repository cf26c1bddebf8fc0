"""Tests unitarios para BatchDriver y la lectura/escritura de ficheros."""

import json
from pathlib import Path

import pytest

from imdb_metadata.assembler import RecordAssembler
from imdb_metadata.batch import BatchDriver
from imdb_metadata.exceptions import NotFoundError
from imdb_metadata.items import MovieItem
from imdb_metadata.storage import JsonRecordWriter, read_titles

MISSING_SEARCH_URL = "https://www.imdb.com/find/?q=zzqqxx&s=tt&ttype=ft"


@pytest.fixture
def pages(search_url, search_html, detail_url, detail_html, empty_search_html):
    return {
        search_url: search_html,
        detail_url: detail_html,
        MISSING_SEARCH_URL: empty_search_html,
    }


@pytest.mark.unit
class TestReadTitles:
    """Tests read_titles."""

    @staticmethod
    def test_reads_in_order(movies_file: Path) -> None:
        assert read_titles(str(movies_file)) == ["Avatar", "zzqqxx"]

    @staticmethod
    def test_entry_without_movie_name(tmp_path: Path) -> None:
        path = tmp_path / "movies.json"
        path.write_text(json.dumps([{"movie_name": "Avatar"}, {"name": "x"}]), encoding="utf-8")
        with pytest.raises(ValueError, match="entrada 2"):
            read_titles(str(path))

    @staticmethod
    def test_not_a_list(tmp_path: Path) -> None:
        path = tmp_path / "movies.json"
        path.write_text(json.dumps({"movie_name": "Avatar"}), encoding="utf-8")
        with pytest.raises(ValueError):
            read_titles(str(path))


@pytest.mark.unit
class TestJsonRecordWriter:
    """Tests JsonRecordWriter."""

    @staticmethod
    def test_writes_file_named_by_position(tmp_path: Path) -> None:
        writer = JsonRecordWriter(str(tmp_path / "out"))
        item = MovieItem(position=7, url="u", title="It's", directors=["A"])

        path = writer.write(item)

        assert Path(path).name == "7.json"
        text = Path(path).read_text(encoding="utf-8")
        data = json.loads(text)
        assert data["title"] == "It's"
        assert data["directors"] == ["A"]
        assert "position" not in data
        assert "\n  " in text  # indentado

    @staticmethod
    def test_item_without_position_raises(tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            JsonRecordWriter(str(tmp_path)).write(MovieItem(url="u"))


@pytest.mark.unit
class TestBatchDriver:
    """Tests BatchDriver."""

    @staticmethod
    def test_skip_and_continue(fake_fetch, pages, tmp_path: Path, expected_record: dict) -> None:
        """Test un título sin resultados no se escribe y el lote sigue."""
        driver = BatchDriver(
            RecordAssembler(fake_fetch(pages)),
            JsonRecordWriter(str(tmp_path)),
        )

        report = driver.run(["zzqqxx", "Avatar"])

        assert report.succeeded == [2]
        assert isinstance(report.failed[1], NotFoundError)
        assert not (tmp_path / "1.json").exists()
        saved = json.loads((tmp_path / "2.json").read_text(encoding="utf-8"))
        assert saved == expected_record

    @staticmethod
    def test_halt_on_failure(fake_fetch, pages, tmp_path: Path) -> None:
        """Test comportamiento de referencia: el primer fallo detiene el lote."""
        driver = BatchDriver(
            RecordAssembler(fake_fetch(pages)),
            JsonRecordWriter(str(tmp_path)),
            halt_on_failure=True,
        )

        with pytest.raises(NotFoundError):
            driver.run(["Avatar", "zzqqxx", "Avatar"])

        assert (tmp_path / "1.json").exists()
        assert not (tmp_path / "2.json").exists()
        assert not (tmp_path / "3.json").exists()

    @staticmethod
    def test_transport_error_is_recorded(fake_fetch, tmp_path: Path) -> None:
        driver = BatchDriver(RecordAssembler(fake_fetch({})), JsonRecordWriter(str(tmp_path)))

        report = driver.run(["Avatar"])

        assert report.succeeded == []
        assert list(report.failed) == [1]
        assert list(tmp_path.iterdir()) == []
