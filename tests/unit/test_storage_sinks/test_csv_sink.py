"""
Unit tests for the CSV result sink and the shared target protocol.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from joularpy.storage.csv_sink import CsvResultSink
from joularpy.validation import ResultSinkError


@pytest.mark.unit
class TestCsvResultSink:
    """Test cases for CsvResultSink."""

    def test_resolve_relative_name(self, temp_dir):
        """Relative names land in output_dir with the .csv extension appended."""
        sink = CsvResultSink(temp_dir)
        assert sink.resolve("joularJX-1-all-methods-energy") == temp_dir / "joularJX-1-all-methods-energy.csv"

    def test_resolve_keeps_dotted_names(self, temp_dir):
        """Qualified method names must not lose their last segment to a suffix swap."""
        sink = CsvResultSink(temp_dir)
        path = sink.resolve("joularJX-1-com.acme.Foo.bar-evolution")
        assert path.name == "joularJX-1-com.acme.Foo.bar-evolution.csv"

    def test_resolve_absolute_name(self, temp_dir):
        sink = CsvResultSink("/somewhere/else")
        assert sink.resolve(temp_dir / "x") == temp_dir / "x.csv"

    def test_write_rows(self, temp_dir, test_utils):
        """One line per row, key first, no header."""
        sink = CsvResultSink(temp_dir)
        with sink.target("data") as out:
            out.write("foo()", 1.234)
            out.write("bar()", 0.5)

        rows = test_utils.read_csv_rows(temp_dir / "data.csv")
        assert [key for key, _ in rows] == ["foo()", "bar()"]
        assert [float(value) for _, value in rows] == [1.234, 0.5]

    def test_read_target(self, temp_dir):
        sink = CsvResultSink(temp_dir)
        with sink.target("data") as out:
            out.write("1000", 0.1)
            out.write("2000", 0.2)

        assert sink.read_target("data") == [("1000", 0.1), ("2000", 0.2)]

    def test_empty_target_creates_empty_file(self, temp_dir):
        sink = CsvResultSink(temp_dir)
        with sink.target("empty"):
            pass

        assert (temp_dir / "empty.csv").exists()
        assert sink.read_target("empty") == []

    def test_reopening_truncates(self, temp_dir):
        """Saving the same target twice overwrites rather than appends."""
        sink = CsvResultSink(temp_dir)
        with sink.target("data") as out:
            out.write("a", 1.0)
            out.write("b", 2.0)
        with sink.target("data") as out:
            out.write("c", 3.0)

        assert sink.read_target("data") == [("c", 3.0)]

    def test_nested_folder_written_when_present(self, temp_dir):
        (temp_dir / "nested" / "dir").mkdir(parents=True)
        sink = CsvResultSink(temp_dir)
        with sink.target("nested/dir/data") as out:
            out.write("a", 1.0)

        assert (temp_dir / "nested" / "dir" / "data.csv").exists()

    def test_missing_nested_folder_fails(self, temp_dir):
        """Only output_dir is created; a name containing a slash does not grow folders."""
        sink = CsvResultSink(temp_dir)

        with pytest.raises(ResultSinkError):
            with sink.target("nested/data") as out:
                out.write("a", 1.0)

        assert not (temp_dir / "nested").exists()
        assert sink.current_target is None

    def test_keys_with_commas_survive(self, temp_dir):
        sink = CsvResultSink(temp_dir)
        with sink.target("data") as out:
            out.write("Map.put(Object,Object)", 4.0)

        assert sink.read_target("data") == [("Map.put(Object,Object)", 4.0)]


@pytest.mark.unit
class TestTargetProtocol:
    """The single target slot and its scoped release."""

    def test_second_open_target_rejected(self, temp_dir):
        sink = CsvResultSink(temp_dir)
        sink.set_target("first")

        with pytest.raises(ResultSinkError) as excinfo:
            sink.set_target("second")

        assert "still open" in str(excinfo.value)

    def test_write_without_target_rejected(self, temp_dir):
        sink = CsvResultSink(temp_dir)
        with pytest.raises(ResultSinkError):
            sink.write("foo()", 1.0)

    def test_result_sink_error_is_oserror(self, temp_dir):
        sink = CsvResultSink(temp_dir)
        with pytest.raises(OSError):
            sink.write("foo()", 1.0)

    def test_close_without_target_is_noop(self, temp_dir):
        sink = CsvResultSink(temp_dir)
        sink.close_target()
        assert sink.current_target is None

    def test_exception_in_block_releases_slot(self, temp_dir):
        """A failing writer loop frees the slot and leaves no file behind."""
        sink = CsvResultSink(temp_dir)

        with pytest.raises(RuntimeError):
            with sink.target("broken") as out:
                out.write("a", 1.0)
                raise RuntimeError("boom")

        assert sink.current_target is None
        assert not (temp_dir / "broken.csv").exists()

        # Slot is usable again
        with sink.target("after") as out:
            out.write("b", 2.0)
        assert sink.read_target("after") == [("b", 2.0)]

    def test_write_failure_wrapped_and_slot_released(self, temp_dir):
        sink = CsvResultSink(temp_dir)

        with patch.object(CsvResultSink, "_write_rows", side_effect=PermissionError("denied")):
            with pytest.raises(ResultSinkError) as excinfo:
                with sink.target("data") as out:
                    out.write("a", 1.0)

        assert "denied" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, PermissionError)
        assert sink.current_target is None

    def test_target_exists(self, temp_dir):
        sink = CsvResultSink(temp_dir)
        assert not sink.target_exists("data")
        with sink.target("data") as out:
            out.write("a", 1.0)
        assert sink.target_exists("data")

    def test_read_missing_target(self, temp_dir):
        sink = CsvResultSink(temp_dir)
        with pytest.raises(ResultSinkError):
            sink.read_target("missing")

    def test_output_dir_not_created_until_write(self, temp_dir):
        out_dir = temp_dir / "later"
        sink = CsvResultSink(out_dir)
        assert not out_dir.exists()

        with sink.target("data") as out:
            out.write("a", 1.0)
        assert Path(out_dir / "data.csv").exists()
