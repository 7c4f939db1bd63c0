import pytest

from hadmolee.data_set import (
    DataImportError,
    DataSet,
    DataType,
    check,
    hadmolee_dir,
    import_data,
    import_transposed,
    reshape_data,
)

TABLE = "# header\n1.0 2.0 3.0\n\n4.5 5.5 6.5\n#note\n7 8 9\n"


@pytest.fixture
def table_dir(tmp_path):
    (tmp_path / "table.dat").write_text(TABLE)
    return tmp_path


def test_hadmolee_dir_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("HADMOLEE", str(tmp_path))
    assert hadmolee_dir() == str(tmp_path)


@pytest.mark.parametrize("value", [None, ""])
def test_hadmolee_dir_missing(monkeypatch, value):
    if value is None:
        monkeypatch.delenv("HADMOLEE", raising=False)
    else:
        monkeypatch.setenv("HADMOLEE", value)
    with pytest.raises(DataImportError):
        hadmolee_dir()


def test_import_data_columns(table_dir):
    data = import_data("table.dat", 3, base_dir=table_dir)
    assert data == [[1.0, 4.5, 7.0], [2.0, 5.5, 8.0], [3.0, 6.5, 9.0]]


def test_import_data_leading_slash_and_env(monkeypatch, table_dir):
    monkeypatch.setenv("HADMOLEE", str(table_dir))
    assert import_data("/table.dat", 3) == import_data("table.dat", 3, base_dir=table_dir)


def test_import_data_fewer_columns(table_dir):
    assert import_data("table.dat", 1, base_dir=table_dir) == [[1.0, 4.5, 7.0]]


def test_import_data_missing_values_are_zero(tmp_path):
    (tmp_path / "short.dat").write_text("1 2\n")
    assert import_data("short.dat", 3, base_dir=tmp_path) == [[1.0], [2.0], [0.0]]


def test_import_data_missing_file(tmp_path):
    with pytest.raises(DataImportError):
        import_data("nope.dat", 2, base_dir=tmp_path)


def test_import_transposed(tmp_path):
    (tmp_path / "rows.dat").write_text("1 2 3 4\n5 6\n")
    assert import_transposed("rows.dat", 2, base_dir=tmp_path) == [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0]]


def test_import_transposed_comment_takes_row(tmp_path):
    (tmp_path / "rows.dat").write_text("# skip\n1 2\n")
    assert import_transposed("rows.dat", 2, base_dir=tmp_path) == [[], [1.0, 2.0]]


def test_import_transposed_missing_file(tmp_path):
    with pytest.raises(DataImportError):
        import_transposed("nope.dat", 2, base_dir=tmp_path)


def test_reshape_data_picks_columns(table_dir):
    data = import_data("table.dat", 3, base_dir=table_dir)
    assert reshape_data(data, [2, 0]) == [data[2], data[0]]


def test_check_equal_lengths():
    assert check([[1.0, 2.0], [3.0, 4.0]], "ok") == 2


def test_check_mismatch_warns_and_returns_zero():
    with pytest.warns(UserWarning, match="bad"):
        assert check([[1.0, 2.0], [3.0]], "bad") == 0


def test_data_set_defaults_are_independent():
    first, second = DataSet(), DataSet()
    first.w.append(1.0)
    first.werr[0].append(0.1)
    assert second.w == [] and second.werr == ([], [])
    assert first.id == "data_set"
    assert first.type is DataType.INTEGRATED