import pytest
from stream_readers import KeystreamReader, SeededReader

from passit import reader as reader_module
from passit.config import settings
from passit.words import EFF_LARGE, EFF_SHORT1

@pytest.fixture(autouse=True)
def deterministic_reads(monkeypatch):
    """Keep outputs pinned to the stream: no extra byte on first use."""
    monkeypatch.setattr(settings, "maybe_read_byte", False)
    monkeypatch.setattr(reader_module, "_maybe_read_done", False)

@pytest.fixture
def test_rand():
    return KeystreamReader()

@pytest.fixture
def seeded_rand():
    return SeededReader(0)

@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the embedded lists at an empty temporary directory."""
    monkeypatch.setattr(settings, "data_dir", tmp_path)
    return tmp_path

# Entries the zero keystream selects from the EFF lists, by index. The
# remaining entries of the lists below are fillers.
EFF_LARGE_PICKS = {
    5318: "reprint",
    7691: "wool",
    4463: "pantry",
    7372: "unworried",
    4040: "mummify",
    7482: "veneering",
    5738: "securely",
    4043: "munchkin",
}
EFF_SHORT1_PICKS = {
    134: "bush",
    1211: "vapor",
    575: "issue",
    892: "ruby",
    152: "carol",
    1002: "sleep",
    554: "hula",
    155: "case",
}

def _filler(i):
    letters = ""
    for _ in range(3):
        i, d = divmod(i, 26)
        letters = chr(ord("a") + d) + letters
    return f"filler{letters}"

def _install_list(embedded, data_dir, monkeypatch, size, picks):
    monkeypatch.setattr(embedded, "_list", None)
    words = [picks.get(i, _filler(i)) for i in range(size)]
    (data_dir / embedded.filename).write_text("\n".join(words) + "\n", encoding="utf-8")
    return embedded

@pytest.fixture
def eff_large(data_dir, monkeypatch):
    """A 7,776 word list in place of the EFF large list."""
    return _install_list(EFF_LARGE, data_dir, monkeypatch, 7776, EFF_LARGE_PICKS)

@pytest.fixture
def eff_short1(data_dir, monkeypatch):
    """A 1,296 word list in place of the EFF short list #1."""
    return _install_list(EFF_SHORT1, data_dir, monkeypatch, 1296, EFF_SHORT1_PICKS)
